"""
Defines the Registry protocol -- resolving a name into an invokable unit and invoking it --
and a dict-backed implementation thereof
"""

import logging
import threading
from typing import Callable, Iterable, Protocol, runtime_checkable

from deferrun.low.func import resolve_callable

logger = logging.getLogger(__name__)

Action = Callable[[], object]


class UnknownActionError(KeyError):
    pass


@runtime_checkable
class Registry(Protocol):
    def invoke(self, name: str) -> None:
        """Resolve the `name` and invoke it. Errors propagate to the caller"""
        raise NotImplementedError


class ActionRegistry:
    """Named zero-argument callables. Entrypoints (fqn strings) are resolved on first invocation"""

    def __init__(self, actions: dict[str, Action] | None = None) -> None:
        self.lock = threading.Lock()
        self.actions: dict[str, Action | str] = dict(actions) if actions else {}

    def register(self, name: str, action: Action) -> None:
        if not callable(action):
            raise TypeError(f"action {name} is not callable")
        with self.lock:
            if name in self.actions:
                logger.debug(f"replacing action {name}")
            self.actions[name] = action

    def register_entrypoint(self, name: str, entrypoint: str) -> None:
        with self.lock:
            self.actions[name] = entrypoint

    def action(self, name: str | None = None) -> Callable[[Action], Action]:
        """Decorator form of `register`, defaulting the name to the function's"""
        def wrapper(f: Action) -> Action:
            self.register(name or f.__name__, f)
            return f
        return wrapper

    def resolve(self, name: str) -> Action:
        # NOTE importing happens outside the lock, as the imported module may itself register actions
        with self.lock:
            if name not in self.actions:
                raise UnknownActionError(name)
            action = self.actions[name]
        if not isinstance(action, str):
            return action
        resolved = resolve_callable(action)
        with self.lock:
            # keep whatever got registered meanwhile, unless it is still the same entrypoint
            if self.actions.get(name) == action:
                self.actions[name] = resolved
                return resolved
        return self.resolve(name)

    def invoke(self, name: str) -> None:
        action = self.resolve(name)
        logger.debug(f"invoking action {name}")
        action()

    def names(self) -> Iterable[str]:
        with self.lock:
            return list(self.actions.keys())

    def __contains__(self, name: object) -> bool:
        with self.lock:
            return name in self.actions
