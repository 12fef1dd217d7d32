import importlib
from typing import Any, Callable, TypeVar

from pydantic import BaseModel


def resolve_callable(fqn: str) -> Callable:
    """Imports `mymod.submod.function` and returns the function"""
    module_name, _, function_name = fqn.rpartition(".")
    if not module_name:
        raise ValueError(f"not a fully qualified name: {fqn}")
    module = importlib.import_module(module_name)
    func = getattr(module, function_name)
    if not callable(func):
        raise TypeError(f"{fqn} is not callable")
    return func


def exit_status(v: Any) -> int:
    """Converts a callable's return value into an exit status"""
    if v is None:
        return 0
    elif isinstance(v, int):
        # NOTE includes bools
        return int(v)
    else:
        raise TypeError(f"expected an int exit status, got {type(v).__name__}")


def exit_code(e: SystemExit) -> int:
    """What the interpreter would exit with, had the SystemExit not been caught"""
    if e.code is None:
        return 0
    elif isinstance(e.code, int):
        return e.code
    else:
        return 1


B = TypeVar("B", bound=BaseModel)
def pyd_replace(model: B, **kwargs) -> B:
    """Like dataclasses.replace but for pydantic"""
    return model.model_copy(update=kwargs)
