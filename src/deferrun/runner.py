"""
The deferred runner -- runs a Job at most once, either at initialization or on first demand,
surrounded by pre and post actions resolved by name from a Registry. The job's result is
memoized: every subsequent `fetch_result` returns it without side effects.

Failures are not memoized -- if the job raises, a later `fetch_result` runs it again.
"""

# NOTE about the two result slots: `result` is set as soon as the job returns, while `published`
# only after the post actions finish. Callers outside the lock read `published` only, so that
# post actions happen-before the result becomes visible to them. Should a post action fail, the
# job is considered done -- the next caller takes `result` under the lock and publishes it

import logging
import threading
from time import perf_counter_ns

from deferrun.job import Job
from deferrun.low.core import RunnerSettings, RunnerState
from deferrun.registry import Registry

logger = logging.getLogger(__name__)


def _action_names(names: tuple) -> list[str]:
    for name in names:
        if not isinstance(name, str):
            raise TypeError(f"action names must be str, got {type(name).__name__}: {name!r}")
    return list(names)


class DeferredRunner:
    def __init__(self, job: Job, settings: RunnerSettings | None = None, registry: Registry | None = None) -> None:
        self.job = job
        self.run_at_startup = False
        self.pre_actions: list[str] = []
        self.post_actions: list[str] = []
        self.registry: Registry | None = None

        self.state = RunnerState.unconfigured
        self.initialized = False
        self.lock = threading.Lock()
        self.result: int | None = None
        self.published: int | None = None

        if settings is not None:
            self.configure(settings.run_at_startup)
            self.set_pre_actions(*settings.pre_actions)
            self.set_post_actions(*settings.post_actions)
        if registry is not None:
            self.bind_registry(registry)

    def _configuring(self) -> None:
        if self.initialized:
            raise RuntimeError("runner already initialized, configuration is read-only")
        if self.result is not None or self.state in (RunnerState.triggered, RunnerState.completed):
            raise RuntimeError(f"runner already {self.state.value}, configuration is read-only")
        self.state = RunnerState.configured

    def configure(self, run_at_startup: bool) -> None:
        self._configuring()
        self.run_at_startup = run_at_startup

    def set_pre_actions(self, *names: str) -> None:
        checked = _action_names(names)
        self._configuring()
        self.pre_actions = checked

    def set_post_actions(self, *names: str) -> None:
        checked = _action_names(names)
        self._configuring()
        self.post_actions = checked

    def bind_registry(self, registry: Registry) -> None:
        self._configuring()
        self.registry = registry

    def initialize(self) -> None:
        """To be called exactly once, when the owning process starts. Runs the job if `run_at_startup`"""
        if self.initialized:
            raise RuntimeError("runner already initialized")
        self.job.prepare()
        self.initialized = True
        if self.run_at_startup:
            logger.debug(f"running {self.job} at startup")
            self.fetch_result()

    def _invoke(self, names: list[str]) -> None:
        if not names:
            return
        if self.registry is None:
            logger.warning(f"no registry bound, cannot invoke actions {names}")
            return
        for name in names:
            self.registry.invoke(name)

    def fetch_result(self) -> int:
        if (published := self.published) is not None:
            return published
        with self.lock:
            if self.result is None:
                previous = self.state
                self.state = RunnerState.triggered
                try:
                    start = perf_counter_ns()
                    self._invoke(self.pre_actions)
                    self.result = self.job.run()
                except Exception:
                    self.state = previous
                    raise
                run_end = perf_counter_ns()
                self._invoke(self.post_actions)
                end = perf_counter_ns()
                logger.debug(f"run elapsed {(run_end-start)/1e9: .5f} s in {self.job}")
                logger.debug(f"post elapsed {(end-run_end)/1e9: .5f} s in {self.job}")
            self.published = self.result
            self.state = RunnerState.completed
            return self.result

    def object_type(self) -> type:
        return int

    def is_singleton(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"DeferredRunner({self.job}, state={self.state.value})"
