"""
Jobs -- the unit of work a runner executes at most once

A job is anything with `prepare` and `run`, the latter returning an int exit status.
Two implementations are provided: a python callable, and an external command.
"""

# NOTE intercepting SystemExit is a best-effort measure only -- a callable is free to
# os._exit, fork, or otherwise mess with the process. We don't sandbox

import logging
import os
import shutil
import subprocess
from time import perf_counter_ns
from typing import Any, Callable, Protocol, runtime_checkable

from deferrun.low.core import JobDefinition
from deferrun.low.func import exit_code, exit_status, resolve_callable

logger = logging.getLogger(__name__)


@runtime_checkable
class Job(Protocol):
    def prepare(self) -> None:
        """Validate & resolve whatever is needed for `run`. Called once, during runner initialization"""
        raise NotImplementedError

    def run(self) -> int:
        """Run the job, blocking. Faults propagate"""
        raise NotImplementedError


class CallableJob:
    def __init__(self, func: Callable | None, args: tuple | list = (), kwargs: dict[str, Any] | None = None, entrypoint: str = "") -> None:
        if func is None and not entrypoint:
            raise TypeError("neither entrypoint nor func given")
        self.func = func
        self.entrypoint = entrypoint
        self.args = tuple(args)
        self.kwargs = kwargs or {}

    @classmethod
    def from_entrypoint(cls, entrypoint: str, args: tuple | list = (), kwargs: dict[str, Any] | None = None) -> "CallableJob":
        return cls(None, args, kwargs, entrypoint=entrypoint)

    def prepare(self) -> None:
        if self.func is None:
            self.func = resolve_callable(self.entrypoint)

    def run(self) -> int:
        self.prepare()
        func: Callable = self.func  # type: ignore # prepare guarantees
        start = perf_counter_ns()
        try:
            result = func(*self.args, **self.kwargs)
        except SystemExit as e:
            logger.warning(f"callable {self} attempted to exit with {e.code!r}, intercepted")
            result = exit_code(e)
        end = perf_counter_ns()
        logger.debug(f"callable elapsed {(end-start)/1e9: .5f} s in {self}")
        return exit_status(result)

    def __repr__(self) -> str:
        name = self.entrypoint or getattr(self.func, "__qualname__", repr(self.func))
        return f"CallableJob({name})"


class CommandJob:
    def __init__(self, command: list[str], cwd: str | None = None, env: dict[str, str] | None = None) -> None:
        if not command:
            raise ValueError("empty command")
        self.command = list(command)
        self.cwd = cwd
        self.env = env or {}

    def prepare(self) -> None:
        path = self.env.get("PATH", os.environ.get("PATH"))
        if shutil.which(self.command[0], path=path) is None:
            raise FileNotFoundError(f"executable not found: {self.command[0]}")

    def run(self) -> int:
        env = {**os.environ, **self.env} if self.env else None
        logger.debug(f"about to spawn {self.command}")
        start = perf_counter_ns()
        completed = subprocess.run(self.command, cwd=self.cwd, env=env, check=False)
        end = perf_counter_ns()
        logger.debug(f"command elapsed {(end-start)/1e9: .5f} s, exit code {completed.returncode}")
        return completed.returncode

    def __repr__(self) -> str:
        return f"CommandJob({' '.join(self.command)})"


def job_of(definition: JobDefinition) -> Job:
    if definition.command:
        return CommandJob(definition.command, definition.cwd, definition.env)
    elif definition.func is not None:
        return CallableJob(JobDefinition.func_dec(definition.func), definition.args, definition.kwargs)
    else:
        return CallableJob.from_entrypoint(definition.entrypoint, definition.args, definition.kwargs)
