"""
Core data structures -- prescribes most of the configuration API
"""

from base64 import b64decode, b64encode
from enum import Enum
from typing import Any, Callable, cast

import cloudpickle
from pydantic import BaseModel, Field, model_validator

# NOTE the knobs here are consumed once, when the runner gets wired. Changing a settings
# instance afterwards has no effect on an already constructed runner


class RunnerState(str, Enum):
    unconfigured = "unconfigured"
    configured = "configured"
    triggered = "triggered"
    completed = "completed"


class RunnerSettings(BaseModel):
    run_at_startup: bool = Field(
        False,
        description="if true, the job runs during `initialize`, otherwise on the first `fetch_result`",
    )
    pre_actions: list[str] = Field(
        default_factory=list,
        description="names of registry actions invoked, in this order, before the job runs",
    )
    post_actions: list[str] = Field(
        default_factory=list,
        description="names of registry actions invoked, in this order, after the job runs",
    )


class JobDefinition(BaseModel):
    entrypoint: str = Field(
        "",
        description="fqn of a Callable, eg mymod.submod.function. Ignored if `func` given",
    )
    func: str | None = Field(
        None,
        description="a cloud-pickled callable. Prefered over `entrypoint` if given",
    )
    command: list[str] = Field(
        default_factory=list,
        description="argv of an external command, its exit code being the result. Exclusive with callables",
    )
    args: list[Any] = Field(
        default_factory=list,
        description="positional params for the callable. Must be json-serializable",
    )
    kwargs: dict[str, Any] = Field(
        default_factory=dict,
        description="keyword params for the callable. Must be json-serializable",
    )
    cwd: str | None = Field(None, description="working directory of the command")
    env: dict[str, str] = Field(
        default_factory=dict,
        description="env vars overlaid on the current environment for the command",
    )

    @model_validator(mode="after")
    def exactly_one_target(self) -> "JobDefinition":
        given = sum((bool(self.entrypoint), self.func is not None, bool(self.command)))
        if given != 1:
            raise ValueError(f"exactly one of entrypoint, func, command expected, got {given}")
        if self.command and (self.args or self.kwargs):
            raise ValueError("args/kwargs are not supported for commands, put them into the argv")
        return self

    @staticmethod
    def func_dec(f: str) -> Callable:
        return cast(Callable, cloudpickle.loads(b64decode(f)))

    @staticmethod
    def func_enc(f: Callable) -> str:
        return b64encode(cloudpickle.dumps(f)).decode("ascii")


class RunnerConfig(BaseModel):
    job: JobDefinition
    settings: RunnerSettings = Field(default_factory=RunnerSettings)
