"""
Deferred single-run execution: a job that runs exactly once, either when its owning process
starts or on first demand, with named pre and post actions around it.

The package is organised as follows:
 - low defines the configuration data structures and their lowering into a runner
 - job defines the Job protocol and callable/command implementations
 - registry defines the Registry protocol for resolving actions by name
 - runner is the memoizing lifecycle controller itself
"""

from deferrun.job import CallableJob, CommandJob, Job
from deferrun.low.core import JobDefinition, RunnerConfig, RunnerSettings, RunnerState
from deferrun.registry import ActionRegistry, Registry, UnknownActionError
from deferrun.runner import DeferredRunner
from deferrun.version import __version__

__all__ = [
    "ActionRegistry",
    "CallableJob",
    "CommandJob",
    "DeferredRunner",
    "Job",
    "JobDefinition",
    "Registry",
    "RunnerConfig",
    "RunnerSettings",
    "RunnerState",
    "UnknownActionError",
    "__version__",
]
