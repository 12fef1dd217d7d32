"""
Command line entrypoint

Example:
```
python -m deferrun run --entrypoint mymod.main --pre_actions mymod.setup,mymod.warm
python -m deferrun run --command "make all" --post_actions mymod.notify
python -m deferrun from_file job.json
```

Actions given on the command line are fqns of zero-argument callables. The exit status of
the job is printed and used as the exit status of the process.
"""

import logging
import logging.config
import shlex
import sys

import fire

from deferrun.config import load_config, logging_config
from deferrun.low.core import JobDefinition, RunnerConfig, RunnerSettings
from deferrun.low.func import pyd_replace
from deferrun.low.into import config2runner

logger = logging.getLogger("deferrun.cli")


def _names(v: str | list | tuple) -> list[str]:
    if isinstance(v, str):
        return [e for e in v.split(",") if e]
    return [str(e) for e in v]


def execute(config: RunnerConfig) -> int:
    # NOTE the job runs exactly once either way -- at startup merely moves it into `initialize`
    runner = config2runner(config)
    try:
        runner.initialize()
        return runner.fetch_result()
    except Exception:
        logger.exception(f"failure of {runner}")
        raise


def run(entrypoint: str = "", command: str = "", pre_actions: str | list | tuple = (), post_actions: str | list | tuple = (), run_at_startup: bool = True) -> int:
    job = JobDefinition(entrypoint=entrypoint, command=shlex.split(command))
    settings = RunnerSettings(run_at_startup=run_at_startup, pre_actions=_names(pre_actions), post_actions=_names(post_actions))
    return execute(RunnerConfig(job=job, settings=settings))


def from_file(path: str, run_at_startup: bool | None = None) -> int:
    config = load_config(path)
    if run_at_startup is not None:
        config = pyd_replace(config, settings=pyd_replace(config.settings, run_at_startup=run_at_startup))
    return execute(config)


def main() -> None:
    logging.config.dictConfig(logging_config)
    sys.exit(fire.Fire({"run": run, "from_file": from_file}))


if __name__ == "__main__":
    main()
