"""
Process-level configuration: logging setup, and loading of runner configs from files
"""

from pathlib import Path

from deferrun.low.core import RunnerConfig

logging_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(process)d %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "deferrun": {"level": "INFO", "handlers": ["console"], "propagate": False},
    },
    "root": {"level": "WARNING", "handlers": ["console"]},
}


def load_config(path: str | Path) -> RunnerConfig:
    return RunnerConfig.model_validate_json(Path(path).read_text())
