import pytest

from deferrun.registry import ActionRegistry


class RecordingJob:
    """Job that records its invocations into a shared log, returning queued results or raising queued faults"""

    def __init__(self, log: list[str], outcomes: list[int | Exception]):
        self.log = log
        self.outcomes = outcomes
        self.prepared = 0
        self.runs = 0

    def prepare(self) -> None:
        self.prepared += 1

    def run(self) -> int:
        self.runs += 1
        self.log.append("run")
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(scope="function")
def log() -> list[str]:
    return []


@pytest.fixture(scope="function")
def registry(log):
    registry = ActionRegistry()
    for name in ["a", "b", "c", "d", "warmCache"]:
        registry.register(name, lambda name=name: log.append(name))
    return registry


@pytest.fixture(scope="function")
def job(request, log):
    outcomes = getattr(request, "param", [42])
    return RecordingJob(log, list(outcomes))
