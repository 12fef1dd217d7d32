import sys

import pytest

from deferrun.job import CallableJob, CommandJob, Job, job_of
from deferrun.low.core import JobDefinition


def add(x, y=0):
    return x + y


def exiting(code):
    sys.exit(code)


def test_callable_job():
    # test 1: direct callable with params
    job = CallableJob(add, (1,), {"y": 2})
    assert isinstance(job, Job)
    job.prepare()
    assert job.run() == 3

    # test 2: exit status conversions
    assert CallableJob(lambda: None).run() == 0
    assert CallableJob(lambda: True).run() == 1
    with pytest.raises(TypeError):
        CallableJob(lambda: "ok").run()

    # test 3: SystemExit is intercepted
    assert CallableJob(exiting, (None,)).run() == 0
    assert CallableJob(exiting, (4,)).run() == 4
    assert CallableJob(exiting, ("fatal",)).run() == 1

    # test 4: faults propagate
    def fail():
        raise ZeroDivisionError
    with pytest.raises(ZeroDivisionError):
        CallableJob(fail).run()

    with pytest.raises(TypeError):
        CallableJob(None)


def test_entrypoint_job():
    job = CallableJob.from_entrypoint(f"{__name__}.add", [5])
    assert job.func is None
    job.prepare()
    assert job.func is add
    assert job.run() == 5

    # run without prepare resolves lazily
    assert CallableJob.from_entrypoint(f"{__name__}.add", [1, 1]).run() == 2

    with pytest.raises(AttributeError):
        CallableJob.from_entrypoint(f"{__name__}.nonexistent").prepare()
    with pytest.raises(ValueError):
        CallableJob.from_entrypoint("add").prepare()


def test_command_job(tmp_path):
    job = CommandJob([sys.executable, "-c", "import sys; sys.exit(3)"])
    job.prepare()
    assert job.run() == 3

    marker = tmp_path / "marker"
    job = CommandJob(
        [sys.executable, "-c", "import os, pathlib; pathlib.Path('marker').write_text(os.environ['DEFERRUN_TEST'])"],
        cwd=str(tmp_path),
        env={"DEFERRUN_TEST": "hello"},
    )
    assert job.run() == 0
    assert marker.read_text() == "hello"

    with pytest.raises(FileNotFoundError):
        CommandJob(["surely-not-an-executable-on-path"]).prepare()
    with pytest.raises(ValueError):
        CommandJob([])


def test_job_of():
    entry = job_of(JobDefinition(entrypoint=f"{__name__}.add", args=[2], kwargs={"y": 3}))
    assert isinstance(entry, CallableJob)
    assert entry.run() == 5

    pickled = job_of(JobDefinition(func=JobDefinition.func_enc(lambda: 9)))
    assert isinstance(pickled, CallableJob)
    assert pickled.run() == 9

    command = job_of(JobDefinition(command=[sys.executable, "-c", "pass"]))
    assert isinstance(command, CommandJob)
    assert command.run() == 0
