import pydantic
import pytest

from deferrun.low.core import JobDefinition, RunnerConfig, RunnerSettings
from deferrun.low.func import exit_status, pyd_replace, resolve_callable


def test_settings_defaults():
    settings = RunnerSettings()
    assert settings.run_at_startup is False
    assert settings.pre_actions == []
    assert settings.post_actions == []

    updated = pyd_replace(settings, run_at_startup=True)
    assert updated.run_at_startup is True
    assert settings.run_at_startup is False


def test_job_definition_validation():
    JobDefinition(entrypoint="os.getpid")
    JobDefinition(command=["true"])
    with pytest.raises(pydantic.ValidationError):
        JobDefinition()
    with pytest.raises(pydantic.ValidationError):
        JobDefinition(entrypoint="os.getpid", command=["true"])
    with pytest.raises(pydantic.ValidationError):
        JobDefinition(command=["true"], args=[1])


def test_config_json():
    raw = """
    {
        "job": {"entrypoint": "os.getpid"},
        "settings": {"run_at_startup": true, "pre_actions": ["a", "b"]}
    }
    """
    config = RunnerConfig.model_validate_json(raw)
    assert config.job.entrypoint == "os.getpid"
    assert config.settings.run_at_startup
    assert config.settings.pre_actions == ["a", "b"]
    assert config.settings.post_actions == []

    bare = RunnerConfig.model_validate_json('{"job": {"command": ["true"]}}')
    assert bare.settings == RunnerSettings()


def test_funcs():
    assert resolve_callable("os.path.join") is __import__("os").path.join
    with pytest.raises(TypeError):
        resolve_callable("os.sep")
    assert exit_status(None) == 0
    assert exit_status(False) == 0
    assert exit_status(5) == 5
    with pytest.raises(TypeError):
        exit_status(1.0)
