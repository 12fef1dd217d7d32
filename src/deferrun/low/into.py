"""
Lowering of the deferrun.low configuration structures into a wired runner
"""

import logging

from deferrun.job import job_of
from deferrun.low.core import RunnerConfig
from deferrun.registry import ActionRegistry, Registry
from deferrun.runner import DeferredRunner

logger = logging.getLogger(__name__)


def entrypoint_registry(names: list[str]) -> ActionRegistry:
    """A registry where each action's name is the fqn of the callable"""
    registry = ActionRegistry()
    for name in names:
        registry.register_entrypoint(name, name)
    return registry


def config2runner(config: RunnerConfig, registry: Registry | None = None) -> DeferredRunner:
    """Builds a not-yet-initialized runner. Without a registry given, action names are treated as fqns"""
    settings = config.settings
    if registry is None and (settings.pre_actions or settings.post_actions):
        logger.debug("no registry given, resolving actions as entrypoints")
        registry = entrypoint_registry(settings.pre_actions + settings.post_actions)
    return DeferredRunner(job_of(config.job), settings, registry)
