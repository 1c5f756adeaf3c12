"""
Derive Lambda update requests from a deployment configuration.
"""

import logging
from typing import Dict, List, Optional

from config import DeployConfig
from models import (
    CodeArtifact,
    CodeUpdateRequest,
    ConfigurationUpdateRequest,
    UpdatePlan,
    VpcSettings,
)

logger = logging.getLogger(__name__)


def trim_values(values: Optional[List[str]]) -> List[str]:
    """Strip each value and drop the ones left empty."""
    trimmed: List[str] = []
    for value in values or []:
        value = value.strip()
        if value:
            trimmed.append(value)
    return trimmed


def parse_environment(entries: List[str]) -> Dict[str, str]:
    """
    Turn KEY=VALUE entries into a mapping.

    Entries are split on the first '='; entries without one are dropped and
    later keys overwrite earlier ones.
    """
    variables: Dict[str, str] = {}
    for entry in entries:
        key, sep, value = entry.partition("=")
        if not sep:
            logger.warning(f"Ignoring environment entry without '=': {key!r}")
            continue
        variables[key] = value
    return variables


def build_code_request(
    config: DeployConfig, artifact: CodeArtifact
) -> CodeUpdateRequest:
    # Publishing is tied to dry-run; the publish flag itself is not consulted.
    return CodeUpdateRequest(
        function_name=config.function_name,
        artifact=artifact,
        dry_run=config.dry_run,
        publish=not config.dry_run,
        revision_id=config.revision_id or None,
        architectures=trim_values(config.architectures),
    )


def build_configuration_request(
    config: DeployConfig,
) -> Optional[ConfigurationUpdateRequest]:
    """
    Build the configuration update, or None if nothing would change.

    Args:
        config: Deployment configuration

    Returns:
        ConfigurationUpdateRequest carrying only the fields that were set
    """
    request = ConfigurationUpdateRequest(function_name=config.function_name)
    changed = False

    if config.memory_size > 0:
        request.memory_size = config.memory_size
        changed = True
    if config.timeout > 0:
        request.timeout = config.timeout
        changed = True

    for name in ("handler", "role", "runtime", "description"):
        value = getattr(config, name)
        if value:
            setattr(request, name, value)
            changed = True

    layers = trim_values(config.layers)
    if layers:
        request.layers = layers
        changed = True

    envs = trim_values(config.environment)
    if envs:
        request.environment = parse_environment(envs)
        changed = True

    subnets = trim_values(config.subnets)
    security_groups = trim_values(config.security_groups)
    if subnets or security_groups:
        request.vpc = VpcSettings(
            subnet_ids=subnets,
            security_group_ids=security_groups,
            ipv6_dual_stack=config.ipv6_dual_stack,
        )
        changed = True

    if config.tracing_mode:
        request.tracing_mode = config.tracing_mode
        changed = True

    return request if changed else None


def plan_updates(config: DeployConfig, artifact: CodeArtifact) -> UpdatePlan:
    """Derive the code update and optional configuration update for a run."""
    return UpdatePlan(
        code=build_code_request(config, artifact),
        configuration=build_configuration_request(config),
    )
