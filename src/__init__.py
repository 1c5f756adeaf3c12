"""
AWS Lambda code and configuration deployer.
"""

from clients import LambdaClient
from config import DeployConfig
from deployer import FunctionDeployer
from errors import (
    ArtifactError,
    DeployError,
    DeploymentCancelled,
    ErrorCategory,
    ReadinessError,
    ReadinessTimeoutError,
    RemoteAPIError,
    ValidationError,
)
from log_utils import setup_logging

__all__ = [
    "LambdaClient",
    "DeployConfig",
    "FunctionDeployer",
    "setup_logging",
    "ErrorCategory",
    "DeployError",
    "ValidationError",
    "ArtifactError",
    "ReadinessError",
    "ReadinessTimeoutError",
    "RemoteAPIError",
    "DeploymentCancelled",
]
