"""
Error taxonomy for the Lambda deployer.

Every failure surfaces as a DeployError subclass so the CLI can map it to a
non-zero exit code. Remote API failures additionally carry an ErrorCategory
for operator diagnosis.
"""

from enum import Enum
from typing import Optional

from botocore.exceptions import ClientError


class ErrorCategory(Enum):
    """Categories for remote Lambda API failures."""

    SERVICE_UNAVAILABLE = "service_unavailable"
    NOT_FOUND = "not_found"
    INVALID_PARAMETER = "invalid_parameter"
    RATE_LIMITED = "rate_limited"
    CONFLICT = "conflict"
    PRECONDITION_FAILED = "precondition_failed"
    CODE_STORAGE_EXCEEDED = "code_storage_exceeded"
    NOT_READY = "not_ready"
    UNKNOWN = "unknown"


ERROR_CODE_CATEGORIES = {
    "ServiceException": ErrorCategory.SERVICE_UNAVAILABLE,
    "ResourceNotFoundException": ErrorCategory.NOT_FOUND,
    "InvalidParameterValueException": ErrorCategory.INVALID_PARAMETER,
    "TooManyRequestsException": ErrorCategory.RATE_LIMITED,
    "ThrottlingException": ErrorCategory.RATE_LIMITED,
    "ResourceConflictException": ErrorCategory.CONFLICT,
    "PreconditionFailedException": ErrorCategory.PRECONDITION_FAILED,
    "CodeStorageExceededException": ErrorCategory.CODE_STORAGE_EXCEEDED,
    "ResourceNotReadyException": ErrorCategory.NOT_READY,
}


def error_code(exc: BaseException) -> str:
    """Return the AWS error code of a ClientError, or an empty string."""
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code", "")
    return ""


def error_message(exc: BaseException) -> str:
    """Return the AWS error message of a ClientError, falling back to str()."""
    if isinstance(exc, ClientError):
        message = exc.response.get("Error", {}).get("Message", "")
        if message:
            return message
    return str(exc)


def classify_error(exc: BaseException) -> ErrorCategory:
    """
    Map a remote failure onto an ErrorCategory.

    Args:
        exc: Exception raised by the boto3 Lambda client

    Returns:
        The matching category, UNKNOWN for unrecognised codes or non-AWS errors
    """
    return ERROR_CODE_CATEGORIES.get(error_code(exc), ErrorCategory.UNKNOWN)


class DeployError(Exception):
    """Base class for every failure that aborts a deployment run."""


class ValidationError(DeployError):
    """Deployment parameters are incomplete or inconsistent."""


class ArtifactError(DeployError):
    """The local deployment package could not be built or read."""


class ReadinessError(DeployError):
    """The function did not reach a state where it can be updated."""

    def __init__(
        self,
        message: str,
        function_name: str,
        state: Optional[str] = None,
        reason: Optional[str] = None,
        reason_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.function_name = function_name
        self.state = state
        self.reason = reason
        self.reason_code = reason_code


class ReadinessTimeoutError(ReadinessError):
    """The polling budget ran out before the function became ready."""


class RemoteAPIError(DeployError):
    """A Lambda API call failed."""

    def __init__(
        self,
        category: ErrorCategory,
        message: str,
        code: str = "",
        operation: str = "",
    ):
        super().__init__(f"{operation} failed [{category.value}] {code}: {message}")
        self.category = category
        self.code = code
        self.message = message
        self.operation = operation

    @classmethod
    def from_exception(cls, exc: BaseException, operation: str) -> "RemoteAPIError":
        """Build a RemoteAPIError from a botocore exception."""
        return cls(
            category=classify_error(exc),
            message=error_message(exc),
            code=error_code(exc),
            operation=operation,
        )


class DeploymentCancelled(DeployError):
    """The run was interrupted by a termination signal."""
