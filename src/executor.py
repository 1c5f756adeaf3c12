"""
Issue Lambda configuration and code updates behind the readiness gate.
"""

import json
import logging
from typing import Any, Dict

from botocore.exceptions import BotoCoreError, ClientError

from clients import LambdaClient
from errors import RemoteAPIError
from models import CodeUpdateRequest, ConfigurationUpdateRequest, FunctionDescriptor
from waiter import ReadinessWaiter

logger = logging.getLogger(__name__)


def dump(label: str, value: Any) -> None:
    """Log a request/response body as indented JSON."""
    logger.info(f"{label}:\n{json.dumps(value, indent=2, sort_keys=True, default=str)}")


def redact_request(kwargs: Dict[str, Any]) -> Dict[str, Any]:
    """Replace inline zip bytes with their size for printing."""
    printable = dict(kwargs)
    if "ZipFile" in printable:
        printable["ZipFile"] = f"<{len(printable['ZipFile'])} bytes>"
    return printable


class UpdateExecutor:
    """Applies update requests to a single function."""

    def __init__(
        self,
        client: LambdaClient,
        waiter: ReadinessWaiter,
        debug: bool = False,
    ):
        """
        Args:
            client: Lambda API client
            waiter: Readiness gate run before each mutation
            debug: Dump request and response bodies to the log
        """
        self.client = client
        self.waiter = waiter
        self.debug = debug

    def _remote_error(self, exc: BaseException, operation: str) -> RemoteAPIError:
        error = RemoteAPIError.from_exception(exc, operation)
        logger.error(f"{operation} [{error.category.value}] {error.code}: {error.message}")
        return error

    def apply_configuration(self, request: ConfigurationUpdateRequest) -> Dict[str, Any]:
        """
        Update the function configuration once the function is ready.

        Returns:
            The configuration snapshot returned by Lambda

        Raises:
            ReadinessError: If the function never becomes ready
            RemoteAPIError: If UpdateFunctionConfiguration fails
        """
        logger.info("Update function configuration ...")
        self.waiter.ensure_ready(request.function_name)

        kwargs = request.to_api_kwargs()
        if self.debug:
            dump("UpdateFunctionConfiguration request", kwargs)

        try:
            snapshot = self.client.update_function_configuration(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise self._remote_error(e, "UpdateFunctionConfiguration") from e

        if self.debug:
            dump("UpdateFunctionConfiguration response", snapshot)
        return snapshot

    def apply_code(self, request: CodeUpdateRequest) -> FunctionDescriptor:
        """
        Update the function code once the function is ready.

        Returns:
            Descriptor of the updated function

        Raises:
            ReadinessError: If the function never becomes ready
            RemoteAPIError: If UpdateFunctionCode fails
        """
        logger.info("Update function code ...")
        self.waiter.ensure_ready(request.function_name)

        kwargs = request.to_api_kwargs()
        if self.debug:
            dump("UpdateFunctionCode request", redact_request(kwargs))

        try:
            response = self.client.update_function_code(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise self._remote_error(e, "UpdateFunctionCode") from e

        if self.debug:
            dump("UpdateFunctionCode response", response)
        return FunctionDescriptor.from_response(response)
