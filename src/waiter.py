"""
Readiness gate run before every mutating Lambda call.

See https://docs.aws.amazon.com/lambda/latest/dg/functions-states.html
"""

import logging

from botocore.exceptions import BotoCoreError, ClientError, WaiterError

from clients import LambdaClient
from errors import ReadinessError, ReadinessTimeoutError, RemoteAPIError
from models import FunctionReadiness

logger = logging.getLogger(__name__)


class ReadinessWaiter:
    """Waits for a function to be Active with a Successful last update."""

    def __init__(self, client: LambdaClient, max_attempts: int = 200):
        self.client = client
        self.max_attempts = max_attempts

    def fetch_state(self, function_name: str) -> FunctionReadiness:
        try:
            return self.client.get_function_state(function_name)
        except (ClientError, BotoCoreError) as e:
            error = RemoteAPIError.from_exception(e, "GetFunctionConfiguration")
            logger.error(f"[{error.category.value}] {error.message}")
            raise error from e

    def ensure_ready(self, function_name: str) -> FunctionReadiness:
        """
        Block until the function can accept a new mutation.

        Args:
            function_name: Lambda function name or ARN

        Returns:
            The state observed before any waiting

        Raises:
            ReadinessTimeoutError: If an attempt budget is exhausted
            ReadinessError: If the function reaches a terminal failure state
            RemoteAPIError: If the state cannot be fetched
        """
        current = self.fetch_state(function_name)

        logger.info(f"Current State: {current.state}")
        if not current.is_active:
            logger.info(f"Current State Reason: {current.state_reason}")
            logger.info(f"Current State Reason Code: {current.state_reason_code}")
            logger.info("Waiting for Lambda function state to be Active...")
            self._wait(
                self.client.wait_until_active,
                function_name,
                "State",
                "StateReason",
                "StateReasonCode",
            )

        logger.info(f"Last Update Status: {current.last_update_status}")
        if not current.is_updated:
            logger.info(
                f"Last Update Status Reason: {current.last_update_status_reason}"
            )
            logger.info(
                f"Last Update Status Reason Code: {current.last_update_status_reason_code}"
            )
            logger.info("Waiting for Last Update Status to be Successful...")
            self._wait(
                self.client.wait_until_updated,
                function_name,
                "LastUpdateStatus",
                "LastUpdateStatusReason",
                "LastUpdateStatusReasonCode",
            )

        return current

    def _wait(
        self,
        wait_fn,
        function_name: str,
        state_key: str,
        reason_key: str,
        reason_code_key: str,
    ) -> None:
        try:
            wait_fn(function_name, self.max_attempts)
        except WaiterError as e:
            last = (e.last_response or {}).get("Configuration", {})
            state = last.get(state_key)
            reason = last.get(reason_key)
            reason_code = last.get(reason_code_key)
            exc_class = (
                ReadinessTimeoutError
                if "Max attempts exceeded" in str(e.kwargs.get("reason", ""))
                else ReadinessError
            )
            message = (
                f"{function_name} not ready after waiting on {state_key}: "
                f"{state} ({reason_code}) {reason or ''}".rstrip()
            )
            logger.error(message)
            raise exc_class(
                message,
                function_name=function_name,
                state=state,
                reason=reason,
                reason_code=reason_code,
            ) from e
        except (ClientError, BotoCoreError) as e:
            error = RemoteAPIError.from_exception(e, "GetFunction")
            logger.error(f"[{error.category.value}] {error.message}")
            raise error from e

