"""
AWS Lambda API client used by the deployer.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from models import FunctionReadiness

logger = logging.getLogger(__name__)

ACTIVE_WAITER = "function_active_v2"
UPDATED_WAITER = "function_updated_v2"


def create_session(
    region: Optional[str] = None,
    access_key: Optional[str] = None,
    secret_key: Optional[str] = None,
    session_token: Optional[str] = None,
    profile: Optional[str] = None,
) -> boto3.session.Session:
    """
    Build a boto3 session honouring the credential precedence.

    An explicit key pair wins over a named profile, which wins over the
    ambient credential chain (environment, shared config, instance role).
    """
    if access_key and secret_key:
        logger.debug("Using static AWS credentials")
        return boto3.session.Session(
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            aws_session_token=session_token or None,
            region_name=region or None,
        )
    if profile:
        logger.debug(f"Using AWS profile {profile}")
        return boto3.session.Session(profile_name=profile, region_name=region or None)
    return boto3.session.Session(region_name=region or None)


class LambdaClient:
    """Thin wrapper over the boto3 Lambda client."""

    def __init__(
        self,
        session: Optional[boto3.session.Session] = None,
        timeout_s: int = 60,
        max_retries: int = 5,
        waiter_delay: Optional[int] = None,
    ):
        """
        Initialize the Lambda client.

        Args:
            session: boto3 session carrying region and credentials
            timeout_s: Connect/read timeout in seconds
            max_retries: SDK-level retry attempts for transient transport errors
            waiter_delay: Seconds between waiter polls (None uses the SDK default)
        """
        self.session = session or boto3.session.Session()
        self.timeout_s = timeout_s
        self.max_retries = max_retries
        self.waiter_delay = waiter_delay

        self.client = self.session.client(
            "lambda",
            config=Config(
                connect_timeout=timeout_s,
                read_timeout=timeout_s,
                retries={"max_attempts": max_retries, "mode": "standard"},
            ),
        )

    @classmethod
    def from_config(cls, config) -> "LambdaClient":
        """Create a client from a DeployConfig's credential fields."""
        session = create_session(
            region=config.region,
            access_key=config.access_key,
            secret_key=config.secret_key,
            session_token=config.session_token,
            profile=config.profile,
        )
        return cls(session=session)

    def get_function_state(self, function_name: str) -> FunctionReadiness:
        """
        Fetch the function's state and last update status.

        Raises:
            botocore.exceptions.ClientError: If the API call fails
        """
        data = self.client.get_function_configuration(FunctionName=function_name)
        return FunctionReadiness.from_response(data)

    def update_function_code(self, **kwargs) -> Dict[str, Any]:
        return self.client.update_function_code(**kwargs)

    def update_function_configuration(self, **kwargs) -> Dict[str, Any]:
        return self.client.update_function_configuration(**kwargs)

    def _wait(self, waiter_name: str, function_name: str, max_attempts: int) -> None:
        waiter_config: Dict[str, int] = {"MaxAttempts": max_attempts}
        if self.waiter_delay is not None:
            waiter_config["Delay"] = self.waiter_delay
        waiter = self.client.get_waiter(waiter_name)
        waiter.wait(FunctionName=function_name, WaiterConfig=waiter_config)

    def wait_until_active(self, function_name: str, max_attempts: int) -> None:
        """
        Block until the function State is Active.

        Raises:
            botocore.exceptions.WaiterError: On timeout or terminal failure
        """
        self._wait(ACTIVE_WAITER, function_name, max_attempts)

    def wait_until_updated(self, function_name: str, max_attempts: int) -> None:
        """
        Block until LastUpdateStatus is Successful.

        Raises:
            botocore.exceptions.WaiterError: On timeout or terminal failure
        """
        self._wait(UPDATED_WAITER, function_name, max_attempts)
