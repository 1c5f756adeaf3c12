"""
Function update orchestration for AWS Lambda.
"""

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from botocore.exceptions import BotoCoreError

from artifacts import resolve_artifact
from clients import LambdaClient
from config import DeployConfig
from errors import ValidationError
from executor import UpdateExecutor, dump
from models import FunctionDescriptor
from planner import plan_updates
from waiter import ReadinessWaiter

logger = logging.getLogger(__name__)


class FunctionDeployer:
    """Updates code and configuration of one existing Lambda function."""

    def __init__(
        self,
        config: DeployConfig,
        client: Optional[LambdaClient] = None,
        client_factory: Callable[[DeployConfig], LambdaClient] = LambdaClient.from_config,
        debug: Optional[bool] = None,
    ):
        """
        Initialize the deployer.

        Args:
            config: Deployment configuration
            client: Pre-built Lambda client (tests inject a double here)
            client_factory: Builds a client when none is given; only called
                after validation and artifact resolution succeed
            debug: Dump requests and responses; defaults to config.debug
        """
        self.config = config
        self.client = client
        self.client_factory = client_factory
        self.debug = config.debug if debug is None else debug

        self.run_start_time: Optional[float] = None
        self.run_end_time: Optional[float] = None

    def _log_banner(self) -> None:
        cfg = self.config
        logger.info("=" * 70)
        logger.info("AWS Lambda Function Update")
        logger.info("=" * 70)
        logger.info(f"Function: {cfg.function_name}")
        logger.info(f"Region: {cfg.region or '(default)'}")
        logger.info(f"Dry run: {cfg.dry_run}")
        logger.info(f"Max attempts: {cfg.max_attempts}")
        if cfg.commit_sha:
            logger.info(f"Commit: {cfg.commit_sha} ({cfg.commit_author or 'unknown'})")
        logger.info(f"Start time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        logger.info("=" * 70)

    def _get_client(self) -> LambdaClient:
        if self.client is None:
            try:
                self.client = self.client_factory(self.config)
            except BotoCoreError as e:
                raise ValidationError(f"cannot create AWS Lambda client: {e}") from e
        return self.client

    def run(self) -> FunctionDescriptor:
        """
        Execute the update.

        Returns:
            Descriptor of the updated function

        Raises:
            DeployError: On the first validation, artifact, readiness or
                remote failure; later steps are not attempted
        """
        self.run_start_time = time.time()
        self._log_banner()
        if self.debug:
            dump("Configuration", self.config.to_dict())

        self.config.validate()
        artifact = resolve_artifact(self.config)
        plan = plan_updates(self.config, artifact)

        client = self._get_client()
        executor = UpdateExecutor(
            client=client,
            waiter=ReadinessWaiter(client, max_attempts=self.config.max_attempts),
            debug=self.debug,
        )

        if plan.needs_configuration_update:
            executor.apply_configuration(plan.configuration)

        result = executor.apply_code(plan.code)

        self.run_end_time = time.time()
        duration = self.run_end_time - self.run_start_time
        logger.info(
            f"✓ Updated {self.config.function_name} "
            f"(version={result.version or 'n/a'}, sha256={result.code_sha256 or 'n/a'}) "
            f"in {duration:.1f}s"
        )
        return result
