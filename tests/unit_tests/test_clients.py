"""
Unit tests for LambdaClient.
"""

import unittest
from unittest.mock import MagicMock, patch

from clients import ACTIVE_WAITER, UPDATED_WAITER, LambdaClient, create_session
from config import DeployConfig


class TestCreateSession(unittest.TestCase):
    """Test credential precedence."""

    @patch("clients.boto3.session.Session")
    def test_static_keys_win_over_profile(self, mock_session):
        create_session(
            region="eu-west-1",
            access_key="AK",
            secret_key="SK",
            session_token="TOKEN",
            profile="ci",
        )
        mock_session.assert_called_once_with(
            aws_access_key_id="AK",
            aws_secret_access_key="SK",
            aws_session_token="TOKEN",
            region_name="eu-west-1",
        )

    @patch("clients.boto3.session.Session")
    def test_profile_when_key_pair_incomplete(self, mock_session):
        create_session(region="eu-west-1", access_key="AK", profile="ci")
        mock_session.assert_called_once_with(profile_name="ci", region_name="eu-west-1")

    @patch("clients.boto3.session.Session")
    def test_ambient_credentials(self, mock_session):
        create_session(region="eu-west-1")
        mock_session.assert_called_once_with(region_name="eu-west-1")


class TestLambdaClient(unittest.TestCase):
    """Test LambdaClient API interactions."""

    def setUp(self):
        """Set up test fixtures."""
        self.session = MagicMock()
        self.boto_client = MagicMock()
        self.session.client.return_value = self.boto_client
        self.client = LambdaClient(session=self.session)

    def test_client_initialization(self):
        """Test client is properly initialised."""
        self.assertEqual(self.client.timeout_s, 60)
        self.assertEqual(self.client.max_retries, 5)
        self.assertIsNone(self.client.waiter_delay)
        args, kwargs = self.session.client.call_args
        self.assertEqual(args, ("lambda",))
        self.assertEqual(kwargs["config"].retries, {"max_attempts": 5, "mode": "standard"})

    @patch("clients.create_session")
    def test_from_config(self, mock_create_session):
        mock_create_session.return_value = self.session
        config = DeployConfig(function_name="fn", region="us-east-2", profile="ci")

        client = LambdaClient.from_config(config)

        self.assertIs(client.session, self.session)
        mock_create_session.assert_called_once_with(
            region="us-east-2",
            access_key=None,
            secret_key=None,
            session_token=None,
            profile="ci",
        )

    def test_get_function_state(self):
        self.boto_client.get_function_configuration.return_value = {
            "State": "Active",
            "LastUpdateStatus": "InProgress",
            "LastUpdateStatusReasonCode": "",
        }

        readiness = self.client.get_function_state("fn")

        self.boto_client.get_function_configuration.assert_called_once_with(
            FunctionName="fn"
        )
        self.assertTrue(readiness.is_active)
        self.assertFalse(readiness.is_updated)

    def test_update_calls_pass_through(self):
        self.boto_client.update_function_code.return_value = {"Version": "2"}
        self.boto_client.update_function_configuration.return_value = {"MemorySize": 256}

        self.assertEqual(
            self.client.update_function_code(FunctionName="fn", ZipFile=b"PK"),
            {"Version": "2"},
        )
        self.assertEqual(
            self.client.update_function_configuration(FunctionName="fn", MemorySize=256),
            {"MemorySize": 256},
        )
        self.boto_client.update_function_code.assert_called_once_with(
            FunctionName="fn", ZipFile=b"PK"
        )

    def test_wait_until_active(self):
        waiter = MagicMock()
        self.boto_client.get_waiter.return_value = waiter

        self.client.wait_until_active("fn", max_attempts=7)

        self.boto_client.get_waiter.assert_called_once_with(ACTIVE_WAITER)
        waiter.wait.assert_called_once_with(
            FunctionName="fn", WaiterConfig={"MaxAttempts": 7}
        )

    def test_wait_until_updated_with_delay(self):
        waiter = MagicMock()
        self.boto_client.get_waiter.return_value = waiter
        self.client.waiter_delay = 2

        self.client.wait_until_updated("fn", max_attempts=3)

        self.boto_client.get_waiter.assert_called_once_with(UPDATED_WAITER)
        waiter.wait.assert_called_once_with(
            FunctionName="fn", WaiterConfig={"MaxAttempts": 3, "Delay": 2}
        )


if __name__ == "__main__":
    unittest.main()
