"""
Unit tests for data models.
"""

import unittest

from models import (
    CodeArtifact,
    CodeUpdateRequest,
    ConfigurationUpdateRequest,
    FunctionDescriptor,
    FunctionReadiness,
    VpcSettings,
)


class TestFunctionReadiness(unittest.TestCase):
    """Test FunctionReadiness data model."""

    def test_from_response(self):
        readiness = FunctionReadiness.from_response(
            {
                "State": "Pending",
                "StateReason": "The function is being created.",
                "StateReasonCode": "Creating",
                "LastUpdateStatus": "InProgress",
            }
        )
        self.assertEqual(readiness.state, "Pending")
        self.assertEqual(readiness.state_reason_code, "Creating")
        self.assertFalse(readiness.is_active)
        self.assertFalse(readiness.is_updated)

    def test_ready(self):
        readiness = FunctionReadiness(state="Active", last_update_status="Successful")
        self.assertTrue(readiness.is_active)
        self.assertTrue(readiness.is_updated)


class TestCodeArtifact(unittest.TestCase):
    """Test CodeArtifact data model."""

    def test_empty(self):
        self.assertTrue(CodeArtifact().is_empty())

    def test_s3_needs_bucket_and_key(self):
        self.assertTrue(CodeArtifact(s3_bucket="bucket").is_empty())
        self.assertFalse(CodeArtifact(s3_bucket="bucket", s3_key="key").is_empty())


class TestCodeUpdateRequest(unittest.TestCase):
    """Test rendering of UpdateFunctionCode parameters."""

    def test_zip_only(self):
        request = CodeUpdateRequest(
            function_name="fn", artifact=CodeArtifact(zip_file=b"PK")
        )
        self.assertEqual(
            request.to_api_kwargs(),
            {"FunctionName": "fn", "DryRun": False, "Publish": True, "ZipFile": b"PK"},
        )

    def test_all_sources(self):
        request = CodeUpdateRequest(
            function_name="fn",
            artifact=CodeArtifact(
                s3_bucket="bucket",
                s3_key="app.zip",
                s3_object_version="v3",
                image_uri="123.dkr.ecr.us-east-1.amazonaws.com/app:1",
            ),
            dry_run=True,
            publish=False,
            revision_id="rev",
            architectures=["arm64"],
        )
        kwargs = request.to_api_kwargs()
        self.assertEqual(kwargs["S3Bucket"], "bucket")
        self.assertEqual(kwargs["S3Key"], "app.zip")
        self.assertEqual(kwargs["S3ObjectVersion"], "v3")
        self.assertEqual(kwargs["ImageUri"], "123.dkr.ecr.us-east-1.amazonaws.com/app:1")
        self.assertEqual(kwargs["RevisionId"], "rev")
        self.assertEqual(kwargs["Architectures"], ["arm64"])
        self.assertTrue(kwargs["DryRun"])
        self.assertFalse(kwargs["Publish"])
        self.assertNotIn("ZipFile", kwargs)


class TestConfigurationUpdateRequest(unittest.TestCase):
    """Test rendering of UpdateFunctionConfiguration parameters."""

    def test_only_set_fields(self):
        request = ConfigurationUpdateRequest(function_name="fn", memory_size=256)
        self.assertEqual(request.to_api_kwargs(), {"FunctionName": "fn", "MemorySize": 256})

    def test_nested_fields(self):
        request = ConfigurationUpdateRequest(
            function_name="fn",
            environment={"A": "1"},
            vpc=VpcSettings(subnet_ids=["subnet-1"], ipv6_dual_stack=True),
            tracing_mode="Active",
        )
        kwargs = request.to_api_kwargs()
        self.assertEqual(kwargs["Environment"], {"Variables": {"A": "1"}})
        self.assertEqual(
            kwargs["VpcConfig"],
            {
                "SubnetIds": ["subnet-1"],
                "SecurityGroupIds": [],
                "Ipv6AllowedForDualStack": True,
            },
        )
        self.assertEqual(kwargs["TracingConfig"], {"Mode": "Active"})


class TestFunctionDescriptor(unittest.TestCase):
    """Test FunctionDescriptor data model."""

    def test_from_response(self):
        descriptor = FunctionDescriptor.from_response(
            {
                "FunctionName": "fn",
                "FunctionArn": "arn:aws:lambda:us-east-1:123:function:fn",
                "Version": "7",
                "CodeSha256": "abc=",
                "LastModified": "2024-01-01T00:00:00.000+0000",
                "RevisionId": "rev-2",
            }
        )
        self.assertEqual(descriptor.version, "7")
        self.assertEqual(descriptor.code_sha256, "abc=")
        self.assertEqual(descriptor.revision_id, "rev-2")
        self.assertEqual(descriptor.raw["FunctionName"], "fn")


if __name__ == "__main__":
    unittest.main()
