"""
Data models for the Lambda deployer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

STATE_ACTIVE = "Active"
LAST_UPDATE_SUCCESSFUL = "Successful"


@dataclass
class FunctionReadiness:
    """Observed state of a Lambda function (both status axes)."""

    state: str  # Pending, Active, Failed, Inactive
    last_update_status: str  # InProgress, Successful, Failed
    state_reason: str = ""
    state_reason_code: str = ""
    last_update_status_reason: str = ""
    last_update_status_reason_code: str = ""

    @property
    def is_active(self) -> bool:
        return self.state == STATE_ACTIVE

    @property
    def is_updated(self) -> bool:
        return self.last_update_status == LAST_UPDATE_SUCCESSFUL

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "FunctionReadiness":
        """Build from a GetFunctionConfiguration response (or GetFunction's Configuration)."""
        return cls(
            state=data.get("State", ""),
            last_update_status=data.get("LastUpdateStatus", ""),
            state_reason=data.get("StateReason", ""),
            state_reason_code=data.get("StateReasonCode", ""),
            last_update_status_reason=data.get("LastUpdateStatusReason", ""),
            last_update_status_reason_code=data.get("LastUpdateStatusReasonCode", ""),
        )


@dataclass
class CodeArtifact:
    """Resolved code source for an UpdateFunctionCode call."""

    zip_file: Optional[bytes] = None
    s3_bucket: Optional[str] = None
    s3_key: Optional[str] = None
    s3_object_version: Optional[str] = None
    image_uri: Optional[str] = None

    @property
    def has_s3(self) -> bool:
        return bool(self.s3_bucket and self.s3_key)

    def is_empty(self) -> bool:
        return not (self.zip_file or self.has_s3 or self.image_uri)


@dataclass
class CodeUpdateRequest:
    """Parameters for lambda:UpdateFunctionCode."""

    function_name: str
    artifact: CodeArtifact
    dry_run: bool = False
    publish: bool = True
    revision_id: Optional[str] = None
    architectures: List[str] = field(default_factory=list)

    def to_api_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "FunctionName": self.function_name,
            "DryRun": self.dry_run,
            "Publish": self.publish,
        }
        if self.artifact.image_uri:
            kwargs["ImageUri"] = self.artifact.image_uri
        if self.revision_id:
            kwargs["RevisionId"] = self.revision_id
        if self.artifact.has_s3:
            kwargs["S3Bucket"] = self.artifact.s3_bucket
            kwargs["S3Key"] = self.artifact.s3_key
            if self.artifact.s3_object_version:
                kwargs["S3ObjectVersion"] = self.artifact.s3_object_version
        if self.architectures:
            kwargs["Architectures"] = list(self.architectures)
        if self.artifact.zip_file:
            kwargs["ZipFile"] = self.artifact.zip_file
        return kwargs


@dataclass
class VpcSettings:
    """VPC attachment for a function."""

    subnet_ids: List[str] = field(default_factory=list)
    security_group_ids: List[str] = field(default_factory=list)
    ipv6_dual_stack: bool = False

    def to_api(self) -> Dict[str, Any]:
        return {
            "SubnetIds": list(self.subnet_ids),
            "SecurityGroupIds": list(self.security_group_ids),
            "Ipv6AllowedForDualStack": self.ipv6_dual_stack,
        }


@dataclass
class ConfigurationUpdateRequest:
    """Parameters for lambda:UpdateFunctionConfiguration. None means unchanged."""

    function_name: str
    memory_size: Optional[int] = None
    timeout: Optional[int] = None
    handler: Optional[str] = None
    role: Optional[str] = None
    runtime: Optional[str] = None
    description: Optional[str] = None
    layers: Optional[List[str]] = None
    environment: Optional[Dict[str, str]] = None
    vpc: Optional[VpcSettings] = None
    tracing_mode: Optional[str] = None

    def to_api_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"FunctionName": self.function_name}
        if self.memory_size is not None:
            kwargs["MemorySize"] = self.memory_size
        if self.timeout is not None:
            kwargs["Timeout"] = self.timeout
        if self.handler is not None:
            kwargs["Handler"] = self.handler
        if self.role is not None:
            kwargs["Role"] = self.role
        if self.runtime is not None:
            kwargs["Runtime"] = self.runtime
        if self.description is not None:
            kwargs["Description"] = self.description
        if self.layers is not None:
            kwargs["Layers"] = list(self.layers)
        if self.environment is not None:
            kwargs["Environment"] = {"Variables": dict(self.environment)}
        if self.vpc is not None:
            kwargs["VpcConfig"] = self.vpc.to_api()
        if self.tracing_mode is not None:
            kwargs["TracingConfig"] = {"Mode": self.tracing_mode}
        return kwargs


@dataclass
class UpdatePlan:
    """Requests derived from one configuration record."""

    code: CodeUpdateRequest
    configuration: Optional[ConfigurationUpdateRequest] = None

    @property
    def needs_configuration_update(self) -> bool:
        return self.configuration is not None


@dataclass
class FunctionDescriptor:
    """Result of a successful code update."""

    function_name: str
    function_arn: str = ""
    version: str = ""
    code_sha256: str = ""
    last_modified: str = ""
    revision_id: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "FunctionDescriptor":
        return cls(
            function_name=data.get("FunctionName", ""),
            function_arn=data.get("FunctionArn", ""),
            version=data.get("Version", ""),
            code_sha256=data.get("CodeSha256", ""),
            last_modified=data.get("LastModified", ""),
            revision_id=data.get("RevisionId", ""),
            raw=data,
        )
