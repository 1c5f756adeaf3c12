"""
Configuration management for the Lambda deployer.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from errors import ValidationError

DEFAULT_MAX_ATTEMPTS = 200

REDACTED_FIELDS = ("access_key", "secret_key", "session_token")


@dataclass(frozen=True)
class DeployConfig:
    """Deployment parameters for a single function update run."""

    function_name: str
    region: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    session_token: Optional[str] = None
    profile: Optional[str] = None
    revision_id: Optional[str] = None

    # Code sources
    s3_bucket: Optional[str] = None
    s3_key: Optional[str] = None
    s3_object_version: Optional[str] = None
    zip_file: Optional[str] = None
    source: List[str] = field(default_factory=list)
    image_uri: Optional[str] = None

    # Behaviour
    dry_run: bool = False
    publish: bool = False
    debug: bool = False

    # Configuration update fields
    memory_size: int = 0
    timeout: int = 0
    handler: Optional[str] = None
    role: Optional[str] = None
    runtime: Optional[str] = None
    description: Optional[str] = None
    environment: List[str] = field(default_factory=list)
    layers: List[str] = field(default_factory=list)
    subnets: List[str] = field(default_factory=list)
    security_groups: List[str] = field(default_factory=list)
    ipv6_dual_stack: bool = False
    tracing_mode: Optional[str] = None
    architectures: List[str] = field(default_factory=list)

    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    commit_sha: Optional[str] = None
    commit_author: Optional[str] = None

    @classmethod
    def from_args(cls, args) -> "DeployConfig":
        """
        Create configuration from command-line arguments.

        Args:
            args: Parsed argparse arguments

        Returns:
            DeployConfig instance
        """
        return cls(
            function_name=args.function_name or "",
            region=args.region,
            access_key=args.access_key,
            secret_key=args.secret_key,
            session_token=args.session_token,
            profile=args.aws_profile,
            revision_id=args.revision_id,
            s3_bucket=args.s3_bucket,
            s3_key=args.s3_key,
            s3_object_version=args.s3_object_version,
            zip_file=args.zip_file,
            source=list(args.source or []),
            image_uri=args.image_uri,
            dry_run=args.dry_run,
            publish=args.publish,
            debug=args.debug,
            memory_size=args.memory_size or 0,
            timeout=args.timeout or 0,
            handler=args.handler,
            role=args.role,
            runtime=args.runtime,
            description=args.description,
            environment=list(args.environment or []),
            layers=list(args.layers or []),
            subnets=list(args.subnets or []),
            security_groups=list(args.securitygroups or []),
            ipv6_dual_stack=args.ipv6_dual_stack,
            tracing_mode=args.tracing_mode,
            architectures=list(args.architectures or []),
            max_attempts=args.max_attempts,
            commit_sha=args.commit_sha,
            commit_author=args.commit_author,
        )

    @property
    def has_explicit_keys(self) -> bool:
        return bool(self.access_key and self.secret_key)

    def declares_code_source(self) -> bool:
        """True if any code source field is set (before glob expansion)."""
        has_patterns = any(p.strip() for p in self.source)
        return bool(
            self.s3_bucket
            or self.s3_key
            or has_patterns
            or self.zip_file
            or self.image_uri
        )

    def validate(self) -> None:
        """
        Check the parameters that must hold before any remote call.

        Raises:
            ValidationError: If the function name or every code source is missing
        """
        if not self.function_name.strip():
            raise ValidationError("missing lambda function name")
        if not self.declares_code_source():
            raise ValidationError("missing zip source or s3 bucket/key or image uri")
        if self.max_attempts < 1:
            raise ValidationError(
                f"max attempts must be at least 1 (got {self.max_attempts})"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for debug output, with credentials masked."""
        data = asdict(self)
        for name in REDACTED_FIELDS:
            if data.get(name):
                data[name] = "***"
        return data
