"""Console entry point for the Lambda deployer CLI."""

from __future__ import annotations

import argparse
import logging
import os
import signal
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

from config import DEFAULT_MAX_ATTEMPTS, DeployConfig
from deployer import FunctionDeployer
from errors import DeployError, DeploymentCancelled
from log_utils import setup_logging

logger = logging.getLogger(__name__)

DRONE_ENV_FILE = "/run/drone/env"
EXIT_CANCELLED = 130

TRUTHY = {"1", "true", "yes", "on"}


def _plugin_env(name: str) -> List[str]:
    return [f"PLUGIN_{name}", name, f"INPUT_{name}"]


# Environment variables consulted, in order, when a flag is not given.
ENV_VARS: Dict[str, List[str]] = {
    "region": ["PLUGIN_REGION", "PLUGIN_AWS_REGION", "INPUT_AWS_REGION"],
    "access_key": [
        "PLUGIN_ACCESS_KEY",
        "PLUGIN_AWS_ACCESS_KEY_ID",
        "INPUT_AWS_ACCESS_KEY_ID",
    ],
    "secret_key": [
        "PLUGIN_SECRET_KEY",
        "PLUGIN_AWS_SECRET_ACCESS_KEY",
        "INPUT_AWS_SECRET_ACCESS_KEY",
    ],
    "session_token": [
        "PLUGIN_SESSION_TOKEN",
        "PLUGIN_AWS_SESSION_TOKEN",
        "INPUT_AWS_SESSION_TOKEN",
    ],
    "aws_profile": ["PLUGIN_PROFILE", "PLUGIN_AWS_PROFILE", "INPUT_AWS_PROFILE"],
    "function_name": _plugin_env("FUNCTION_NAME"),
    "revision_id": _plugin_env("REVERSION_ID") + ["PLUGIN_REVISION_ID", "REVISION_ID"],
    "s3_bucket": _plugin_env("S3_BUCKET"),
    "s3_key": _plugin_env("S3_KEY"),
    "s3_object_version": _plugin_env("S3_OBJECT_VERSION"),
    "zip_file": _plugin_env("ZIP_FILE"),
    "source": _plugin_env("SOURCE"),
    "image_uri": _plugin_env("IMAGE_URI"),
    "dry_run": _plugin_env("DRY_RUN"),
    "debug": _plugin_env("DEBUG"),
    "publish": _plugin_env("PUBLISH"),
    "memory_size": _plugin_env("MEMORY_SIZE"),
    "timeout": _plugin_env("TIMEOUT"),
    "handler": _plugin_env("HANDLER"),
    "role": _plugin_env("ROLE"),
    "runtime": _plugin_env("RUNTIME"),
    "description": _plugin_env("DESCRIPTION"),
    "environment": _plugin_env("ENVIRONMENT"),
    "layers": _plugin_env("LAYERS"),
    "subnets": _plugin_env("SUBNETS"),
    "securitygroups": _plugin_env("SECURITY_GROUPS"),
    "tracing_mode": _plugin_env("TRACING_MODE"),
    "architectures": _plugin_env("ARCHITECTURES"),
    "ipv6_dual_stack": _plugin_env("IPV6_DUAL_STACK"),
    "max_attempts": _plugin_env("MAX_ATTEMPTS"),
    "commit_sha": ["DRONE_COMMIT_SHA", "GITHUB_SHA"],
    "commit_author": ["DRONE_COMMIT_AUTHOR"],
}

LIST_OPTIONS = {
    "source",
    "environment",
    "layers",
    "subnets",
    "securitygroups",
    "architectures",
}
BOOL_OPTIONS = {"dry_run", "debug", "publish", "ipv6_dual_stack"}
INT_OPTIONS = {"memory_size", "timeout", "max_attempts"}


def split_list(values: Optional[List[str]]) -> List[str]:
    """Flatten values, splitting each on commas."""
    items: List[str] = []
    for value in values or []:
        items.extend(value.split(","))
    return items


def _lookup(environ: Mapping[str, str], names: List[str]) -> Optional[str]:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="lambda-deploy",
        description=(
            "Deploy code and configuration to an existing AWS Lambda function.\n\n"
            "Every option can also be supplied through PLUGIN_<NAME>, <NAME> or "
            "INPUT_<NAME> environment variables."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    aws = parser.add_argument_group("aws credentials")
    aws.add_argument("--region", help="AWS region")
    aws.add_argument("--access-key", help="AWS access key id")
    aws.add_argument("--secret-key", help="AWS secret access key")
    aws.add_argument("--session-token", help="AWS session token")
    aws.add_argument("--aws-profile", help="AWS shared credentials profile")

    target = parser.add_argument_group("target function")
    target.add_argument("--function-name", help="Lambda function name (required)")
    target.add_argument(
        "--revision-id",
        "--reversion-id",
        dest="revision_id",
        help="Only update the function if its revision id matches",
    )

    code = parser.add_argument_group("code source")
    code.add_argument(
        "--s3-bucket",
        help="S3 bucket holding the deployment package (same region as the function)",
    )
    code.add_argument("--s3-key", help="S3 key of the deployment package")
    code.add_argument("--s3-object-version", help="S3 object version")
    code.add_argument("--zip-file", help="Path to a pre-built zip file")
    code.add_argument(
        "--source",
        nargs="+",
        action="extend",
        metavar="PATTERN",
        help="Glob patterns of files to zip into the deployment package",
    )
    code.add_argument("--image-uri", help="URI of a container image in Amazon ECR")

    behaviour = parser.add_argument_group("behaviour")
    behaviour.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Validate request parameters and permissions without updating",
    )
    behaviour.add_argument(
        "--publish",
        action="store_true",
        default=None,
        help="Publish a new version after updating (implied unless --dry-run)",
    )
    behaviour.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Dump requests and responses",
    )
    behaviour.add_argument(
        "--max-attempts",
        type=int,
        metavar="N",
        help=(
            "Maximum number of readiness checks while waiting for the function "
            f"(default: {DEFAULT_MAX_ATTEMPTS})"
        ),
    )

    settings = parser.add_argument_group("function configuration")
    settings.add_argument(
        "--memory-size",
        type=int,
        metavar="MB",
        help="Memory available to the function (multiple of 64 MB)",
    )
    settings.add_argument(
        "--timeout",
        type=int,
        metavar="SECONDS",
        help="Function timeout (max 900 seconds)",
    )
    settings.add_argument("--handler", help="Function entry point")
    settings.add_argument("--role", help="ARN of the execution role")
    settings.add_argument("--runtime", help="Runtime identifier")
    settings.add_argument("--description", help="Function description")
    settings.add_argument(
        "--environment",
        nargs="+",
        action="extend",
        metavar="KEY=VALUE",
        help="Environment variables",
    )
    settings.add_argument(
        "--layers", nargs="+", action="extend", metavar="ARN", help="Layer ARNs"
    )
    settings.add_argument(
        "--subnets", nargs="+", action="extend", metavar="ID", help="VPC subnet ids"
    )
    settings.add_argument(
        "--securitygroups",
        "--security-groups",
        dest="securitygroups",
        nargs="+",
        action="extend",
        metavar="ID",
        help="VPC security group ids",
    )
    settings.add_argument(
        "--ipv6-dual-stack",
        action="store_true",
        default=None,
        help="Allow dual-stack IPv6 in the VPC configuration",
    )
    settings.add_argument("--tracing-mode", help="X-Ray tracing mode (Active|PassThrough)")
    settings.add_argument(
        "--architectures",
        nargs="+",
        action="extend",
        metavar="ARCH",
        help="Instruction set architectures (x86_64|arm64)",
    )

    meta = parser.add_argument_group("logging and metadata")
    meta.add_argument("--commit-sha", help="Commit being deployed")
    meta.add_argument("--commit-author", help="Author of the commit being deployed")
    meta.add_argument("--log-file", help="Also write log output to this file")
    meta.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")

    return parser


def apply_environment(
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
    environ: Optional[Mapping[str, str]] = None,
) -> argparse.Namespace:
    """
    Fill options not given on the command line from environment variables.

    Args:
        args: Parsed arguments (modified in place)
        parser: Parser used to report conversion errors
        environ: Environment mapping, defaults to os.environ

    Returns:
        The same namespace
    """
    environ = os.environ if environ is None else environ

    for dest, names in ENV_VARS.items():
        current = getattr(args, dest, None)
        if current is not None:
            continue
        raw = _lookup(environ, names)
        if raw is None:
            continue
        if dest in LIST_OPTIONS:
            setattr(args, dest, [raw])
        elif dest in BOOL_OPTIONS:
            setattr(args, dest, raw.strip().lower() in TRUTHY)
        elif dest in INT_OPTIONS:
            try:
                setattr(args, dest, int(raw))
            except ValueError:
                parser.error(f"invalid integer for {dest}: {raw!r}")
        else:
            setattr(args, dest, raw)

    for dest in LIST_OPTIONS:
        setattr(args, dest, split_list(getattr(args, dest)))
    for dest in BOOL_OPTIONS:
        setattr(args, dest, bool(getattr(args, dest)))
    if args.max_attempts is None:
        args.max_attempts = DEFAULT_MAX_ATTEMPTS

    return args


def load_env_files() -> None:
    """Load PLUGIN_ENV_FILE and the Drone runtime env file if present."""
    env_file = os.environ.get("PLUGIN_ENV_FILE")
    if env_file:
        load_dotenv(env_file, override=False)
    if os.path.exists(DRONE_ENV_FILE):
        load_dotenv(DRONE_ENV_FILE, override=True)


def _raise_cancelled(signum, frame):
    raise DeploymentCancelled(f"received signal {signal.Signals(signum).name}")


def install_signal_handlers() -> Dict[int, object]:
    """Turn SIGTERM/SIGINT into DeploymentCancelled; return previous handlers."""
    previous = {}
    for signum in (signal.SIGTERM, signal.SIGINT):
        previous[signum] = signal.signal(signum, _raise_cancelled)
    return previous


def restore_signal_handlers(previous: Dict[int, object]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def main(argv: List[str] | None = None) -> int:
    """CLI main for console_scripts entry point."""
    load_env_files()

    parser = build_parser()
    args = parser.parse_args(args=argv)
    apply_environment(args, parser)

    setup_logging(verbose=args.verbose, log_file=args.log_file)

    config = DeployConfig.from_args(args)

    previous = install_signal_handlers()
    try:
        FunctionDeployer(config).run()
    except DeploymentCancelled as e:
        logger.error(f"Deployment cancelled: {e}")
        return EXIT_CANCELLED
    except DeployError as e:
        logger.error(f"Deployment failed: {e}")
        return 1
    finally:
        restore_signal_handlers(previous)

    return 0
