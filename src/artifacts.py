"""
Deployment package resolution.

Turns the code source settings of a DeployConfig into a single CodeArtifact:
glob patterns are zipped into a temporary archive, archive paths are read
into memory, S3 objects and image URIs are passed through untouched.
"""

import glob
import logging
import os
import re
import tempfile
import zipfile
from typing import List

from config import DeployConfig
from errors import ArtifactError, ValidationError
from models import CodeArtifact

logger = logging.getLogger(__name__)

ARCHIVE_NAME = "output.zip"


def archive_path() -> str:
    """Fixed location of the archive built from glob sources."""
    return os.path.join(tempfile.gettempdir(), ARCHIVE_NAME)


def glob_list(patterns: List[str]) -> List[str]:
    """
    Expand every pattern independently.

    Patterns that match nothing contribute nothing; patterns that fail to
    expand are logged and skipped.
    """
    paths: List[str] = []
    for pattern in patterns:
        pattern = pattern.strip(" ")
        if not pattern:
            continue
        try:
            matches = sorted(glob.glob(pattern))
        except (OSError, re.error) as e:
            logger.warning(f"Glob error for {pattern!r}: {e}")
            continue
        if not matches:
            logger.debug(f"Glob pattern {pattern!r} matched no files")
        paths.extend(matches)
    return paths


def _archive_entries(path: str):
    """Yield (filesystem path, archive name) pairs for a file or directory."""
    if not os.path.isdir(path):
        yield path, os.path.basename(path)
        return

    base = os.path.dirname(os.path.abspath(path))
    for root, dirs, files in os.walk(path):
        dirs.sort()
        rel_root = os.path.relpath(os.path.abspath(root), base)
        yield root, rel_root + "/"
        for name in sorted(files):
            full = os.path.join(root, name)
            yield full, os.path.relpath(os.path.abspath(full), base)


def build_archive(files: List[str], destination: str) -> str:
    """
    Zip the given files and directories into destination.

    Args:
        files: Paths returned by glob_list
        destination: Archive path to (over)write

    Returns:
        The destination path

    Raises:
        ArtifactError: If the archive cannot be written
    """
    seen = {}
    try:
        with zipfile.ZipFile(destination, "w", zipfile.ZIP_DEFLATED) as zf:
            for path in files:
                for full, arcname in _archive_entries(path):
                    if arcname in seen:
                        if not arcname.endswith("/"):
                            logger.warning(
                                f"Skipping {full}: archive entry {arcname!r} "
                                f"already taken by {seen[arcname]}"
                            )
                        continue
                    seen[arcname] = full
                    zf.write(full, arcname)
    except OSError as e:
        raise ArtifactError(f"failed to build archive {destination}: {e}") from e

    logger.info(f"Built deployment archive {destination} ({len(seen)} entries)")
    return destination


def read_archive(path: str) -> bytes:
    """
    Read a deployment archive fully into memory.

    Raises:
        ArtifactError: If the file is missing or unreadable
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise ArtifactError(f"cannot read zip file {path}: {e}") from e


def resolve_artifact(config: DeployConfig) -> CodeArtifact:
    """
    Resolve the code source of a deployment.

    Args:
        config: Deployment configuration

    Returns:
        CodeArtifact with every configured source filled in

    Raises:
        ValidationError: If no source resolves to something deployable
        ArtifactError: If a local archive cannot be built or read
    """
    zip_path = config.zip_file

    if config.source:
        files = glob_list(config.source)
        if files:
            zip_path = build_archive(files, archive_path())
        else:
            logger.warning(
                f"Source patterns matched no files: {', '.join(config.source)}"
            )

    artifact = CodeArtifact(image_uri=config.image_uri or None)

    if config.s3_bucket and config.s3_key:
        artifact.s3_bucket = config.s3_bucket
        artifact.s3_key = config.s3_key
        artifact.s3_object_version = config.s3_object_version or None

    if zip_path:
        artifact.zip_file = read_archive(zip_path)
        logger.info(f"Loaded {len(artifact.zip_file)} bytes from {zip_path}")

    if artifact.is_empty():
        raise ValidationError(
            "no deployable code source: source patterns matched no files and "
            "no s3 bucket/key, zip file or image uri is set"
        )

    return artifact
