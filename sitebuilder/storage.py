"""Object-storage targets for a publish run.

Anything with boto3's ``put_object(Bucket=, Key=, Body=, ContentType=)``
signature can receive the site.
"""

from __future__ import annotations

import logging
from pathlib import Path

import boto3
from botocore.config import Config

logger = logging.getLogger(__name__)


def make_s3_client(region_name: str | None = None):
    """S3 client signing with SigV4; credentials come from the usual boto3 chain."""
    return boto3.client(
        "s3",
        region_name=region_name,
        config=Config(signature_version="s3v4"),
    )


class LocalDirectoryStore:
    """Writes objects under a local directory instead of a bucket."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def put_object(self, *, Bucket: str, Key: str, Body, ContentType: str | None = None):
        dst = (self.root / Key).resolve()
        if not dst.is_relative_to(self.root.resolve()):
            raise ValueError(f"Key escapes output directory: {Key}")
        dst.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(Body, str):
            Body = Body.encode("utf-8")
        dst.write_bytes(Body)
        logger.debug("Wrote %s (%s, %d bytes)", dst, ContentType, len(Body))
        return {"Key": Key}
