# This project was developed with assistance from AI tools.
"""Upload storage: local disk by default, S3-compatible object storage optionally.

Routes validate and write the bytes here first, then hand the returned path
string to a lifecycle service that inserts the metadata row. A failure in
between leaves an orphaned file, never a row pointing at nothing.

The S3 backend uses a boto3 synchronous client run in a thread-pool executor
for async compatibility. The module exposes a singleton initialised at app
startup via ``init_storage_service()``.
"""

import asyncio
import logging
import os
import uuid
from functools import partial
from pathlib import Path

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from ..core.config import Settings, settings
from ..core.errors import InvalidInput, NotFound, UploadTooLarge

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "image/jpeg",
    "image/png",
}

_CONTENT_TYPES_BY_EXT = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def validate_upload(content_type: str | None, size: int) -> None:
    """Raise InvalidInput (422) for a disallowed type, UploadTooLarge (413) over the cap."""
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise InvalidInput(
            f"Unsupported file type: {content_type}. "
            f"Allowed: {', '.join(sorted(ALLOWED_CONTENT_TYPES))}"
        )
    max_bytes = settings.UPLOAD_MAX_SIZE_MB * 1024 * 1024
    if size > max_bytes:
        raise UploadTooLarge(
            f"File size {size} exceeds maximum of {settings.UPLOAD_MAX_SIZE_MB}MB"
        )


def build_stored_name(field: str, filename: str | None) -> str:
    """``<field>-<uuid hex><ext>``. Only the extension of the client filename survives."""
    ext = os.path.splitext(os.path.basename(filename or ""))[1].lower()
    return f"{field}-{uuid.uuid4().hex}{ext}"


def content_type_for(name: str) -> str:
    return _CONTENT_TYPES_BY_EXT.get(os.path.splitext(name)[1].lower(), "application/octet-stream")


class LocalFileStorage:
    """Writes uploads under a single directory on local disk."""

    def __init__(self, root: str | Path):
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)

    def _resolve(self, name: str) -> Path:
        # basename() drops any directory components a caller smuggles in
        safe_name = os.path.basename(name)
        if not safe_name or safe_name in {".", ".."}:
            raise NotFound("file", name)
        return self._root / safe_name

    async def save(self, field: str, filename: str | None, content_type: str, data: bytes) -> str:
        """Store bytes and return the path string recorded on the entity."""
        name = build_stored_name(field, filename)
        path = self._root / name
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, path.write_bytes, data)
        logger.info("Stored upload %s (%d bytes, %s)", name, len(data), content_type)
        return str(path)

    async def read(self, name: str) -> bytes:
        path = self._resolve(name)
        if not path.is_file():
            raise NotFound("file", os.path.basename(name))
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, path.read_bytes)


class S3FileStorage:
    """Thin wrapper around a boto3 S3 client."""

    def __init__(
        self,
        endpoint: str,
        access_key: str,
        secret_key: str,
        bucket: str,
        region: str = "us-east-1",
    ):
        self._bucket = bucket
        self._client = boto3.client(
            "s3",
            endpoint_url=endpoint,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=BotoConfig(
                signature_version="s3v4",
                s3={
                    "addressing_style": "path",
                    "use_accelerate_endpoint": False,
                },
            ),
        )
        self._ensure_bucket()

    def _ensure_bucket(self) -> None:
        """Create the bucket if it doesn't already exist (dev convenience)."""
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except ClientError:
            logger.info("Creating S3 bucket: %s", self._bucket)
            self._client.create_bucket(Bucket=self._bucket)

    async def save(self, field: str, filename: str | None, content_type: str, data: bytes) -> str:
        """Upload bytes to S3 and return the object key."""
        object_key = build_stored_name(field, filename)
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            partial(
                self._client.put_object,
                Bucket=self._bucket,
                Key=object_key,
                Body=data,
                ContentType=content_type,
            ),
        )
        return object_key

    async def read(self, name: str) -> bytes:
        object_key = os.path.basename(name)
        loop = asyncio.get_running_loop()
        try:
            response = await loop.run_in_executor(
                None,
                partial(self._client.get_object, Bucket=self._bucket, Key=object_key),
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in {"NoSuchKey", "404"}:
                raise NotFound("file", object_key) from exc
            raise
        return response["Body"].read()


FileStorage = LocalFileStorage | S3FileStorage


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_service: FileStorage | None = None


def init_storage_service(cfg: Settings) -> FileStorage:
    """Initialise the singleton (called once from app lifespan)."""
    global _service  # noqa: PLW0603
    if cfg.STORAGE_BACKEND == "s3":
        _service = S3FileStorage(
            endpoint=cfg.S3_ENDPOINT,
            access_key=cfg.S3_ACCESS_KEY,
            secret_key=cfg.S3_SECRET_KEY,
            bucket=cfg.S3_BUCKET,
            region=cfg.S3_REGION,
        )
        logger.info("Storage initialised (s3 bucket=%s)", cfg.S3_BUCKET)
    else:
        _service = LocalFileStorage(cfg.UPLOAD_DIR)
        logger.info("Storage initialised (local dir=%s)", cfg.UPLOAD_DIR)
    return _service


def get_storage_service() -> FileStorage:
    """Return the initialised storage singleton."""
    if _service is None:
        raise RuntimeError("Storage not initialised -- call init_storage_service() first")
    return _service
