# This project was developed with assistance from AI tools.
"""Shared multipart upload handling for routes that accept files."""

from fastapi import UploadFile

from ..services.storage import get_storage_service, validate_upload


async def store_upload(upload: UploadFile | None, field: str) -> str | None:
    """Validate and persist one upload, returning its stored path (None if absent).

    Raises InvalidInput for a disallowed content type and UploadTooLarge
    over the size cap. Nothing is written when validation fails.
    """
    if upload is None or not upload.filename:
        return None
    data = await upload.read()
    validate_upload(upload.content_type, len(data))
    storage = get_storage_service()
    return await storage.save(field, upload.filename, upload.content_type or "", data)


async def store_uploads(uploads: list[UploadFile] | None, field: str) -> list[str]:
    # Validate every file before writing any of them
    files = [u for u in uploads or [] if u.filename]
    payloads = []
    for upload in files:
        data = await upload.read()
        validate_upload(upload.content_type, len(data))
        payloads.append((upload, data))
    storage = get_storage_service()
    return [
        await storage.save(field, upload.filename, upload.content_type or "", data)
        for upload, data in payloads
    ]
