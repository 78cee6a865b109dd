# portfolio/services/cloudinary_client.py
import asyncio
import io
import logging
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from portfolio.config import (
    CLOUDINARY_API_KEY,
    CLOUDINARY_API_SECRET,
    CLOUDINARY_CLOUD_NAME,
    UPLOAD_FOLDER,
    UPLOAD_TIMEOUT_SECS,
)

log = logging.getLogger("portfolio.upload")


class UploadNotConfigured(RuntimeError):
    pass


class UploadFailed(RuntimeError):
    pass


def is_configured() -> bool:
    return bool(CLOUDINARY_CLOUD_NAME and CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET)


def _configure() -> None:
    cloudinary.config(
        cloud_name=CLOUDINARY_CLOUD_NAME,
        api_key=CLOUDINARY_API_KEY,
        api_secret=CLOUDINARY_API_SECRET,
        secure=True,
    )


async def upload_image(
    data: bytes,
    filename: str,
    content_type: Optional[str] = None,
    folder: str = UPLOAD_FOLDER,
) -> str:
    """
    Relay one file to the image host and return its public https URL.
    Nothing is written locally.
    """
    if not is_configured():
        raise UploadNotConfigured("Cloudinary credentials are not set")
    _configure()

    try:
        # the SDK call blocks; keep it off the event loop
        result = await asyncio.to_thread(
            cloudinary.uploader.upload,
            io.BytesIO(data),
            folder=folder,
            resource_type="image",
            timeout=UPLOAD_TIMEOUT_SECS,
        )
    except CloudinaryError as e:
        log.warning("Cloudinary rejected upload of %s: %s", filename, e)
        raise UploadFailed("Failed to upload image.") from e

    secure_url = (result or {}).get("secure_url")
    if not secure_url:
        raise UploadFailed("Cloudinary upload result is missing secure_url.")
    log.info("Uploaded %s (%d bytes, %s) -> %s", filename, len(data), content_type, secure_url)
    return secure_url
