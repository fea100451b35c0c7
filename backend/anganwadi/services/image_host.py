"""Cloudinary gateway for program images.

Uploads raw image bytes into a folder of the configured Cloudinary account and
deletes them again by public id. The Cloudinary SDK is blocking, so every call
is pushed to the threadpool and awaited.
"""

import io
from dataclasses import dataclass
from urllib.parse import urlparse

import cloudinary.uploader
from anganwadi.core.errors import UpstreamError
from anganwadi.core.logging import logger
from fastapi.concurrency import run_in_threadpool


@dataclass(frozen=True)
class UploadedImage:
    """Result of an upload.

    Attributes:
        url: Public HTTPS URL of the stored image.
        public_id: Cloudinary identifier, including the folder.
    """

    url: str
    public_id: str


def public_id_from_url(url: str, folder: str) -> str:
    """Derive the Cloudinary public id of an image from its delivery URL.

    The last path segment is taken and everything from its first ``.`` on is
    dropped, then the folder is prepended:
    ``.../upload/v17/anganwadi-programs/abc.jpg`` gives
    ``anganwadi-programs/abc``.
    """
    last_segment = urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]
    name = last_segment.split(".", 1)[0]
    return f"{folder}/{name}"


class CloudinaryImageHost:
    """Upload and delete images in one Cloudinary account.

    Attributes:
        config: Per-call SDK options carrying the account credentials.
    """

    def __init__(self, cloud_name: str, api_key: str, api_secret: str) -> None:
        # NOTE: keep credentials on the instance rather than the SDK's global config
        self.config = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
            "secure": True,
        }
        logger.debug("CloudinaryImageHost initialized for cloud={}", cloud_name)

    async def upload(self, data: bytes, folder: str) -> UploadedImage:
        """Upload ``data`` into ``folder`` and return where it ended up.

        Raises:
            UpstreamError: If Cloudinary rejects or fails the upload.
        """
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload, io.BytesIO(data), folder=folder, **self.config
            )
        except Exception as error:
            logger.exception("Image upload to folder {} failed", folder)
            raise UpstreamError("Image upload failed") from error

        uploaded = UploadedImage(url=result["secure_url"], public_id=result["public_id"])
        logger.info("Uploaded image public_id={} ({} bytes)", uploaded.public_id, len(data))
        return uploaded

    async def delete(self, public_id: str) -> None:
        """Delete the image identified by ``public_id``.

        Raises:
            UpstreamError: If the deletion request fails.
        """
        try:
            result = await run_in_threadpool(
                cloudinary.uploader.destroy, public_id, **self.config
            )
        except Exception as error:
            logger.exception("Image delete failed public_id={}", public_id)
            raise UpstreamError("Image delete failed") from error

        # NOTE: "not found" is a normal answer for an image removed by hand
        logger.info("Deleted image public_id={} result={}", public_id, result.get("result"))
