"""Object storage for resume binaries, backed by Cloudinary.

Resumes are stored as private raw assets; the storage path doubles as the
Cloudinary public_id. Reads go through short-lived signed download URLs.
"""
from functools import lru_cache
from io import BytesIO
from typing import Optional
import logging
import os
import time
import uuid

import cloudinary
import cloudinary.uploader
import cloudinary.utils
import requests

from covercraft.core.config import settings
from covercraft.core.errors import StorageError

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "raw"
DELIVERY_TYPE = "private"
DOWNLOAD_TIMEOUT_SECONDS = 30


def _get_env(name: str, *aliases: str) -> Optional[str]:
    """Return the first non-empty env var among name + aliases."""
    for key in (name, *aliases):
        val = os.getenv(key)
        if val:
            return val
    return None


def configure_cloudinary():
    """Configures the Cloudinary client from settings, falling back to the environment.

    Preferred keys:
      CLOUDINARY_CLOUD_NAME
      CLOUDINARY_API_KEY
      CLOUDINARY_API_SECRET

    Backwards-compatible fallbacks:
      CLOUD_NAME, CLOUDINARY_SECRET
    """
    cloud_name = settings.CLOUDINARY_CLOUD_NAME or _get_env("CLOUD_NAME")
    api_key = settings.CLOUDINARY_API_KEY
    api_secret = settings.CLOUDINARY_API_SECRET or _get_env("CLOUDINARY_SECRET")

    if not all([cloud_name, api_key, api_secret]):
        missing = [k for k, v in {
            'CLOUDINARY_CLOUD_NAME': cloud_name,
            'CLOUDINARY_API_KEY': api_key,
            'CLOUDINARY_API_SECRET': api_secret
        }.items() if not v]
        logger.warning("Cloudinary config missing vars: %s. Storage calls will likely fail.", missing)

    cloudinary.config(
        cloud_name=cloud_name,
        api_key=api_key,
        api_secret=api_secret,
        secure=True
    )


class ResumeStore:
    def __init__(self, folder: Optional[str] = None):
        self.folder = folder or settings.RESUME_FOLDER
        configure_cloudinary()

    def build_path(self, owner_id: str, extension: str) -> str:
        name = uuid.uuid4().hex
        if extension:
            name = f"{name}.{extension}"
        return f"{self.folder}/{owner_id}/{name}"

    def is_owned_by(self, storage_path: str, owner_id: str) -> bool:
        """True when storage_path lies in the owner's folder, as build_path lays it out."""
        segments = storage_path.split("/")
        if any(segment in ("", ".", "..") for segment in segments):
            return False
        return storage_path.startswith(f"{self.folder}/{owner_id}/")

    def upload(self, data: bytes, storage_path: str) -> str:
        try:
            cloudinary.uploader.upload(
                BytesIO(data),
                public_id=storage_path,
                resource_type=RESOURCE_TYPE,
                type=DELIVERY_TYPE,
                overwrite=True,
            )
        except Exception as e:
            logger.error("Cloudinary upload failed for %s: %s", storage_path, e)
            raise StorageError("Failed to store resume file") from e
        logger.info("Resume file stored at %s", storage_path)
        return storage_path

    def signed_url(self, storage_path: str, expires_in: Optional[int] = None) -> str:
        ttl = expires_in or settings.SIGNED_URL_TTL_SECONDS
        try:
            return cloudinary.utils.private_download_url(
                storage_path,
                "",
                resource_type=RESOURCE_TYPE,
                type=DELIVERY_TYPE,
                expires_at=int(time.time()) + ttl,
            )
        except Exception as e:
            logger.error("Could not sign download URL for %s: %s", storage_path, e)
            raise StorageError("Failed to generate download URL") from e

    def download(self, storage_path: str) -> bytes:
        url = self.signed_url(storage_path, expires_in=60)
        try:
            response = requests.get(url, timeout=DOWNLOAD_TIMEOUT_SECONDS)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Download of %s failed: %s", storage_path, e)
            raise StorageError("Failed to download resume file") from e
        return response.content

    def delete(self, storage_path: str) -> None:
        try:
            cloudinary.uploader.destroy(storage_path, resource_type=RESOURCE_TYPE, type=DELIVERY_TYPE, invalidate=True)
        except Exception as e:
            logger.error("Cloudinary delete failed for %s: %s", storage_path, e)
            raise StorageError("Failed to delete resume file") from e


@lru_cache
def get_resume_store() -> ResumeStore:
    return ResumeStore()
