"""
CV upload handling.

Validates uploaded CVs (type and size) and stores them under a generated
unique name in the upload directory, which is served at ``/uploads``.
"""

import logging
import os
import secrets
import time
from pathlib import Path
from typing import Iterable, Optional

from fastapi import UploadFile

from jobboard.core.config import Settings
from jobboard.core.exceptions import FileTooLarge, InvalidFileType, MissingFile

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads/"
CHUNK_SIZE = 64 * 1024


class CVStorage:
    """Validates and persists CV files."""

    def __init__(
        self,
        upload_dir: str,
        max_size: int = 5 * 1024 * 1024,
        allowed_types: Iterable[str] = ("application/pdf",),
        field_name: str = "cv",
    ):
        self.upload_dir = Path(upload_dir)
        self.max_size = max_size
        self.allowed_types = frozenset(allowed_types)
        self.field_name = field_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "CVStorage":
        return cls(upload_dir=settings.UPLOAD_DIR, max_size=settings.MAX_FILE_SIZE)

    def ensure_directory(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def read(self, upload: Optional[UploadFile]) -> bytes:
        """
        Read and validate an uploaded CV.

        Args:
            upload: The multipart file, or None when the field was missing

        Returns:
            The file content

        Raises:
            MissingFile: No file was uploaded
            InvalidFileType: The declared MIME type is not allowed
            FileTooLarge: The content exceeds ``max_size`` bytes
        """
        if upload is None or not upload.filename:
            raise MissingFile()

        if upload.content_type not in self.allowed_types:
            raise InvalidFileType(upload.content_type)

        chunks: list[bytes] = []
        size = 0
        while True:
            chunk = upload.file.read(CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > self.max_size:
                raise FileTooLarge(self.max_size)
            chunks.append(chunk)

        return b"".join(chunks)

    def store(self, content: bytes, original_filename: Optional[str] = None) -> str:
        """
        Write ``content`` under a unique name.

        Returns:
            The relative URL of the stored file, e.g. ``/uploads/cv-...pdf``
        """
        self.ensure_directory()

        extension = Path(original_filename or "").suffix.lower() or ".pdf"
        filename = f"{self.field_name}-{int(time.time() * 1000)}-{secrets.token_hex(8)}{extension}"
        destination = self.upload_dir / filename
        destination.write_bytes(content)

        logger.info("Stored upload %s (%d bytes)", filename, len(content))
        return UPLOADS_URL_PREFIX + filename

    def remove(self, url: str) -> None:
        """Delete a file previously returned by :meth:`store`, if present."""
        if not url.startswith(UPLOADS_URL_PREFIX):
            return
        path = self.upload_dir / os.path.basename(url)
        if path.exists():
            path.unlink()
