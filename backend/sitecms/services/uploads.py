from __future__ import annotations

import logging
import os
import re
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from sitecms.core.errors import InvalidFile, PayloadTooLarge, StorageError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"mp3", "mp4", "mov"}
ALLOWED_MIME_TYPES = {"audio/mpeg", "audio/mp3", "video/mp4", "video/quicktime"}

CHUNK_SIZE = 1024 * 1024

_SAFE_EXT = re.compile(r"\.[A-Za-z0-9]{1,8}")


def _ext(filename: str) -> str:
    return os.path.splitext(filename or "")[1]


def is_allowed(filename: str | None, content_type: str | None) -> bool:
    # either check is enough to accept the file
    ext_ok = _ext(filename or "").lstrip(".").lower() in ALLOWED_EXTENSIONS
    mime_ok = (content_type or "") in ALLOWED_MIME_TYPES
    return ext_ok or mime_ok


def generate_filename(original: str) -> str:
    ext = _ext(original)
    # only short alphanumeric extensions make it into the stored name
    if not _SAFE_EXT.fullmatch(ext):
        ext = ""
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"


class MediaStorage:
    """Media files on local disk, named by the server.

    Knows nothing about the database: ``save`` hands back the generated
    filename and the caller records it.
    """

    def __init__(self, root: str | Path, max_bytes: int):
        self.root = Path(root)
        self.max_bytes = max_bytes

    def path_for(self, filename: str) -> Path:
        name = os.path.basename(filename or "")
        if not name or name != filename:
            raise StorageError("Invalid media filename")
        return self.root / name

    def save(self, upload: UploadFile | None) -> str:
        if upload is None or not upload.filename:
            raise InvalidFile()
        if not is_allowed(upload.filename, upload.content_type):
            logger.info("rejected upload %r (%s)", upload.filename, upload.content_type)
            raise InvalidFile("Only MP3, MP4, and MOV files are allowed")

        if upload.size is not None and upload.size > self.max_bytes:
            raise PayloadTooLarge()

        filename = generate_filename(upload.filename)
        path = self.root / filename
        written = 0
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            with path.open("xb") as out:
                while True:
                    chunk = upload.file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise PayloadTooLarge()
                    out.write(chunk)
        except PayloadTooLarge:
            path.unlink(missing_ok=True)
            raise
        except OSError as e:
            logger.exception("failed to write %s", path, exc_info=e)
            path.unlink(missing_ok=True)
            raise StorageError() from e

        logger.info("stored upload %s (%d bytes)", filename, written)
        return filename

    def delete(self, filename: str) -> bool:
        """Remove a stored file. Returns False when it was already gone."""
        path = self.path_for(filename)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError("Failed to delete file") from e
        return True

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()
