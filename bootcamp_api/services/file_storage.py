"""Local filesystem storage for uploaded bootcamp photos."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from starlette.concurrency import run_in_threadpool

from bootcamp_api.config import settings

logger = logging.getLogger(__name__)


class FileStorageError(Exception):
    """The file could not be written to its destination."""


class FileStorage:
    """
    Moves uploaded bytes into the upload directory.

    Files are written to a temporary file in the same directory and renamed
    into place, so a failed write never replaces an existing photo.
    """

    def __init__(self, base_dir: Union[str, Path, None] = None):
        self.base_dir = Path(base_dir or settings.FILE_UPLOAD_PATH)

    def _write(self, content: bytes, filename: str) -> Path:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        destination = self.base_dir / filename

        fd, tmp_path = tempfile.mkstemp(dir=self.base_dir, prefix=".upload_")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            os.replace(tmp_path, destination)
        except OSError:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        return destination

    async def save(self, content: bytes, filename: str) -> str:
        """Store ``content`` as ``filename`` and return the stored name."""
        try:
            path = await run_in_threadpool(self._write, content, filename)
        except OSError as e:
            logger.error(f"Failed to store upload {filename}: {e}")
            raise FileStorageError(str(e)) from e

        logger.info(f"Stored upload: {path}")
        return filename


_instance: Optional[FileStorage] = None


def get_file_storage() -> FileStorage:
    """Dependency returning the process-wide file storage."""
    global _instance
    if _instance is None:
        _instance = FileStorage()
    return _instance
