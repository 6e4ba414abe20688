"""
Photo storage on the local filesystem.

Uploaded photos are written to a single directory under unique names and
read back by file name. Deletions are best effort: they log failures and
never raise.
"""
import logging
import os
import shutil
import uuid
from pathlib import Path

from fastapi import UploadFile

logger = logging.getLogger(__name__)


class PhotoStore:
    """
    Directory of uploaded photos.

    Attributes:
        root (Path): Absolute path of the photo directory
    """

    def __init__(self, root):
        self.root = Path(root).resolve()

    def ensure_root(self) -> None:
        """Create the photo directory and its parents. Errors propagate."""
        self.root.mkdir(parents=True, exist_ok=True)

    def save(self, upload: UploadFile, field: str = "photo") -> str:
        """
        Write an uploaded file to the photo directory.

        Args:
            upload: Uploaded file
            field: Form field name, used as the file name prefix

        Returns:
            str: Generated file name, "<field>-<uuid4><original extension>"
        """
        extension = os.path.splitext(upload.filename or "")[1]
        filename = f"{field}-{uuid.uuid4()}{extension}"
        upload.file.seek(0)
        with open(self.path(filename), "wb") as out:
            shutil.copyfileobj(upload.file, out)
        logger.info(f"Saved photo {filename}")
        return filename

    def delete(self, filename: str) -> None:
        """Remove a stored photo, logging instead of raising on failure."""
        try:
            self.path(filename).unlink()
            logger.info(f"Deleted photo {filename}")
        except OSError as e:
            logger.error(f"failed to delete photo file {filename}: {e}")

    def path(self, filename: str) -> Path:
        """Absolute path of a stored photo."""
        return self.root / filename

    def exists(self, filename: str) -> bool:
        return self.path(filename).is_file()
