"""
Local disk storage for uploaded profile images.

Files land in the configured images directory under a random name:
``<uuid4 hex><extension>``. The extension is the validated, lower-cased
one taken from the name the client declared.
"""

import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, Union

from profile_api.core.errors import InvalidExtensionError, StorageIOError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png")


def validate_extension(filename: Optional[str]) -> str:
    """
    Return the lower-cased extension of ``filename``.

    Raises:
        InvalidExtensionError: if the name has no extension or it is not
            one of ALLOWED_EXTENSIONS.
    """
    ext = os.path.splitext(filename or "")[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise InvalidExtensionError(filename)
    return ext


class ImageStorage:
    """Writes image payloads into a single directory."""

    def __init__(self, images_dir: Union[str, Path]):
        self.images_dir = Path(images_dir).resolve()

    def path_for(self, stored_name: str) -> Path:
        return self.images_dir / stored_name

    def store(self, payload: Union[bytes, BinaryIO], declared_name: Optional[str]) -> str:
        """
        Save ``payload`` under a freshly generated name.

        Args:
            payload: Raw bytes or a binary file object positioned at the start
            declared_name: File name supplied by the client

        Returns:
            The generated file name (no directory part)

        Raises:
            InvalidExtensionError: if the declared extension is not allowed
            StorageIOError: if the directory or file cannot be written
        """
        ext = validate_extension(declared_name)
        stored_name = f"{uuid.uuid4().hex}{ext}"
        path = self.path_for(stored_name)

        try:
            # another request may create it first
            self.images_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create images directory {self.images_dir}: {e}")
            raise StorageIOError(f"Cannot create images directory: {e}") from e

        try:
            # "xb" never replaces an existing file
            with open(path, "xb") as f:
                if isinstance(payload, (bytes, bytearray)):
                    f.write(payload)
                else:
                    shutil.copyfileobj(payload, f)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            self._discard(path)
            raise StorageIOError(f"Failed to write image: {e}") from e

        logger.info(f"Stored image {stored_name} (declared as {declared_name!r})")
        return stored_name

    def remove(self, stored_name: str):
        """Delete a stored image. A file that is already gone is ignored."""
        try:
            self.path_for(stored_name).unlink()
        except FileNotFoundError:
            logger.debug(f"Image {stored_name} already gone")
            return
        logger.info(f"Removed image {stored_name}")

    @staticmethod
    def _discard(path: Path):
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove partial file {path}: {e}")
