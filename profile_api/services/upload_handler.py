"""
Create-user flow for the profile image endpoint.

The handler is built per request with its two collaborators passed in:
an ImageStorage for the file and a UserRepository for the row.
"""

import logging
from typing import Optional

from profile_api.core.errors import PersistenceError
from profile_api.core.storage import ImageStorage, validate_extension
from profile_api.services.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UploadHandler:
    def __init__(self, storage: ImageStorage, repository: UserRepository):
        self.storage = storage
        self.repository = repository

    def handle(self, payload: Optional[bytes], filename: Optional[str]) -> int:
        """
        Store the optional image and insert the user that references it.

        Args:
            payload: Uploaded bytes, or None when no file was sent
            filename: Name the client declared for the file

        Returns:
            Id of the new user record

        Raises:
            InvalidExtensionError: before anything is written
            StorageIOError: the image could not be saved; no row is inserted
            PersistenceError: the row could not be saved; the image written
                for this request is deleted first
        """
        stored_name = None

        if payload:
            validate_extension(filename)
            stored_name = self.storage.store(payload, filename)
        else:
            logger.debug("No image supplied, creating user without profile reference")

        try:
            return self.repository.insert(stored_name)
        except PersistenceError:
            if stored_name is not None:
                self._cleanup(stored_name)
            raise

    def _cleanup(self, stored_name: str):
        try:
            self.storage.remove(stored_name)
        except OSError as e:
            logger.warning(f"Orphaned image {stored_name} left on disk: {e}")
