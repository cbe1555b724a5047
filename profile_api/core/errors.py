# profile_api/core/errors.py


class UploadError(Exception):
    """Base class for failures while handling an image upload."""


class InvalidExtensionError(UploadError):
    """The declared file name does not end in an allowed image extension."""

    message = "Invalid File Extension! Allowed: .jpg, .jpeg, .png"

    def __init__(self, filename=None):
        super().__init__(self.message)
        self.filename = filename


class StorageIOError(UploadError):
    """The image could not be written to the storage directory."""


class PersistenceError(UploadError):
    """The user record could not be saved."""
