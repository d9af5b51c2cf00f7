class StorageError(Exception):
    """Base exception for file storage access."""


class ObjectNotFoundError(StorageError):
    """Raised when the referenced object or file does not exist."""


class StorageTimeoutError(StorageError):
    """Raised when a storage fetch exceeds its time budget."""
