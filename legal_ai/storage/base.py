from abc import ABC, abstractmethod


class BaseObjectStorage(ABC):
    """Contract for object-storage backends."""

    @abstractmethod
    def fetch_object(self, bucket: str, key: str) -> bytes:
        """Return the full object body.

        Raises:
            ObjectNotFoundError: if the bucket or key does not exist.
            StorageTimeoutError: if the fetch times out.
            StorageError: on any other backend failure.
        """
