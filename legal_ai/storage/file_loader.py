from pathlib import Path

from legal_ai.extraction.models import SourceDocument
from legal_ai.storage.base import BaseObjectStorage
from legal_ai.storage.exceptions import ObjectNotFoundError, StorageError


class FileLoader:
    """Resolves a document's storage reference and reads its bytes."""

    def __init__(self, object_storage: BaseObjectStorage, files_root: Path) -> None:
        self._object_storage = object_storage
        self._files_root = files_root

    def has_file(self, document: SourceDocument) -> bool:
        return document.s3_ref is not None or bool(document.local_path)

    def load(self, document: SourceDocument) -> bytes:
        """Read document bytes from object storage or local disk.

        Raises:
            ObjectNotFoundError: if the document has no reference or the target is missing.
            StorageTimeoutError: if the object-storage fetch times out.
            StorageError: on any other read failure.
        """
        if document.s3_ref is not None:
            return self._object_storage.fetch_object(
                document.s3_ref.bucket, document.s3_ref.key
            )
        if document.local_path:
            return self._read_local(self._resolve_path(document.local_path))
        raise ObjectNotFoundError(
            f"Document {document.id} has no object-storage or local file reference"
        )

    def _resolve_path(self, local_path: str) -> Path:
        path = Path(local_path)
        return path if path.is_absolute() else self._files_root / path

    @staticmethod
    def _read_local(path: Path) -> bytes:
        if not path.is_file():
            raise ObjectNotFoundError(f"File not found: {path}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc
