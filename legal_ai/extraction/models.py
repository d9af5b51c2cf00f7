from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath


class SourceKind(str, Enum):
    """File format family derived once from a document's MIME type and name."""

    PDF = "pdf"
    PLAIN_TEXT = "plain_text"
    WORD = "word"
    IMAGE = "image"
    OTHER = "other"


class ExtractionOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    UNSUPPORTED_FORMAT = "unsupported_format"
    CORRUPTED = "corrupted"
    SOURCE_UNAVAILABLE = "source_unavailable"


@dataclass(frozen=True)
class S3Reference:
    bucket: str
    key: str


@dataclass(frozen=True)
class SourceDocument:
    """A stored file (or inline text) available for analysis.

    At most one of ``s3_ref`` and ``local_path`` is set. Documents with
    neither are text-only submissions and rely on ``text_content``.
    """

    id: int
    original_name: str
    mime_type: str
    file_size_bytes: int
    s3_ref: S3Reference | None = None
    local_path: str | None = None
    text_content: str | None = None

    def __post_init__(self) -> None:
        if self.s3_ref is not None and self.local_path:
            raise ValueError(
                f"Document {self.id} has both an object-storage and a local-path reference"
            )

    @property
    def extension(self) -> str:
        return PurePath(self.original_name).suffix.lstrip(".").lower()


@dataclass(frozen=True)
class ExtractedContent:
    """Transient result of content extraction, consumed by the pipeline."""

    text: str
    outcome: ExtractionOutcome
    message: str = ""

    @property
    def is_degraded(self) -> bool:
        return self.outcome in (
            ExtractionOutcome.UNSUPPORTED_FORMAT,
            ExtractionOutcome.CORRUPTED,
        )
