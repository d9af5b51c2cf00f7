from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from legal_ai.analysis.kinds import AnalysisKind


class AnalysisStatus(str, Enum):
    NOT_ANALYZED = "not_analyzed"
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"
    FAILED = "failed"


@dataclass(frozen=True)
class AnalysisRequest:
    """Parameters of one pipeline invocation, as received from the caller."""

    analysis_type: str
    # Row id in the table the pipeline targets: documents or contracts.
    document_id: int | None = None
    question: str = ""
    requester: str | None = None


@dataclass(frozen=True)
class UploadedFile:
    """A file submitted with the request and analyzed in memory only."""

    data: bytes
    filename: str
    mime_type: str


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome persisted into a document's single slot for ``kind``."""

    kind: AnalysisKind
    status: AnalysisStatus
    payload: dict[str, Any] = field(default_factory=dict)
    analyzed_at: datetime | None = None
    version: str = "1.0"
