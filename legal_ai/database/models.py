from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class DocumentAnalysisRecord:
    """One analysis slot of a row in the documents table."""

    document_id: int
    kind: str
    status: str
    payload: dict[str, Any] | None = None
    last_analyzed: datetime | None = None
    analysis_version: str | None = None
    gpt_queries: int = 0
