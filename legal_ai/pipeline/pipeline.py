from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from legal_ai.analysis.kinds import AnalysisKind
from legal_ai.analysis.prompt_builder import Prompt
from legal_ai.extraction.models import ExtractedContent, SourceDocument
from legal_ai.pipeline.models import AnalysisRequest, AnalysisResult, UploadedFile


class PipelineState(str, Enum):
    RECEIVED = "received"
    EXTRACTING = "extracting"
    CHUNKING = "chunking"
    SUMMARIZING_CHUNKS = "summarizing_chunks"
    MERGING = "merging"
    PROMPTING = "prompting"
    CALLING_MODEL = "calling_model"
    PARSING = "parsing"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineContext:
    request: AnalysisRequest
    upload: UploadedFile | None = None
    state: PipelineState = PipelineState.RECEIVED
    kind: AnalysisKind | None = None
    record_type: str = "document"
    document: SourceDocument | None = None
    marked_analyzing: bool = False
    content: ExtractedContent | None = None
    chunks: list[str] = field(default_factory=list)
    partial_summaries: list[str] = field(default_factory=list)
    prompt: Prompt | None = None
    raw_response: str = ""
    payload: dict[str, Any] = field(default_factory=dict)
    result: AnalysisResult | None = None
    error_message: str = ""

    @property
    def document_label(self) -> str:
        if self.document is not None:
            return f"{self.record_type} {self.document.id}"
        if self.upload is not None:
            return f"upload {self.upload.filename}"
        return "request"

    def require_kind(self) -> AnalysisKind:
        if self.kind is None:
            raise ValueError("PipelineContext.kind must be set by request validation")
        return self.kind


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
