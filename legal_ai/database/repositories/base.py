from abc import ABC, abstractmethod

from legal_ai.extraction.models import SourceDocument
from legal_ai.pipeline.models import AnalysisResult


class AnalysisTargetRepository(ABC):
    """A table whose rows can be analyzed and carry their own analysis status."""

    record_type: str = "record"

    @abstractmethod
    def find_by_id(self, record_id: int) -> SourceDocument:
        raise NotImplementedError

    @abstractmethod
    def mark_analyzing(self, record_id: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def mark_failed(self, record_id: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def update_analysis(self, record_id: int, result: AnalysisResult) -> None:
        raise NotImplementedError
