from datetime import datetime, timezone

from legal_ai.analysis.completion import CompletionService
from legal_ai.analysis.exceptions import UpstreamError, UpstreamErrorKind
from legal_ai.analysis.kinds import ANALYSIS_PROFILES, AnalysisKind, parse_kind
from legal_ai.analysis.prompt_builder import PromptBuilder
from legal_ai.analysis.result_parser import parse_result
from legal_ai.database.repositories.base import AnalysisTargetRepository
from legal_ai.extraction.chunker import chunk_text
from legal_ai.extraction.extractor import ContentExtractor
from legal_ai.extraction.models import ExtractionOutcome
from legal_ai.logging.logger import Log
from legal_ai.pipeline.exceptions import AnalysisValidationError, SourceUnavailableError
from legal_ai.pipeline.models import AnalysisResult, AnalysisStatus
from legal_ai.pipeline.pipeline import PipelineContext, PipelineState, PipelineStep
from legal_ai.storage.exceptions import StorageError, StorageTimeoutError


class ValidateRequestStep(PipelineStep):
    """Rejects bad requests before any lookup, extraction or paid model call."""

    def __init__(
        self,
        *,
        requires_document: bool,
        kinds: frozenset[AnalysisKind] | None = None,
    ) -> None:
        self._requires_document = requires_document
        self._kinds = kinds

    def run(self, context: PipelineContext) -> PipelineContext:
        request = context.request
        if not request.analysis_type or not request.analysis_type.strip():
            raise AnalysisValidationError("Analysis type is required")
        try:
            kind = parse_kind(request.analysis_type)
        except ValueError as exc:
            raise AnalysisValidationError(str(exc)) from exc
        if self._kinds is not None and kind not in self._kinds:
            raise AnalysisValidationError(
                f"Analysis type '{kind.value}' is not available for this record. "
                f"Choose from: {sorted(k.value for k in self._kinds)}"
            )

        if self._requires_document and request.document_id is None:
            raise AnalysisValidationError("Document ID is required")
        if not self._requires_document and context.upload is None:
            raise AnalysisValidationError("No file uploaded")
        if ANALYSIS_PROFILES[kind].requires_question and not request.question.strip():
            raise AnalysisValidationError("A non-empty question is required for document_qa")

        context.kind = kind
        return context


class LoadDocumentStep(PipelineStep):
    def __init__(self, repo: AnalysisTargetRepository) -> None:
        self._repo = repo

    def run(self, context: PipelineContext) -> PipelineContext:
        document_id = context.request.document_id
        if document_id is None:
            raise ValueError("AnalysisRequest.document_id must be set before loading")
        context.record_type = self._repo.record_type
        context.document = self._repo.find_by_id(document_id)
        return context


class MarkAnalyzingStep(PipelineStep):
    def __init__(self, repo: AnalysisTargetRepository) -> None:
        self._repo = repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before marking analyzing")
        self._repo.mark_analyzing(context.document.id)
        context.marked_analyzing = True
        Log.info(
            "Marked as analyzing",
            source=context.document_label,
            kind=context.require_kind().value,
            requester=context.request.requester or "anonymous",
        )
        return context


class ExtractContentStep(PipelineStep):
    def __init__(self, extractor: ContentExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.state = PipelineState.EXTRACTING
        try:
            if context.upload is not None:
                upload = context.upload
                content = self._extractor.extract_bytes(
                    upload.data, mime_type=upload.mime_type, original_name=upload.filename
                )
            elif context.document is not None:
                content = self._extractor.extract(context.document)
            else:
                raise ValueError("PipelineContext needs a document or an upload to extract")
        except StorageTimeoutError as exc:
            raise UpstreamError(UpstreamErrorKind.TIMEOUT, str(exc)) from exc
        except StorageError as exc:
            raise UpstreamError(UpstreamErrorKind.SERVER_ERROR, str(exc)) from exc

        if content.outcome is ExtractionOutcome.SOURCE_UNAVAILABLE:
            raise SourceUnavailableError(
                f"Content not available for {context.document_label}: {content.message}"
            )
        if content.is_degraded:
            Log.warning(
                f"Proceeding with placeholder content for {context.document_label} "
                f"({content.outcome.value})"
            )
        context.content = content
        return context


class SummarizeChunksStep(PipelineStep):
    """Summarizes each chunk of long text; short text and other kinds pass through."""

    def __init__(
        self,
        *,
        completion: CompletionService,
        prompt_builder: PromptBuilder,
        chunk_size_chars: int,
    ) -> None:
        self._completion = completion
        self._prompt_builder = prompt_builder
        self._chunk_size_chars = chunk_size_chars

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.require_kind() is not AnalysisKind.SUMMARIZATION:
            return context
        if context.content is None:
            raise ValueError("PipelineContext.content must be set before summarizing")
        text = context.content.text
        if len(text) <= self._chunk_size_chars:
            return context

        context.state = PipelineState.CHUNKING
        context.chunks = chunk_text(text, self._chunk_size_chars)
        context.state = PipelineState.SUMMARIZING_CHUNKS
        profile = ANALYSIS_PROFILES[AnalysisKind.SUMMARIZATION]
        for index, chunk in enumerate(context.chunks, start=1):
            prompt = self._prompt_builder.build(AnalysisKind.SUMMARIZATION, chunk)
            context.partial_summaries.append(self._completion.complete(prompt, profile).strip())
            Log.info(
                f"Summarized chunk {index}/{len(context.chunks)}", source=context.document_label
            )
        context.state = PipelineState.MERGING
        return context


class BuildPromptStep(PipelineStep):
    def __init__(self, prompt_builder: PromptBuilder) -> None:
        self._prompt_builder = prompt_builder

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.content is None:
            raise ValueError("PipelineContext.content must be set before prompting")
        if context.partial_summaries:
            context.prompt = self._prompt_builder.build_summary_merge(context.partial_summaries)
        else:
            context.prompt = self._prompt_builder.build(
                context.require_kind(),
                context.content.text,
                document_name=self._document_name(context),
                question=context.request.question.strip(),
            )
        context.state = PipelineState.PROMPTING
        return context

    @staticmethod
    def _document_name(context: PipelineContext) -> str:
        if context.document is not None:
            return context.document.original_name
        if context.upload is not None:
            return context.upload.filename
        return ""


class CallModelStep(PipelineStep):
    def __init__(self, completion: CompletionService) -> None:
        self._completion = completion

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.prompt is None:
            raise ValueError("PipelineContext.prompt must be set before calling the model")
        context.state = PipelineState.CALLING_MODEL
        profile = ANALYSIS_PROFILES[context.require_kind()]
        context.raw_response = self._completion.complete(context.prompt, profile)
        Log.info(
            "Model response received",
            source=context.document_label,
            kind=profile.kind.value,
            chars=len(context.raw_response),
        )
        return context


class ParseResultStep(PipelineStep):
    def __init__(self, analysis_version: str) -> None:
        self._analysis_version = analysis_version

    def run(self, context: PipelineContext) -> PipelineContext:
        context.state = PipelineState.PARSING
        kind = context.require_kind()
        payload = parse_result(context.raw_response, kind)
        if kind is AnalysisKind.DOCUMENT_QA:
            payload["question"] = context.request.question.strip()
        if context.content is not None and context.content.is_degraded:
            payload["_extraction"] = {
                "outcome": context.content.outcome.value,
                "message": context.content.message,
                "confidence": "low",
            }
        context.payload = payload
        context.result = AnalysisResult(
            kind=kind,
            status=AnalysisStatus.ANALYZED,
            payload=payload,
            analyzed_at=datetime.now(timezone.utc),
            version=self._analysis_version,
        )
        return context


class PersistResultStep(PipelineStep):
    def __init__(self, repo: AnalysisTargetRepository) -> None:
        self._repo = repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None or context.result is None:
            raise ValueError("PipelineContext.document and result must be set before persist")
        context.state = PipelineState.PERSISTING
        self._repo.update_analysis(context.document.id, context.result)
        Log.info(
            "Persisted analysis result",
            source=context.document_label,
            kind=context.result.kind.value,
        )
        return context


class MarkFailedStep(PipelineStep):
    """Moves a document out of ``analyzing`` after a failure; no partial result is written."""

    def __init__(self, repo: AnalysisTargetRepository) -> None:
        self._repo = repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None or not context.marked_analyzing:
            return context
        self._repo.mark_failed(context.document.id)
        Log.error(
            f"Analysis marked as failed: {context.error_message}",
            source=context.document_label,
        )
        return context
