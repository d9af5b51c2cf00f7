from dataclasses import dataclass
from datetime import datetime
from typing import Any

from legal_ai.analysis import CompletionClientFactory, CompletionService, PromptBuilder
from legal_ai.analysis.kinds import CONTRACT_KINDS, DOCUMENT_KINDS, AnalysisKind, parse_kind
from legal_ai.config.settings import Settings
from legal_ai.database.models import DocumentAnalysisRecord
from legal_ai.database.repositories.contracts_repository import ContractsRepository
from legal_ai.database.repositories.documents_repository import DocumentsRepository
from legal_ai.extraction.factory import ContentExtractorFactory
from legal_ai.pipeline.exceptions import AnalysisValidationError
from legal_ai.pipeline.models import AnalysisRequest, UploadedFile
from legal_ai.pipeline.pipeline import PipelineContext, PipelineStep
from legal_ai.pipeline.processor import Processor
from legal_ai.pipeline.steps import (
    BuildPromptStep,
    CallModelStep,
    ExtractContentStep,
    LoadDocumentStep,
    MarkAnalyzingStep,
    MarkFailedStep,
    ParseResultStep,
    PersistResultStep,
    SummarizeChunksStep,
    ValidateRequestStep,
)
from legal_ai.storage.file_loader import FileLoader
from legal_ai.storage.s3_adapter import S3ObjectStorage


@dataclass(frozen=True)
class AnalysisOutcome:
    kind: AnalysisKind
    payload: dict[str, Any]
    analyzed_at: datetime
    document_id: int | None = None


class AnalysisOrchestrator:
    """Entry points for stored-document, contract and in-memory upload analysis."""

    def __init__(
        self,
        *,
        document_processor: Processor,
        contract_processor: Processor,
        upload_processor: Processor,
        doc_repo: DocumentsRepository,
    ) -> None:
        self._document_processor = document_processor
        self._contract_processor = contract_processor
        self._upload_processor = upload_processor
        self._doc_repo = doc_repo

    def analyze_document(self, request: AnalysisRequest) -> AnalysisOutcome:
        context = self._document_processor.process(PipelineContext(request=request))
        return self._outcome(context, request.document_id)

    def ask_document(
        self, document_id: int | None, question: str, requester: str | None = None
    ) -> AnalysisOutcome:
        return self.analyze_document(
            AnalysisRequest(
                analysis_type=AnalysisKind.DOCUMENT_QA.value,
                document_id=document_id,
                question=question,
                requester=requester,
            )
        )

    def analyze_contract(self, contract_id: int, requester: str | None = None) -> AnalysisOutcome:
        """Review a contract's clauses and risks and store them on the contract."""
        return self._run_contract(AnalysisKind.CONTRACT_REVIEW, contract_id, requester)

    def compare_contract(self, contract_id: int, requester: str | None = None) -> AnalysisOutcome:
        """Compare a contract against standard templates and store the comparison."""
        return self._run_contract(AnalysisKind.CONTRACT_COMPARISON, contract_id, requester)

    def summarize_upload(self, upload: UploadedFile | None) -> AnalysisOutcome:
        return self._analyze_upload(
            AnalysisRequest(analysis_type=AnalysisKind.SUMMARIZATION.value), upload
        )

    def ask_upload(self, upload: UploadedFile | None, question: str) -> AnalysisOutcome:
        return self._analyze_upload(
            AnalysisRequest(analysis_type=AnalysisKind.DOCUMENT_QA.value, question=question),
            upload,
        )

    def get_analysis(self, document_id: int, analysis_type: str) -> DocumentAnalysisRecord:
        try:
            kind = parse_kind(analysis_type)
        except ValueError as exc:
            raise AnalysisValidationError(str(exc)) from exc
        if kind not in DOCUMENT_KINDS:
            raise AnalysisValidationError(
                f"Analysis type '{kind.value}' is not stored on documents"
            )
        return self._doc_repo.find_analysis(document_id, kind)

    def _run_contract(
        self, kind: AnalysisKind, contract_id: int, requester: str | None
    ) -> AnalysisOutcome:
        request = AnalysisRequest(
            analysis_type=kind.value, document_id=contract_id, requester=requester
        )
        context = self._contract_processor.process(PipelineContext(request=request))
        return self._outcome(context, contract_id)

    def _analyze_upload(
        self, request: AnalysisRequest, upload: UploadedFile | None
    ) -> AnalysisOutcome:
        context = self._upload_processor.process(PipelineContext(request=request, upload=upload))
        return self._outcome(context, None)

    @staticmethod
    def _outcome(context: PipelineContext, document_id: int | None) -> AnalysisOutcome:
        if context.result is None or context.result.analyzed_at is None:
            raise ValueError("Pipeline finished without a result")
        return AnalysisOutcome(
            kind=context.result.kind,
            payload=context.result.payload,
            analyzed_at=context.result.analyzed_at,
            document_id=document_id,
        )


def build_orchestrator(
    settings: Settings,
    *,
    doc_repo: DocumentsRepository | None = None,
    contracts_repo: ContractsRepository | None = None,
    completion: CompletionService | None = None,
    file_loader: FileLoader | None = None,
) -> AnalysisOrchestrator:
    """Compose the orchestrator and all of its collaborators from settings."""
    doc_repo = doc_repo or DocumentsRepository()
    contracts_repo = contracts_repo or ContractsRepository()
    completion = completion or CompletionService(
        client=CompletionClientFactory.create(settings),
        model=settings.llm_model_name,
    )
    file_loader = file_loader or FileLoader(
        object_storage=S3ObjectStorage(
            region=settings.s3_region,
            timeout_seconds=settings.storage_timeout_seconds,
            endpoint_url=settings.s3_endpoint_url,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
        ),
        files_root=settings.files_root,
    )
    extractor = ContentExtractorFactory.create(settings, file_loader)
    prompt_builder = PromptBuilder(
        max_content_chars=settings.max_content_chars,
        summary_chunk_chars=settings.chunk_size_chars,
    )

    def analysis_steps() -> list[PipelineStep]:
        return [
            ExtractContentStep(extractor),
            SummarizeChunksStep(
                completion=completion,
                prompt_builder=prompt_builder,
                chunk_size_chars=settings.chunk_size_chars,
            ),
            BuildPromptStep(prompt_builder),
            CallModelStep(completion),
            ParseResultStep(settings.analysis_version),
        ]

    document_processor = Processor(
        steps=[
            ValidateRequestStep(requires_document=True, kinds=DOCUMENT_KINDS),
            LoadDocumentStep(doc_repo),
            MarkAnalyzingStep(doc_repo),
            *analysis_steps(),
            PersistResultStep(doc_repo),
        ],
        failed_step=MarkFailedStep(doc_repo),
    )
    contract_processor = Processor(
        steps=[
            ValidateRequestStep(requires_document=True, kinds=CONTRACT_KINDS),
            LoadDocumentStep(contracts_repo),
            MarkAnalyzingStep(contracts_repo),
            *analysis_steps(),
            PersistResultStep(contracts_repo),
        ],
        failed_step=MarkFailedStep(contracts_repo),
    )
    upload_processor = Processor(
        steps=[ValidateRequestStep(requires_document=False), *analysis_steps()],
    )
    return AnalysisOrchestrator(
        document_processor=document_processor,
        contract_processor=contract_processor,
        upload_processor=upload_processor,
        doc_repo=doc_repo,
    )
