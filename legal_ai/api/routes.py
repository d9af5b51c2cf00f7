from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, Form, Header, Request, UploadFile

from legal_ai.api.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    AnswerResponse,
    ContractAnalysisResponse,
    ContractComparisonResponse,
    DocumentQuestionRequest,
    StoredAnalysisResponse,
    SummaryResponse,
)
from legal_ai.logging.logger import Log
from legal_ai.pipeline.models import AnalysisRequest, UploadedFile
from legal_ai.pipeline.orchestrator import AnalysisOrchestrator

router = APIRouter()


def get_orchestrator(request: Request) -> AnalysisOrchestrator:
    return request.app.state.orchestrator


def get_requester(x_user_id: str | None = Header(default=None)) -> str | None:
    """Caller identity forwarded by the authenticating gateway, if any."""
    return x_user_id or None


def _read_upload(file: UploadFile | None) -> UploadedFile | None:
    if file is None:
        return None
    data = file.file.read()
    return UploadedFile(
        data=data,
        filename=file.filename or "upload",
        mime_type=file.content_type or "application/octet-stream",
    )


@router.get("/healthz")
def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_document(
    body: AnalyzeRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    requester: str | None = Depends(get_requester),
) -> AnalyzeResponse:
    """Run one analysis kind over a stored document and persist the result."""
    Log.info(f"POST /analyze document={body.document_id} type={body.analysis_type}")
    outcome = orchestrator.analyze_document(
        AnalysisRequest(
            analysis_type=body.analysis_type or "",
            document_id=body.document_id,
            question=body.question or "",
            requester=requester,
        )
    )
    return AnalyzeResponse(
        analysis_type=outcome.kind.value,
        result=outcome.payload,
        document_id=outcome.document_id,
        timestamp=outcome.analyzed_at,
    )


@router.post("/ai-document-question", response_model=AnswerResponse)
def ask_document(
    body: DocumentQuestionRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    requester: str | None = Depends(get_requester),
) -> AnswerResponse:
    outcome = orchestrator.ask_document(body.document_id, body.question or "", requester)
    return AnswerResponse(
        answer=outcome.payload["answer"],
        question=outcome.payload["question"],
        document_id=outcome.document_id,
        timestamp=outcome.analyzed_at,
    )


@router.post("/summarize-pdf", response_model=SummaryResponse)
def summarize_pdf(
    file: UploadFile | None = File(default=None),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> SummaryResponse:
    """Summarize an uploaded file without storing it."""
    outcome = orchestrator.summarize_upload(_read_upload(file))
    return SummaryResponse(
        summary=outcome.payload["summary"],
        timestamp=outcome.analyzed_at,
        extraction=outcome.payload.get("_extraction"),
    )


@router.post("/ai-file-question", response_model=AnswerResponse)
def ask_file(
    file: UploadFile | None = File(default=None),
    question: str = Form(default=""),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> AnswerResponse:
    outcome = orchestrator.ask_upload(_read_upload(file), question)
    return AnswerResponse(
        answer=outcome.payload["answer"],
        question=outcome.payload["question"],
        timestamp=outcome.analyzed_at,
    )


@router.get(
    "/documents/{document_id}/analysis/{analysis_type}",
    response_model=StoredAnalysisResponse,
)
def get_stored_analysis(
    document_id: int,
    analysis_type: str,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
) -> StoredAnalysisResponse:
    record = orchestrator.get_analysis(document_id, analysis_type)
    return StoredAnalysisResponse(
        document_id=record.document_id,
        analysis_type=record.kind,
        status=record.status,
        result=record.payload,
        last_analyzed=record.last_analyzed,
        analysis_version=record.analysis_version,
        gpt_queries=record.gpt_queries,
    )


@router.post("/contracts/{contract_id}/analyze", response_model=ContractAnalysisResponse)
def analyze_contract(
    contract_id: int,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    requester: str | None = Depends(get_requester),
) -> ContractAnalysisResponse:
    """Review a contract's clauses and risks and store them on the contract."""
    outcome = orchestrator.analyze_contract(contract_id, requester)
    return ContractAnalysisResponse(
        contract_id=contract_id, analysis=outcome.payload, timestamp=outcome.analyzed_at
    )


@router.post("/contracts/{contract_id}/compare", response_model=ContractComparisonResponse)
def compare_contract(
    contract_id: int,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
    requester: str | None = Depends(get_requester),
) -> ContractComparisonResponse:
    outcome = orchestrator.compare_contract(contract_id, requester)
    return ContractComparisonResponse(
        contract_id=contract_id, comparison=outcome.payload, timestamp=outcome.analyzed_at
    )
