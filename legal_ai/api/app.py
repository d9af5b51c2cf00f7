from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from legal_ai.analysis.exceptions import UpstreamError, UpstreamErrorKind
from legal_ai.api.routes import router
from legal_ai.logging.logger import Log
from legal_ai.pipeline.exceptions import (
    AnalysisValidationError,
    ContractNotFoundError,
    DocumentNotFoundError,
    PersistenceError,
    SourceUnavailableError,
)
from legal_ai.pipeline.orchestrator import AnalysisOrchestrator


def _error(status_code: int, error: str, details: object | None = None) -> JSONResponse:
    body: dict[str, object] = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


async def _handle_request_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()
    ]
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request", details)


async def _handle_validation(_: Request, exc: AnalysisValidationError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def _handle_not_found(_: Request, exc: DocumentNotFoundError) -> JSONResponse:
    error = "Contract not found" if isinstance(exc, ContractNotFoundError) else "Document not found"
    return _error(status.HTTP_404_NOT_FOUND, error, str(exc))


async def _handle_source_unavailable(_: Request, exc: SourceUnavailableError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "Document content not available", str(exc))


async def _handle_upstream(_: Request, exc: UpstreamError) -> JSONResponse:
    Log.error(f"Upstream failure ({exc.kind.value}): {exc}")
    status_code = (
        status.HTTP_504_GATEWAY_TIMEOUT
        if exc.kind is UpstreamErrorKind.TIMEOUT
        else status.HTTP_502_BAD_GATEWAY
    )
    return _error(
        status_code,
        "Upstream service failed",
        {"kind": exc.kind.value, "message": str(exc)},
    )


async def _handle_persistence(_: Request, exc: PersistenceError) -> JSONResponse:
    Log.error(f"Persistence failure: {exc}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save analysis", str(exc))


def create_app(orchestrator: AnalysisOrchestrator) -> FastAPI:
    """Build the FastAPI application around an already-composed orchestrator."""
    app = FastAPI(title="Legal AI Pipeline", version="0.1.0")
    app.state.orchestrator = orchestrator
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(AnalysisValidationError, _handle_validation)
    app.add_exception_handler(DocumentNotFoundError, _handle_not_found)
    app.add_exception_handler(SourceUnavailableError, _handle_source_unavailable)
    app.add_exception_handler(UpstreamError, _handle_upstream)
    app.add_exception_handler(PersistenceError, _handle_persistence)
    return app
