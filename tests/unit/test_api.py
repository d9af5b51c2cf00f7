from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from legal_ai.analysis.exceptions import UpstreamError, UpstreamErrorKind
from legal_ai.analysis.kinds import AnalysisKind
from legal_ai.api.app import create_app
from legal_ai.database.models import DocumentAnalysisRecord
from legal_ai.pipeline.exceptions import (
    AnalysisValidationError,
    ContractNotFoundError,
    DocumentNotFoundError,
    PersistenceError,
    SourceUnavailableError,
)
from legal_ai.pipeline.models import AnalysisRequest, UploadedFile
from legal_ai.pipeline.orchestrator import AnalysisOrchestrator, AnalysisOutcome

_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def orchestrator() -> MagicMock:
    return MagicMock(spec=AnalysisOrchestrator)


@pytest.fixture()
def client(orchestrator: MagicMock) -> TestClient:
    return TestClient(create_app(orchestrator))


def _outcome(kind: AnalysisKind, payload: dict, document_id: int | None = None) -> AnalysisOutcome:
    return AnalysisOutcome(kind=kind, payload=payload, analyzed_at=_NOW, document_id=document_id)


class TestHealth:
    def test_healthz(self, client: TestClient) -> None:
        response = client.get("/healthz")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestAnalyze:
    def test_returns_camel_case_result(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.analyze_document.return_value = _outcome(
            AnalysisKind.RISK_ASSESSMENT, {"overall_risk": "low"}, document_id=3
        )

        response = client.post("/analyze", json={"documentId": 3, "analysisType": "risk_assessment"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["analysisType"] == "risk_assessment"
        assert body["documentId"] == 3
        assert body["result"] == {"overall_risk": "low"}
        orchestrator.analyze_document.assert_called_once_with(
            AnalysisRequest(analysis_type="risk_assessment", document_id=3, question="")
        )

    def test_forwards_requester_header(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.analyze_document.return_value = _outcome(
            AnalysisKind.COMPREHENSIVE, {"summary": "ok"}, document_id=3
        )

        client.post(
            "/analyze",
            json={"documentId": 3, "analysisType": "comprehensive"},
            headers={"X-User-Id": "attorney-42"},
        )

        request = orchestrator.analyze_document.call_args.args[0]
        assert request.requester == "attorney-42"

    def test_missing_fields_reach_validation(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.analyze_document.side_effect = AnalysisValidationError(
            "Analysis type is required"
        )

        response = client.post("/analyze", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Analysis type is required"}

    def test_malformed_body_is_400(self, client: TestClient) -> None:
        response = client.post("/analyze", json={"documentId": "not-a-number"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_document_not_found_is_404(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.analyze_document.side_effect = DocumentNotFoundError("Document 9 not found")

        response = client.post("/analyze", json={"documentId": 9, "analysisType": "comprehensive"})

        assert response.status_code == 404
        assert response.json()["error"] == "Document not found"

    def test_source_unavailable_is_404(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.analyze_document.side_effect = SourceUnavailableError("gone")

        response = client.post("/analyze", json={"documentId": 9, "analysisType": "comprehensive"})

        assert response.status_code == 404
        assert response.json()["error"] == "Document content not available"

    @pytest.mark.parametrize(
        ("kind", "status_code"),
        [
            (UpstreamErrorKind.RATE_LIMITED, 502),
            (UpstreamErrorKind.SERVER_ERROR, 502),
            (UpstreamErrorKind.MALFORMED, 502),
            (UpstreamErrorKind.TIMEOUT, 504),
        ],
    )
    def test_upstream_errors(
        self,
        client: TestClient,
        orchestrator: MagicMock,
        kind: UpstreamErrorKind,
        status_code: int,
    ) -> None:
        orchestrator.analyze_document.side_effect = UpstreamError(kind, "provider failed")

        response = client.post("/analyze", json={"documentId": 1, "analysisType": "comprehensive"})

        assert response.status_code == status_code
        assert response.json()["details"] == {"kind": kind.value, "message": "provider failed"}

    def test_persistence_error_is_500(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.analyze_document.side_effect = PersistenceError("db down")

        response = client.post("/analyze", json={"documentId": 1, "analysisType": "comprehensive"})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to save analysis"


class TestDocumentQuestion:
    def test_returns_answer(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.ask_document.return_value = _outcome(
            AnalysisKind.DOCUMENT_QA,
            {"answer": "Thirty days.", "question": "Notice period?"},
            document_id=2,
        )

        response = client.post(
            "/ai-document-question", json={"documentId": 2, "question": "Notice period?"}
        )

        assert response.status_code == 200
        assert response.json()["answer"] == "Thirty days."
        assert response.json()["documentId"] == 2
        orchestrator.ask_document.assert_called_once_with(2, "Notice period?", None)


class TestUploads:
    def test_summarize_pdf_upload(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.summarize_upload.return_value = _outcome(
            AnalysisKind.SUMMARIZATION, {"summary": "A lease."}
        )

        response = client.post(
            "/summarize-pdf", files={"file": ("lease.pdf", b"%PDF-1.4", "application/pdf")}
        )

        assert response.status_code == 200
        assert response.json()["summary"] == "A lease."
        upload = orchestrator.summarize_upload.call_args.args[0]
        assert upload == UploadedFile(data=b"%PDF-1.4", filename="lease.pdf", mime_type="application/pdf")

    def test_summarize_without_file(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.summarize_upload.side_effect = AnalysisValidationError("No file uploaded")

        response = client.post("/summarize-pdf")

        assert response.status_code == 400
        orchestrator.summarize_upload.assert_called_once_with(None)

    def test_ask_file_question(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.ask_upload.return_value = _outcome(
            AnalysisKind.DOCUMENT_QA, {"answer": "Yes.", "question": "Signed?"}
        )

        response = client.post(
            "/ai-file-question",
            files={"file": ("memo.txt", b"Signed by both.", "text/plain")},
            data={"question": "Signed?"},
        )

        assert response.status_code == 200
        assert response.json()["answer"] == "Yes."
        upload, question = orchestrator.ask_upload.call_args.args
        assert upload.filename == "memo.txt"
        assert question == "Signed?"


class TestStoredAnalysis:
    def test_returns_record(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.get_analysis.return_value = DocumentAnalysisRecord(
            document_id=4,
            kind="summarization",
            status="analyzed",
            payload={"summary": "Short."},
            last_analyzed=_NOW,
            analysis_version="1.0",
        )

        response = client.get("/documents/4/analysis/summarization")

        assert response.status_code == 200
        body = response.json()
        assert body["analysisType"] == "summarization"
        assert body["result"] == {"summary": "Short."}
        assert body["gptQueries"] == 0
        orchestrator.get_analysis.assert_called_once_with(4, "summarization")


class TestContracts:
    def test_analyze_contract(self, client: TestClient, orchestrator: MagicMock) -> None:
        review = {"clauses": [{"type": "Indemnity", "risk": "high"}], "summary": "Risky."}
        orchestrator.analyze_contract.return_value = _outcome(
            AnalysisKind.CONTRACT_REVIEW, review, document_id=11
        )

        response = client.post("/contracts/11/analyze", headers={"X-User-Id": "u-1"})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Contract analysis completed successfully"
        assert body["contractId"] == 11
        assert body["analysis"] == review
        orchestrator.analyze_contract.assert_called_once_with(11, "u-1")

    def test_compare_contract(self, client: TestClient, orchestrator: MagicMock) -> None:
        comparison = {"deviations": ["No cap on liability"], "overallAssessment": "Fair"}
        orchestrator.compare_contract.return_value = _outcome(
            AnalysisKind.CONTRACT_COMPARISON, comparison, document_id=11
        )

        response = client.post("/contracts/11/compare")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Contract comparison completed"
        assert body["comparison"] == comparison
        orchestrator.compare_contract.assert_called_once_with(11, None)

    def test_missing_contract_is_404(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.analyze_contract.side_effect = ContractNotFoundError("Contract 5 not found")

        response = client.post("/contracts/5/analyze")

        assert response.status_code == 404
        assert response.json() == {"error": "Contract not found", "details": "Contract 5 not found"}

    def test_upstream_failure_is_502(self, client: TestClient, orchestrator: MagicMock) -> None:
        orchestrator.compare_contract.side_effect = UpstreamError(
            UpstreamErrorKind.SERVER_ERROR, "provider failed"
        )

        response = client.post("/contracts/5/compare")

        assert response.status_code == 502
        assert response.json()["error"] == "Upstream service failed"
