from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from legal_ai.analysis.kinds import AnalysisKind
from legal_ai.database.connection import get_connection
from legal_ai.database.repositories.base import AnalysisTargetRepository
from legal_ai.extraction.models import SourceDocument
from legal_ai.pipeline.exceptions import ContractNotFoundError, PersistenceError
from legal_ai.pipeline.models import AnalysisResult, AnalysisStatus

# Used when the score is missing or unparseable, as for a fallback-wrapped response.
DEFAULT_RISK_SCORE = 50


def ocr_required_placeholder(original_name: str) -> str:
    return f"[Document content for {original_name} - OCR processing required]"


def key_clauses(payload: dict[str, Any]) -> list[Any]:
    clauses = payload.get("clauses")
    return clauses if isinstance(clauses, list) else []


def risk_factors(payload: dict[str, Any]) -> dict[str, Any]:
    """Fold a contract review payload into the stored risk-factor summary."""
    assessment = payload.get("riskAssessment")
    if not isinstance(assessment, dict):
        assessment = {}
    score = assessment.get("overallRiskScore")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not score:
        score = DEFAULT_RISK_SCORE
    return {
        "overallRiskScore": score,
        "riskAssessment": assessment.get("riskFactors") or {},
        "missingClauses": payload.get("missingClauses") or [],
        "complianceIssues": payload.get("complianceIssues") or [],
        "recommendations": payload.get("recommendations") or [],
    }


class ContractsRepository(AnalysisTargetRepository):
    """Database operations for the contracts table.

    Contracts are analyzed from their stored text: ``extracted_text`` first,
    then ``ocr_text``, then a placeholder asking for OCR.
    """

    record_type = "contract"

    def find_by_id(self, contract_id: int) -> SourceDocument:
        """Load a contract as a text-only source document.

        Raises:
            ContractNotFoundError: if no contract with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, title, original_name, mime_type, file_size_bytes,
                           extracted_text, ocr_text
                    FROM contracts
                    WHERE id = %s
                    """,
                    (contract_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise ContractNotFoundError(f"Contract {contract_id} not found")
        return self._to_source_document(row)

    def mark_analyzing(self, contract_id: int) -> None:
        self._set_status(contract_id, AnalysisStatus.ANALYZING)

    def mark_failed(self, contract_id: int) -> None:
        self._set_status(contract_id, AnalysisStatus.FAILED)

    def update_analysis(self, contract_id: int, result: AnalysisResult) -> None:
        """Store a contract review or comparison together with the contract status.

        A review fills ``ai_key_clauses`` and ``ai_risk_factors``; a comparison
        fills ``ai_contract_comparison``.

        Raises:
            ValueError: for analysis kinds that contracts do not store.
            ContractNotFoundError: if no contract with this ID exists.
            PersistenceError: on any database failure.
        """
        if result.kind is AnalysisKind.CONTRACT_REVIEW:
            assignments = [
                sql.SQL("ai_key_clauses = %s"),
                sql.SQL("ai_risk_factors = %s"),
            ]
            params: list[Any] = [
                Jsonb(key_clauses(result.payload)),
                Jsonb(risk_factors(result.payload)),
            ]
        elif result.kind is AnalysisKind.CONTRACT_COMPARISON:
            assignments = [sql.SQL("ai_contract_comparison = %s")]
            params = [Jsonb(result.payload)]
        else:
            raise ValueError(f"Analysis type '{result.kind.value}' is not stored on contracts")

        assignments += [
            sql.SQL("ai_analysis_status = %s"),
            sql.SQL("last_analyzed = %s"),
            sql.SQL("analysis_version = %s"),
        ]
        params += [result.status.value, result.analyzed_at, result.version, contract_id]
        query = sql.SQL("UPDATE contracts SET {} WHERE id = %s").format(
            sql.SQL(", ").join(assignments)
        )
        self._execute_update(contract_id, query, params)

    def _set_status(self, contract_id: int, status: AnalysisStatus) -> None:
        self._execute_update(
            contract_id,
            sql.SQL("UPDATE contracts SET ai_analysis_status = %s WHERE id = %s"),
            [status.value, contract_id],
        )

    @staticmethod
    def _execute_update(contract_id: int, query: sql.Composable, params: list[Any]) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    if cur.rowcount == 0:
                        raise ContractNotFoundError(f"Contract {contract_id} not found")
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to update contract {contract_id}: {exc}") from exc

    @staticmethod
    def _to_source_document(row: dict[str, Any]) -> SourceDocument:
        original_name = row["original_name"] or ""
        text = row["extracted_text"] or row["ocr_text"] or ocr_required_placeholder(original_name)
        return SourceDocument(
            id=row["id"],
            original_name=row["title"] or original_name,
            mime_type=row["mime_type"] or "",
            file_size_bytes=row["file_size_bytes"] or 0,
            text_content=text,
        )
