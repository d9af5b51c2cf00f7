from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from legal_ai.analysis.kinds import ANALYSIS_PROFILES, AnalysisKind
from legal_ai.database.connection import get_connection
from legal_ai.database.models import DocumentAnalysisRecord
from legal_ai.database.repositories.base import AnalysisTargetRepository
from legal_ai.extraction.models import S3Reference, SourceDocument
from legal_ai.pipeline.exceptions import DocumentNotFoundError, PersistenceError
from legal_ai.pipeline.models import AnalysisResult, AnalysisStatus


class DocumentsRepository(AnalysisTargetRepository):
    """Database operations for the documents table."""

    record_type = "document"

    def find_by_id(self, document_id: int) -> SourceDocument:
        """Load file metadata for a document.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, original_name, mime_type, file_size_bytes,
                           s3_bucket, s3_key, file_path, text_content
                    FROM documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return self._to_source_document(row)

    def mark_analyzing(self, document_id: int) -> None:
        self._set_status(document_id, AnalysisStatus.ANALYZING)

    def mark_failed(self, document_id: int) -> None:
        self._set_status(document_id, AnalysisStatus.FAILED)

    def update_analysis(self, document_id: int, result: AnalysisResult) -> None:
        """Write one analysis slot and the document status in a single UPDATE.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            PersistenceError: on any database failure.
        """
        column = self._result_column(result.kind)
        assignments = [
            sql.SQL("{} = %s").format(sql.Identifier(column)),
            sql.SQL("ai_analysis_status = %s"),
            sql.SQL("last_analyzed = %s"),
            sql.SQL("analysis_version = %s"),
        ]
        params: list[Any] = [
            Jsonb(result.payload),
            result.status.value,
            result.analyzed_at,
            result.version,
        ]
        if result.kind is AnalysisKind.DOCUMENT_QA:
            assignments.append(sql.SQL("gpt_queries = COALESCE(gpt_queries, 0) + 1"))
            assignments.append(sql.SQL("last_gpt_query = %s"))
            params.append(result.analyzed_at)
        query = sql.SQL("UPDATE documents SET {} WHERE id = %s").format(
            sql.SQL(", ").join(assignments)
        )
        params.append(document_id)
        self._execute_update(document_id, query, params)

    def find_analysis(self, document_id: int, kind: AnalysisKind) -> DocumentAnalysisRecord:
        """Read the stored analysis slot for ``kind``.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        column = self._result_column(kind)
        query = sql.SQL(
            """
            SELECT id, ai_analysis_status, {} AS payload, last_analyzed,
                   analysis_version, gpt_queries
            FROM documents
            WHERE id = %s
            """
        ).format(sql.Identifier(column))
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, (document_id,))
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return DocumentAnalysisRecord(
            document_id=row["id"],
            kind=kind.value,
            status=row["ai_analysis_status"] or AnalysisStatus.NOT_ANALYZED.value,
            payload=row["payload"],
            last_analyzed=row["last_analyzed"],
            analysis_version=row["analysis_version"],
            gpt_queries=row["gpt_queries"] or 0,
        )

    @staticmethod
    def _result_column(kind: AnalysisKind) -> str:
        column = ANALYSIS_PROFILES[kind].result_column
        if column is None:
            raise ValueError(f"Analysis type '{kind.value}' is not stored on documents")
        return column

    def _set_status(self, document_id: int, status: AnalysisStatus) -> None:
        self._execute_update(
            document_id,
            sql.SQL("UPDATE documents SET ai_analysis_status = %s WHERE id = %s"),
            [status.value, document_id],
        )

    @staticmethod
    def _execute_update(document_id: int, query: sql.Composable, params: list[Any]) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    if cur.rowcount == 0:
                        raise DocumentNotFoundError(f"Document {document_id} not found")
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to update document {document_id}: {exc}") from exc

    @staticmethod
    def _to_source_document(row: dict[str, Any]) -> SourceDocument:
        s3_ref = None
        local_path = row["file_path"] or None
        if row["s3_bucket"] and row["s3_key"]:
            s3_ref = S3Reference(bucket=row["s3_bucket"], key=row["s3_key"])
            local_path = None
        return SourceDocument(
            id=row["id"],
            original_name=row["original_name"] or "",
            mime_type=row["mime_type"] or "",
            file_size_bytes=row["file_size_bytes"] or 0,
            s3_ref=s3_ref,
            local_path=local_path,
            text_content=row["text_content"],
        )
