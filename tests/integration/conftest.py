import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from legal_ai.config.settings import Settings
from legal_ai.database.connection import close_pool, get_connection, init_pool


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "legal_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1 FROM documents LIMIT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB with a documents table not available: {e}")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    document_ids: list[int] = []
    yield document_ids
    if not document_ids:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for document_id in document_ids:
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
        conn.commit()


@pytest.fixture
def seed_document(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[int],
) -> int:
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO documents (original_name, mime_type, file_size_bytes, file_path)
            VALUES (%s, %s, %s, %s)
            RETURNING id
            """,
            ("services.pdf", "application/pdf", 1024, "matters/services.pdf"),
        )
        row = cur.fetchone()
        assert row is not None
        document_id = row[0]
    db_conn.commit()
    integration_cleanup.append(document_id)
    return document_id


@pytest.fixture
def seed_contract(db_conn: psycopg.Connection[Any]) -> Generator[int, None, None]:
    try:
        db_conn.execute("SELECT 1 FROM contracts LIMIT 1")
    except psycopg.Error as e:
        db_conn.rollback()
        pytest.skip(f"PostgreSQL test DB has no contracts table: {e}")
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO contracts (title, original_name, extracted_text)
            VALUES (%s, %s, %s)
            RETURNING id
            """,
            ("Master Services Agreement", "msa.pdf", "The supplier shall indemnify the client."),
        )
        row = cur.fetchone()
        assert row is not None
        contract_id = row[0]
    db_conn.commit()
    yield contract_id
    db_conn.execute("DELETE FROM contracts WHERE id = %s", (contract_id,))
    db_conn.commit()
