import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from docintel.config.settings import Settings
from docintel.database.connection import apply_schema, close_pool, get_connection, init_pool
from docintel.database.repositories.documents_repository import DocumentsRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docintel_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        apply_schema()
    except (psycopg.Error, OSError) as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def clean_tables(db_conn: psycopg.Connection[Any]) -> Generator[None, None, None]:
    """Start and finish each test with empty worker tables."""
    _truncate(db_conn)
    yield
    _truncate(db_conn)


def _truncate(conn: psycopg.Connection[Any]) -> None:
    conn.execute(
        "TRUNCATE document_jobs, document_scans, document_chunks, documents RESTART IDENTITY"
    )
    conn.commit()


@pytest.fixture
def seed_document(clean_tables: None) -> int:
    return DocumentsRepository().create(
        owner_id=1,
        original_name="handbook.pdf",
        mime_type="application/pdf",
        storage_path="1/handbook.pdf",
    )
