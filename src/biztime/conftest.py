# src/biztime/conftest.py
"""
Pytest configuration and shared fixtures.

Tests are co-located with implementation files using the *_test.py suffix.
This file provides fixtures available to all tests in the package.
Database-backed tests are skipped when PostgreSQL is unreachable.
"""

import os

# Set environment BEFORE importing any app modules
os.environ["BIZTIME_ENV"] = "test"

from pathlib import Path

import psycopg
import pytest
from psycopg.rows import dict_row

from biztime import db
from biztime.config import config

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_db():
    """
    Create test database and schema once per test session.

    This fixture:
    1. Drops the test database if it exists (clean slate)
    2. Creates a fresh test database
    3. Applies the schema migration

    Runs once at the start of the test session.
    """
    test_db_url = config.database_url

    # e.g., "postgresql:///biztime_test" -> "biztime_test"
    base_url = test_db_url.rsplit("/", 1)[0] + "/postgres"
    db_name = test_db_url.rsplit("/", 1)[1].split("?")[0]

    try:
        admin = psycopg.connect(base_url, autocommit=True)
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    with admin:
        with admin.cursor() as cur:
            # Terminate existing connections to test database
            cur.execute(
                """
                SELECT pg_terminate_backend(pg_stat_activity.pid)
                FROM pg_stat_activity
                WHERE pg_stat_activity.datname = %s
                AND pid <> pg_backend_pid()
            """,
                (db_name,),
            )

            cur.execute(f"DROP DATABASE IF EXISTS {db_name}")
            cur.execute(f"CREATE DATABASE {db_name}")

    # Apply schema migrations
    migrations_dir = Path(__file__).parent.parent.parent / "migrations"
    schema_file = migrations_dir / "001_initial_schema.sql"

    if not schema_file.exists():
        raise FileNotFoundError(f"Migration file not found: {schema_file}")

    with psycopg.connect(test_db_url) as conn:
        with conn.cursor() as cur:
            cur.execute(schema_file.read_text())
        conn.commit()

    yield test_db_url


@pytest.fixture
def db_connection(test_db):
    """
    Provide a database connection with transaction rollback.

    Each test runs in a transaction that is rolled back at the end, and
    every Database.transaction() inside it becomes a savepoint.
    """
    conn = psycopg.connect(config.database_url)

    # Clean slate: truncate all tables before each test
    with conn.cursor() as cur:
        cur.execute("TRUNCATE companies, invoices RESTART IDENTITY CASCADE")
    conn.commit()

    with conn.transaction(force_rollback=True):
        # Override the db module to use this connection
        db.set_connection_override(conn)
        yield conn
        db.clear_connection_override()

    conn.close()


@pytest.fixture
def db_cursor(db_connection):
    """Provide a cursor for direct SQL operations in tests."""
    with db_connection.cursor(row_factory=dict_row) as cur:
        yield cur


@pytest.fixture
def database():
    """A Database that is never opened; tests reach the store through the override."""
    return db.Database(config.database_url, statement_timeout_ms=config.statement_timeout_ms)


@pytest.fixture
def access(db_connection, database):
    """Provide a DataAccess bound to the test connection."""
    from biztime.access import DataAccess

    return DataAccess(database)


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def company_repo(access):
    """Provide a CompanyRepository instance."""
    from biztime.company import CompanyRepository

    return CompanyRepository(access)


@pytest.fixture
def invoice_repo(access):
    """Provide an InvoiceRepository instance."""
    from biztime.invoice import InvoiceRepository

    return InvoiceRepository(access)


# =============================================================================
# Seed Data Fixtures
# =============================================================================


@pytest.fixture
def sample_company(db_cursor) -> dict:
    """Create a single test company."""
    db_cursor.execute(
        """
        INSERT INTO companies (code, name, description)
        VALUES (%s, %s, %s)
        RETURNING *
        """,
        ("apple", "Apple Computer", "Maker of OSX."),
    )
    return db_cursor.fetchone()


@pytest.fixture
def sample_invoices(db_cursor, sample_company) -> list[dict]:
    """Create two unpaid invoices and one paid invoice for the sample company."""
    invoices = []
    for amt, paid, paid_date in [(100, False, None), (200, False, None), (300, True, "2018-01-01")]:
        db_cursor.execute(
            """
            INSERT INTO invoices (comp_code, amt, paid, paid_date)
            VALUES (%s, %s, %s, %s)
            RETURNING *
            """,
            (sample_company["code"], amt, paid, paid_date),
        )
        invoices.append(db_cursor.fetchone())
    return invoices


# =============================================================================
# Flask App Fixtures
# =============================================================================


@pytest.fixture
def app(db_connection, database):
    """Create Flask application for testing."""
    from biztime.app import create_app

    app = create_app(database=database)
    app.config["TESTING"] = True

    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()
