"""
Pytest configuration and shared fixtures.
"""

import os
from decimal import Decimal
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest

from db.connection import Database
from errors import StorageError


@pytest.fixture
def fake_db() -> MagicMock:
    """A Database stand-in; tests script query()/query_one() per case."""
    db = MagicMock(spec=Database)
    db.query.return_value = []
    db.query_one.return_value = None
    return db


@pytest.fixture
def company_row() -> Dict[str, Any]:
    """A companies row as selected with public aliases."""
    return {
        "handle": "c1",
        "name": "C1",
        "description": "Desc1",
        "numEmployees": 1,
        "logoUrl": "http://c1.img",
    }


@pytest.fixture
def job_rows() -> list:
    """Two jobs rows for company c1, equity as the driver returns it."""
    return [
        {"id": 1, "title": "Software Engineer 1", "salary": 150000,
         "equity": Decimal("0.25"), "companyHandle": "c1"},
        {"id": 2, "title": "Software Engineer 2", "salary": 180000,
         "equity": None, "companyHandle": "c1"},
    ]


@pytest.fixture(scope="session")
def live_db():
    """
    A real PostgreSQL test database, or skip.

    Uses the APP_ENV=test DSN from config.get_database_url().
    """
    from config import get_database_url
    from db.init_db import create_tables

    previous = os.environ.get("APP_ENV")
    os.environ["APP_ENV"] = "test"
    try:
        dsn = get_database_url()
    finally:
        if previous is None:
            os.environ.pop("APP_ENV", None)
        else:
            os.environ["APP_ENV"] = previous

    db = Database(dsn, min_conn=1, max_conn=4)
    try:
        db.open()
    except StorageError:
        pytest.skip("PostgreSQL test database not reachable")
    create_tables(db)
    yield db
    db.close()


@pytest.fixture
def clean_db(live_db):
    """Empty tables before each integration test."""
    live_db.query("TRUNCATE jobs, companies RESTART IDENTITY CASCADE")
    return live_db
