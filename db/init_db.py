"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Companies: keyed by their natural handle
CREATE TABLE IF NOT EXISTS companies (
    handle          VARCHAR(25) PRIMARY KEY CHECK (handle = lower(handle)),
    name            TEXT UNIQUE NOT NULL,
    num_employees   INTEGER CHECK (num_employees >= 0),
    description     TEXT,
    logo_url        TEXT
);

-- Jobs: surrogate id, removed together with their company
CREATE TABLE IF NOT EXISTS jobs (
    id              SERIAL PRIMARY KEY,
    title           TEXT NOT NULL,
    salary          INTEGER CHECK (salary >= 0),
    equity          NUMERIC CHECK (equity <= 1.0),
    company_handle  VARCHAR(25) NOT NULL
                    REFERENCES companies(handle) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_jobs_company ON jobs(company_handle);
"""


def create_tables(db: Database) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    db.query(SCHEMA_SQL)
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    from config import DATABASE_URL

    with Database(DATABASE_URL) as database:
        create_tables(database)
