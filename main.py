"""
main.py
-------
Entry point for the Jobly data layer.

Responsibilities:
    - Open the database connection pool and create the schema.
    - Wire repositories and services for the transport layer.
    - Close the pool on shutdown.
"""

from dataclasses import dataclass

import config
from db.connection import Database
from db.init_db import create_tables
from repositories.company_repo import CompanyRepository
from repositories.job_repo import JobRepository
from services.company_service import CompanyService
from services.job_service import JobService
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Jobly:
    """Everything a request handler needs, sharing one connection pool."""
    db: Database
    companies: CompanyService
    jobs: JobService

    def close(self) -> None:
        self.db.close()


def log_config() -> None:
    """Print the effective configuration, secret redacted."""
    logger.info("Jobly config:")
    logger.info(f"  APP_ENV: {config.APP_ENV}")
    logger.info(f"  SECRET_KEY: {'*' * 8 if config.SECRET_KEY else '(unset)'}")
    logger.info(f"  PORT: {config.PORT}")
    logger.info(f"  BCRYPT_WORK_FACTOR: {config.BCRYPT_WORK_FACTOR}")
    logger.info(f"  Database: {config.DB_TEST_NAME if config.APP_ENV == 'test' else config.DB_NAME}")


def create_app(dsn: str | None = None) -> Jobly:
    """
    Open the pool, make sure the schema exists and build the services.

    Args:
        dsn: PostgreSQL DSN; defaults to config.get_database_url().
    """
    db = Database(
        dsn or config.get_database_url(),
        min_conn=config.DB_POOL_MIN,
        max_conn=config.DB_POOL_MAX,
    ).open()
    try:
        create_tables(db)
    except Exception:
        db.close()
        raise
    return Jobly(
        db=db,
        companies=CompanyService(CompanyRepository(db)),
        jobs=JobService(JobRepository(db)),
    )


def main() -> None:
    log_config()
    app = create_app()
    try:
        companies = app.companies.list_all()
        logger.info(f"Jobly ready: {len(companies)} companies stored.")
    finally:
        app.close()


if __name__ == "__main__":
    main()
