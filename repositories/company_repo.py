"""
repositories/company_repo.py
----------------------------
Data access layer for companies.
All SQL queries related to the `companies` table live here.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Mapping, Optional

from db.connection import Database
from errors import ConflictError, NotFoundError
from models.company import Company
from models.job import Job
from repositories.job_repo import JOB_COLUMNS
from utils.logger import get_logger
from utils.sql import COMPANY_FILTERS, build_filter_clause, build_update_clause

logger = get_logger(__name__)

COMPANY_COLUMNS = (
    'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

COMPANY_FIELD_COLUMNS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


class CompanyRepository:
    """Repository for CRUD operations on the companies table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def create(
        self,
        handle: str,
        name: str,
        description: Optional[str] = None,
        num_employees: Optional[int] = None,
        logo_url: Optional[str] = None,
    ) -> Company:
        """
        Insert a new company.

        Raises:
            ConflictError: If a company with this handle already exists.
        """
        if self.exists(handle):
            raise ConflictError(f"Duplicate company: {handle}", details={"handle": handle})

        row = self.db.query_one(
            f"""INSERT INTO companies
                    (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_COLUMNS}""",
            [handle, name, description, num_employees, logo_url],
        )
        logger.info(f"Created company '{handle}'")
        return Company.from_row(row)

    # ── READ ──────────────────────────────────────────────

    def list_all(self, filters: Optional[Mapping[str, Any]] = None) -> list[Company]:
        """
        List companies ordered by name.

        Args:
            filters: Validated filters keyed by minEmployees, maxEmployees
                or name. None or empty lists every company.

        Returns:
            Matching companies; an empty list when nothing matches.
        """
        sql = f"SELECT {COMPANY_COLUMNS} FROM companies"
        values: list = []
        if filters:
            where, values = build_filter_clause(filters, COMPANY_FILTERS)
            if where:
                sql += f" WHERE {where}"
        sql += " ORDER BY name"

        return [Company.from_row(r) for r in self.db.query(sql, values)]

    def get(self, handle: str) -> Company:
        """
        Fetch a company together with its jobs.

        The company row and the job rows are read concurrently on
        separate pooled connections.

        Raises:
            NotFoundError: If no company has this handle.
        """
        company_sql = f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1"
        jobs_sql = f"SELECT {JOB_COLUMNS} FROM jobs WHERE company_handle = $1 ORDER BY id"

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="company_get") as executor:
            company_future = executor.submit(self.db.query_one, company_sql, [handle])
            jobs_future = executor.submit(self.db.query, jobs_sql, [handle])
            row = company_future.result()
            job_rows = jobs_future.result()

        if not row:
            raise NotFoundError(f"No company: {handle}", details={"handle": handle})

        company = Company.from_row(row)
        company.jobs = [Job.from_row(r) for r in job_rows]
        return company

    def exists(self, handle: str) -> bool:
        """Check whether a company with this handle is stored."""
        return self.db.query_one(
            "SELECT handle FROM companies WHERE handle = $1", [handle]
        ) is not None

    # ── UPDATE ────────────────────────────────────────────

    def update(self, handle: str, data: Mapping[str, Any]) -> Company:
        """
        Partially update a company; only the supplied fields change.

        Args:
            handle: Company to update.
            data: Any subset of name, description, numEmployees, logoUrl.

        Raises:
            InvalidInputError: If `data` is empty.
            NotFoundError: If no company has this handle.
        """
        set_cols, values = build_update_clause(data, COMPANY_FIELD_COLUMNS)
        handle_idx = len(values) + 1

        row = self.db.query_one(
            f"""UPDATE companies
                SET {set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {COMPANY_COLUMNS}""",
            [*values, handle],
        )
        if not row:
            raise NotFoundError(f"No company: {handle}", details={"handle": handle})

        logger.info(f"Updated company '{handle}' ({', '.join(data)})")
        return Company.from_row(row)

    # ── DELETE ────────────────────────────────────────────

    def remove(self, handle: str) -> None:
        """
        Delete a company; its jobs go with it.

        Raises:
            NotFoundError: If no company has this handle.
        """
        row = self.db.query_one(
            "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle]
        )
        if not row:
            raise NotFoundError(f"No company: {handle}", details={"handle": handle})
        logger.info(f"Deleted company '{handle}'")
