"""
repositories/job_repo.py
------------------------
Data access layer for job postings.
All SQL queries related to the `jobs` table live here.
"""

from typing import Any, Mapping, Optional

from db.connection import Database
from errors import NotFoundError
from models.job import Job
from utils.logger import get_logger
from utils.sql import JOB_FILTERS, build_filter_clause, build_update_clause

logger = get_logger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

JOB_FIELD_COLUMNS = {
    "companyHandle": "company_handle",
}


class JobRepository:
    """Repository for CRUD operations on the jobs table."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def create(
        self,
        title: str,
        company_handle: str,
        salary: Optional[int] = None,
        equity: Optional[float] = None,
    ) -> Job:
        """
        Insert a new job.

        Returns:
            The stored job with its generated `id`.

        Raises:
            InvalidInputError: If `company_handle` names no company.
        """
        row = self.db.query_one(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_COLUMNS}""",
            [title, salary, equity, company_handle],
        )
        job = Job.from_row(row)
        logger.info(f"Created job #{job.id} for company '{company_handle}'")
        return job

    # ── READ ──────────────────────────────────────────────

    def list_all(self, filters: Optional[Mapping[str, Any]] = None) -> list[Job]:
        """
        List jobs ordered by id.

        Args:
            filters: Validated filters keyed by title, minSalary or hasEquity.

        Returns:
            Matching jobs; an empty list when nothing matches.
        """
        sql = f"SELECT {JOB_COLUMNS} FROM jobs"
        values: list = []
        if filters:
            where, values = build_filter_clause(filters, JOB_FILTERS)
            if where:
                sql += f" WHERE {where}"
        sql += " ORDER BY id"

        return [Job.from_row(r) for r in self.db.query(sql, values)]

    def get_by_company(self, company_handle: str) -> list[Job]:
        """
        List the jobs of one company, ordered by id.

        Raises:
            NotFoundError: If the company itself does not exist.
        """
        rows = self.db.query(
            f"SELECT {JOB_COLUMNS} FROM jobs WHERE company_handle = $1 ORDER BY id",
            [company_handle],
        )
        if not rows:
            company = self.db.query_one(
                "SELECT handle FROM companies WHERE handle = $1", [company_handle]
            )
            if not company:
                raise NotFoundError(
                    f"No company: {company_handle}", details={"handle": company_handle}
                )
        return [Job.from_row(r) for r in rows]

    def get(self, job_id: int) -> Job:
        """
        Fetch a single job.

        Raises:
            NotFoundError: If no job has this id.
        """
        row = self.db.query_one(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
        if not row:
            raise NotFoundError(f"No job found with id: {job_id}", details={"id": job_id})
        return Job.from_row(row)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, job_id: int, data: Mapping[str, Any]) -> Job:
        """
        Partially update a job; only the supplied fields change.

        Args:
            job_id: Job to update.
            data: Any subset of title, salary, equity.

        Raises:
            InvalidInputError: If `data` is empty.
            NotFoundError: If no job has this id.
        """
        set_cols, values = build_update_clause(data, JOB_FIELD_COLUMNS)
        id_idx = len(values) + 1

        row = self.db.query_one(
            f"""UPDATE jobs
                SET {set_cols}
                WHERE id = ${id_idx}
                RETURNING {JOB_COLUMNS}""",
            [*values, job_id],
        )
        if not row:
            raise NotFoundError(f"No job: {job_id}", details={"id": job_id})

        logger.info(f"Updated job #{job_id} ({', '.join(data)})")
        return Job.from_row(row)

    # ── DELETE ────────────────────────────────────────────

    def remove(self, job_id: int) -> None:
        """
        Delete a job.

        Raises:
            NotFoundError: If no job has this id.
        """
        row = self.db.query_one("DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
        if not row:
            raise NotFoundError(f"No job: {job_id}", details={"id": job_id})
        logger.info(f"Deleted job #{job_id}")
