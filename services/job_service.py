"""
services/job_service.py
-----------------------
Business rules for job postings.
"""

from typing import Any, Mapping, Optional

from errors import InvalidInputError
from repositories.job_repo import JobRepository
from services.filters import parse_job_filters

UPDATABLE_FIELDS = ("title", "salary", "equity")


def parse_equity(value: Any) -> Optional[float]:
    """
    Accept equity as a number or numeric string in [0, 1].

    Raises:
        InvalidInputError: If the value is not a number in range.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInputError("equity must be a number between 0 and 1")
    try:
        equity = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError("equity must be a number between 0 and 1") from None
    if not 0 <= equity <= 1:
        raise InvalidInputError("equity must be a number between 0 and 1")
    return equity


def parse_job_id(value: Any) -> int:
    """Job ids arrive from URLs as strings."""
    try:
        job_id = int(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Invalid job id: {value}") from None
    if job_id < 1:
        raise InvalidInputError(f"Invalid job id: {value}")
    return job_id


def _check_fields(data: Mapping[str, Any]) -> dict:
    """Validate title/salary/equity and return them with equity normalized."""
    checked = dict(data)
    if "title" in data:
        title = data["title"]
        if not isinstance(title, str) or not title.strip():
            raise InvalidInputError("title must be a non-empty string")

    salary = data.get("salary")
    if salary is not None and (isinstance(salary, bool) or not isinstance(salary, int) or salary < 0):
        raise InvalidInputError("salary must be a non-negative integer")

    if "equity" in data:
        checked["equity"] = parse_equity(data["equity"])
    return checked


class JobService:
    """Validates job requests before they reach the store."""

    def __init__(self, repo: JobRepository):
        self.repo = repo

    def create(self, data: Mapping[str, Any]) -> dict:
        """Create a job; title and companyHandle are required."""
        unknown = set(data) - {"companyHandle", *UPDATABLE_FIELDS}
        if unknown:
            raise InvalidInputError(f"Unexpected fields: {', '.join(sorted(unknown))}")
        if "title" not in data:
            raise InvalidInputError("title is required")
        handle = data.get("companyHandle")
        if not isinstance(handle, str) or not handle:
            raise InvalidInputError("companyHandle is required")

        checked = _check_fields(data)
        job = self.repo.create(
            title=checked["title"],
            company_handle=handle,
            salary=checked.get("salary"),
            equity=checked.get("equity"),
        )
        return job.to_dict()

    def list_all(self, query: Optional[Mapping[str, Any]] = None) -> list[dict]:
        """List jobs, optionally filtered by raw query parameters."""
        filters = parse_job_filters(query) if query else None
        return [j.to_dict() for j in self.repo.list_all(filters)]

    def get_by_company(self, company_handle: str) -> list[dict]:
        return [j.to_dict() for j in self.repo.get_by_company(company_handle)]

    def get(self, job_id: Any) -> dict:
        return self.repo.get(parse_job_id(job_id)).to_dict()

    def update(self, job_id: Any, data: Mapping[str, Any]) -> dict:
        """
        Partially update a job.

        A job never moves to another company, so companyHandle (and id)
        are rejected.
        """
        job_id = parse_job_id(job_id)
        unknown = set(data) - set(UPDATABLE_FIELDS)
        if unknown:
            raise InvalidInputError(f"Cannot update: {', '.join(sorted(unknown))}")
        return self.repo.update(job_id, _check_fields(data)).to_dict()

    def remove(self, job_id: Any) -> dict:
        job_id = parse_job_id(job_id)
        self.repo.remove(job_id)
        return {"deleted": job_id}
