"""
models/company.py
-----------------
Domain model for companies.
"""

from dataclasses import dataclass, field
from typing import Optional

from models.job import Job


@dataclass
class Company:
    """
    A company that posts jobs.

    Attributes:
        handle: Unique lowercase identifier (primary key, never changes).
        name: Display name.
        description: Free text.
        num_employees: Head count, None when unknown.
        logo_url: Logo location, None when unknown.
        jobs: Jobs posted by this company (only filled by a detail fetch).
    """
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None
    jobs: Optional[list[Job]] = field(default=None)

    @classmethod
    def from_row(cls, row: dict) -> "Company":
        """Build a Company from a row selected with public aliases."""
        return cls(
            handle=row["handle"],
            name=row["name"],
            description=row.get("description"),
            num_employees=row.get("numEmployees"),
            logo_url=row.get("logoUrl"),
        )

    def to_dict(self) -> dict:
        """Public representation; `jobs` is only present after a detail fetch."""
        data = {
            "handle": self.handle,
            "name": self.name,
            "description": self.description,
            "numEmployees": self.num_employees,
            "logoUrl": self.logo_url,
        }
        if self.jobs is not None:
            data["jobs"] = [job.to_dict() for job in self.jobs]
        return data
