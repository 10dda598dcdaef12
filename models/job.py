"""
models/job.py
-------------
Domain model for job postings.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union


def normalize_equity(value: Union[Decimal, str, float, None]) -> Optional[float]:
    """The store returns NUMERIC as Decimal; callers get a float (or None)."""
    return None if value is None else float(value)


@dataclass
class Job:
    """
    A job posting owned by a company.

    Attributes:
        id: Store-generated primary key (None before insert).
        title: Display title.
        salary: Yearly salary, None when undisclosed.
        equity: Fraction in [0, 1], None when undisclosed.
        company_handle: Handle of the owning company.
    """
    title: str
    company_handle: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: dict) -> "Job":
        return cls(
            id=row.get("id"),
            title=row["title"],
            salary=row.get("salary"),
            equity=normalize_equity(row.get("equity")),
            company_handle=row["companyHandle"],
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "salary": self.salary,
            "equity": self.equity,
            "companyHandle": self.company_handle,
        }
