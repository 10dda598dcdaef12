"""
services/company_service.py
---------------------------
Business rules for companies: validates incoming payloads, then
delegates to the repository and returns public dicts.
"""

import re
from typing import Any, Mapping, Optional

from errors import InvalidInputError
from repositories.company_repo import CompanyRepository
from services.filters import parse_company_filters

HANDLE_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
URL_PATTERN = re.compile(r"^https?://\S+$")

UPDATABLE_FIELDS = ("name", "description", "numEmployees", "logoUrl")


def _check_text(data: Mapping[str, Any], key: str, required: bool = False) -> None:
    value = data.get(key)
    if value is None:
        if required:
            raise InvalidInputError(f"{key} is required")
        return
    if not isinstance(value, str) or (required and not value.strip()):
        raise InvalidInputError(f"{key} must be a non-empty string")


def _check_fields(data: Mapping[str, Any]) -> None:
    """Type checks shared by create and update."""
    num = data.get("numEmployees")
    if num is not None and (isinstance(num, bool) or not isinstance(num, int) or num < 0):
        raise InvalidInputError("numEmployees must be a non-negative integer")

    logo = data.get("logoUrl")
    if logo is not None and (not isinstance(logo, str) or not URL_PATTERN.match(logo)):
        raise InvalidInputError("logoUrl must be an http(s) URL")

    _check_text(data, "description")


class CompanyService:
    """Validates company requests before they reach the store."""

    def __init__(self, repo: CompanyRepository):
        self.repo = repo

    def create(self, data: Mapping[str, Any]) -> dict:
        """
        Create a company from a request body.

        Expects handle and name; description, numEmployees and logoUrl
        are optional.
        """
        unknown = set(data) - {"handle", *UPDATABLE_FIELDS}
        if unknown:
            raise InvalidInputError(f"Unexpected fields: {', '.join(sorted(unknown))}")

        handle = data.get("handle")
        if not isinstance(handle, str) or not HANDLE_PATTERN.match(handle):
            raise InvalidInputError("handle must be lowercase letters, digits and dashes")
        _check_text(data, "name", required=True)
        _check_fields(data)

        company = self.repo.create(
            handle=handle,
            name=data["name"],
            description=data.get("description"),
            num_employees=data.get("numEmployees"),
            logo_url=data.get("logoUrl"),
        )
        return company.to_dict()

    def list_all(self, query: Optional[Mapping[str, Any]] = None) -> list[dict]:
        """List companies, optionally filtered by raw query parameters."""
        filters = parse_company_filters(query) if query else None
        return [c.to_dict() for c in self.repo.list_all(filters)]

    def get(self, handle: str) -> dict:
        """Company details including its jobs."""
        return self.repo.get(handle).to_dict()

    def update(self, handle: str, data: Mapping[str, Any]) -> dict:
        """
        Partially update a company.

        The handle cannot change; only name, description, numEmployees
        and logoUrl are accepted.
        """
        unknown = set(data) - set(UPDATABLE_FIELDS)
        if unknown:
            raise InvalidInputError(f"Cannot update: {', '.join(sorted(unknown))}")
        if "name" in data:
            _check_text(data, "name", required=True)
        _check_fields(data)
        return self.repo.update(handle, data).to_dict()

    def remove(self, handle: str) -> dict:
        self.repo.remove(handle)
        return {"deleted": handle}
