"""
services/filters.py
-------------------
Validation of list filters as they arrive from a query string.

Every value arrives as a string. Unknown keys are rejected here, before
any SQL is built, and numeric bounds are parsed into integers.
"""

from typing import Any, Mapping

from errors import InvalidInputError
from utils.sql import COMPANY_FILTERS, JOB_FILTERS

INVALID_FILTERS = "Invalid filters!"

COMPANY_FILTER_KEYS = tuple(COMPANY_FILTERS)
JOB_FILTER_KEYS = tuple(JOB_FILTERS)

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


def _reject_unknown(query: Mapping[str, Any], allowed: tuple) -> None:
    unknown = [key for key in query if key not in allowed]
    if unknown:
        raise InvalidInputError(INVALID_FILTERS, details={"keys": unknown})


def _parse_count(key: str, value: Any) -> int:
    """Parse a non-negative integer bound."""
    if isinstance(value, bool):
        raise InvalidInputError(f"{key} must be a non-negative integer")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidInputError(f"{key} must be a non-negative integer") from None
    if number < 0:
        raise InvalidInputError(f"{key} must be a non-negative integer")
    return number


def _parse_flag(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise InvalidInputError(f"{key} must be true or false")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_company_filters(query: Mapping[str, Any]) -> dict:
    """
    Validate company list filters.

    Args:
        query: Raw query parameters (name, minEmployees, maxEmployees).

    Returns:
        Filters ready for the repository, in the order they were supplied.

    Raises:
        InvalidInputError: On an unknown key, a non-numeric bound, or
            minEmployees greater than maxEmployees.
    """
    _reject_unknown(query, COMPANY_FILTER_KEYS)

    filters: dict = {}
    for key, value in query.items():
        if _is_blank(value):
            continue
        if key == "name":
            filters[key] = str(value).strip()
        else:
            filters[key] = _parse_count(key, value)

    low, high = filters.get("minEmployees"), filters.get("maxEmployees")
    if low is not None and high is not None and low > high:
        raise InvalidInputError("minEmployees cannot be greater than maxEmployees")
    return filters


def parse_job_filters(query: Mapping[str, Any]) -> dict:
    """
    Validate job list filters.

    `hasEquity` is kept only when true; a false flag means no filtering.

    Raises:
        InvalidInputError: On an unknown key or a malformed value.
    """
    _reject_unknown(query, JOB_FILTER_KEYS)

    filters: dict = {}
    for key, value in query.items():
        if _is_blank(value):
            continue
        if key == "title":
            filters[key] = str(value).strip()
        elif key == "minSalary":
            filters[key] = _parse_count(key, value)
        elif _parse_flag(key, value):
            filters[key] = True
    return filters
