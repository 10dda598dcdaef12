"""
utils/sql.py
------------
Builders for the dynamic parts of SQL statements.

Both builders return a clause fragment that only ever contains quoted column
names and positional ``$n`` markers, plus the ordered list of values bound to
those markers. Values never enter the SQL text.
"""

from dataclasses import dataclass
from typing import Any, Mapping, NamedTuple, Optional

from errors import InvalidInputError


class UpdateClause(NamedTuple):
    clause: str
    values: list


class FilterClause(NamedTuple):
    clause: str
    values: list


@dataclass(frozen=True)
class FilterRule:
    """
    How one recognized filter key becomes a WHERE term.

    Attributes:
        column: Stored column the key compares against.
        operator: SQL comparison operator.
        contains: Wrap the value in ``%...%`` for a substring match.
        value: Fixed value to bind instead of the caller's (e.g. ``hasEquity``).
        flag: The caller's value is an on/off switch; a false value adds
            no term at all.
    """
    column: str
    operator: str
    contains: bool = False
    value: Any = None
    flag: bool = False


COMPANY_FILTERS: dict[str, FilterRule] = {
    "name": FilterRule("handle", "LIKE", contains=True),
    "minEmployees": FilterRule("num_employees", ">="),
    "maxEmployees": FilterRule("num_employees", "<="),
}

JOB_FILTERS: dict[str, FilterRule] = {
    "title": FilterRule("title", "ILIKE", contains=True),
    "minSalary": FilterRule("salary", ">="),
    "hasEquity": FilterRule("equity", ">", value=0, flag=True),
}


def escape_like(text: str) -> str:
    """Escape LIKE metacharacters so the caller's text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_update_clause(
    fields: Mapping[str, Any], name_translation: Mapping[str, str]
) -> UpdateClause:
    """
    Build the SET clause of a partial update.

    Args:
        fields: Field name -> new value, only the fields being changed.
        name_translation: Public field name -> stored column name. Keys
            missing from the table are used as column names verbatim.

    Returns:
        UpdateClause, e.g. ('"num_employees" = $1, "name" = $2', [10, 'Acme']).

    Raises:
        InvalidInputError: If `fields` is empty.

    Example:
        >>> build_update_clause({"numEmployees": 10}, {"numEmployees": "num_employees"})
        UpdateClause(clause='"num_employees" = $1', values=[10])
    """
    if not fields:
        raise InvalidInputError("No data")

    assignments = [
        f'"{name_translation.get(key, key)}" = ${idx}'
        for idx, key in enumerate(fields, start=1)
    ]
    return UpdateClause(", ".join(assignments), list(fields.values()))


def build_filter_clause(
    filters: Mapping[str, Any],
    recognized: Mapping[str, FilterRule],
    start: int = 1,
) -> FilterClause:
    """
    Build the body of a WHERE clause from already validated filters.

    Terms are ANDed together in the order the filters were supplied.
    A flag filter set to false adds no term, so the clause may be empty.

    Args:
        filters: Filter key -> parsed value.
        recognized: Closed table of filter keys this entity supports.
        start: Number of the first positional marker.

    Raises:
        InvalidInputError: If a key is not in `recognized`.
    """
    unknown = [key for key in filters if key not in recognized]
    if unknown:
        raise InvalidInputError("Invalid filters!", details={"keys": unknown})

    terms: list[str] = []
    values: list = []
    idx = start
    for key, raw in filters.items():
        rule = recognized[key]
        if rule.flag and not raw:
            continue
        terms.append(f'"{rule.column}" {rule.operator} ${idx}')
        values.append(_bind_value(rule, raw))
        idx += 1
    return FilterClause(" AND ".join(terms), values)


def _bind_value(rule: FilterRule, raw: Any) -> Optional[Any]:
    if rule.value is not None:
        return rule.value
    if rule.contains:
        return f"%{escape_like(str(raw))}%"
    return raw
