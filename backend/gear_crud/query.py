"""
Gear CRUD — Query Builder
==========================

What:  Turns raw query-string parameters into paging, sort and filter options.
Why:   Both store implementations interpret list requests identically.
How:   `build_filter()` reads the `page`, `count` and `sort` keys plus any key
       the record type declares as filterable; everything else is ignored.
       `build_query()` produces the equality filter for point operations.

Query-string contract:
    page    1-based page number. Absent, non-numeric or outside the signed
            64-bit range → 1. Values <= 0 turn skipping off (the first
            `count` records are returned).
    count   Page size / result limit. Absent, non-numeric, <= 0 or outside the
            signed 64-bit range → the configured default. The skip offset is
            capped at the largest 64-bit value.
    sort    Field to sort on, always ascending. Absent → "_id".
    <field> Equality constraint on a filterable field, e.g. ?type=Heavy.

Examples:
    GET /armor?page=2&count=10          → skip 10, limit 10, sort _id
    GET /armor?type=Heavy&sort=price    → skip 0, limit 25, {"type": "Heavy"}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from gear_crud.identifiers import RecordID
from gear_crud.models.gear import INT64_MAX, INT64_MIN

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 25
DEFAULT_SORT_FIELD = "_id"

PAGE_KEY = "page"
COUNT_KEY = "count"
SORT_KEY = "sort"


@dataclass(frozen=True)
class QueryOptions:
    """Output of `build_filter()`, consumed by the store's list operations."""

    page_number: int = DEFAULT_PAGE_NUMBER
    page_count: int = DEFAULT_PAGE_SIZE
    sort: str = DEFAULT_SORT_FIELD
    filter: Dict[str, Any] = field(default_factory=dict)

    @property
    def skip(self) -> int:
        if self.page_number > 0:
            return min((self.page_number - 1) * self.page_count, INT64_MAX)
        return 0


def _parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except (TypeError, ValueError):
        return None
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def build_filter(
    query_params: Mapping[str, str],
    filter_fields: Mapping[str, type],
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryOptions:
    """
    Build paging, sort and filter options from query parameters.

    Args:
        query_params: Raw query string values (first value per key).
        filter_fields: Filterable document keys mapped to their value type
            (`str` or `int`). Integer values that do not parse or do not fit in
            64 bits are dropped.
        default_page_size: Limit used when `count` is missing or unusable.
    """
    page_number = _parse_int(query_params.get(PAGE_KEY))
    if page_number is None:
        page_number = DEFAULT_PAGE_NUMBER

    page_count = _parse_int(query_params.get(COUNT_KEY))
    if page_count is None or page_count <= 0:
        page_count = default_page_size

    sort = (query_params.get(SORT_KEY) or "").strip() or DEFAULT_SORT_FIELD

    constraints: Dict[str, Any] = {}
    for key, value_type in filter_fields.items():
        raw = query_params.get(key)
        if raw is None:
            continue
        if value_type is int:
            parsed = _parse_int(raw)
            if parsed is None:
                continue
            constraints[key] = parsed
        else:
            constraints[key] = raw

    return QueryOptions(
        page_number=page_number,
        page_count=page_count,
        sort=sort,
        filter=constraints,
    )


def build_query(
    record_id: Optional[RecordID] = None,
    filter: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Equality filter for get/update/delete by identifier."""
    query: Dict[str, Any] = dict(filter or {})
    if record_id is not None:
        query["_id"] = record_id
    return query
