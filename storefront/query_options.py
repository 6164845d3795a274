"""
Storefront Backend: Query Options Builder
=========================================

What:  Turns the flat query parameters of a list request into a normalized
       retrieval description: equality filters, one sort key, limit and offset.
How:   Pure function over a mapping; never raises.
Who:   List routes build the options; Repository.list() applies them.

Parameter handling:
    filters  Only keys named in the resource's allow-list, and only when the
             value is not None. Anything else the client sends is ignored.
    sortBy   "field:direction". direction "desc" sorts descending, anything
             else (or nothing) ascending. The field name is NOT checked here;
             the repository hands it to the store, which ignores names that
             match no column.
    limit    Page size. int() coercion; unparsable or 0 means "no limit".
    page     1-indexed page number. int() coercion; unparsable or 0 means 1.

    Negative limit/page values are passed through as-is. Clamping or
    rejecting them is left to the caller or the store.

Example:
    GET /v1/products?name=Foo&role=x&sortBy=price:desc&limit=2&page=2
    with allow-list ("name",) becomes
        filters={"name": "Foo"}, sort=SortSpec("price", descending=True),
        limit=2, page=2, offset=2
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional

SORT_PARAM = "sortBy"
LIMIT_PARAM = "limit"
PAGE_PARAM = "page"


@dataclass(frozen=True)
class SortSpec:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class QueryOptions:
    filters: Dict[str, Any] = field(default_factory=dict)
    sort: Optional[SortSpec] = None
    limit: Optional[int] = None
    page: int = 1
    offset: int = 0


def _coerce_int(value: Any, default: Optional[int]) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number or default


def parse_sort(token: Any) -> Optional[SortSpec]:
    """Parse a "field:direction" token; None when no field is named."""
    if not isinstance(token, str):
        return None
    name, _, direction = token.partition(":")
    name = name.strip()
    if not name:
        return None
    return SortSpec(field=name, descending=direction.strip().lower() == "desc")


def build_query_options(
    query: Mapping[str, Any],
    allowed_filters: Iterable[str] = (),
) -> QueryOptions:
    filters = {
        key: query[key]
        for key in allowed_filters
        if key in query and query[key] is not None
    }
    limit = _coerce_int(query.get(LIMIT_PARAM), None)
    page = _coerce_int(query.get(PAGE_PARAM), 1)
    offset = (page - 1) * limit if limit is not None else 0
    return QueryOptions(
        filters=filters,
        sort=parse_sort(query.get(SORT_PARAM)),
        limit=limit,
        page=page,
        offset=offset,
    )
