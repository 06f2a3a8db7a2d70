"""Compile flat filter/sort/paging input into the platform's searchCriteria query.

The platform reads collection queries from nested query-string keys::

    searchCriteria[filterGroups][0][filters][0][field]=name
    searchCriteria[filterGroups][0][filters][0][value]=Default%20Category
    searchCriteria[filterGroups][0][filters][0][condition_type]=eq
    searchCriteria[sortOrders][0][field]=created_at
    searchCriteria[sortOrders][0][direction]=DESC
    searchCriteria[pageSize]=10
    searchCriteria[currentPage]=1

Filters inside one group are OR'd and groups are AND'd. Every filter is
placed in its own group, so all filters must match.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Sequence
from urllib.parse import parse_qsl, quote

from commerce.errors import ValidationError

MAX_PAGE_SIZE = 10
DEFAULT_PAGE_SIZE = 10
DEFAULT_PAGE = 1


class ConditionType(str, Enum):
    EQ = "eq"
    NEQ = "neq"
    LIKE = "like"
    NLIKE = "nlike"
    GT = "gt"
    LT = "lt"
    GTEQ = "gteq"
    LTEQ = "lteq"
    IN = "in"
    NIN = "nin"
    NULL = "null"
    NOTNULL = "notnull"
    FINSET = "finset"
    NFINSET = "nfinset"
    FROM = "from"
    TO = "to"
    MOREQ = "moreq"

    @classmethod
    def parse(cls, value: Any) -> "ConditionType":
        if value is None or value == "":
            return cls.EQ
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValidationError(f"Condition type must be a string, got {type(value).__name__}")
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(c.value for c in cls)
            raise ValidationError(f"Unknown condition type {value!r}; expected one of: {allowed}") from None


CONDITION_DESCRIPTIONS = {
    ConditionType.EQ: "Equals - exact match",
    ConditionType.NEQ: "Not equal",
    ConditionType.LIKE: "Like - the value can contain SQL wildcard characters (% and _)",
    ConditionType.NLIKE: "Not like - the value can contain SQL wildcard characters",
    ConditionType.GT: "Greater than",
    ConditionType.LT: "Less than",
    ConditionType.GTEQ: "Greater than or equal",
    ConditionType.LTEQ: "Less than or equal",
    ConditionType.IN: "In - a list of values, sent comma-separated",
    ConditionType.NIN: "Not in - a list of values, sent comma-separated",
    ConditionType.NULL: "Null",
    ConditionType.NOTNULL: "Not null",
    ConditionType.FINSET: "A value within a set of values",
    ConditionType.NFINSET: "A value that is not within a set of values",
    ConditionType.FROM: "The beginning of a range. Must be used with 'to'",
    ConditionType.TO: "The end of a range. Must be used with 'from'",
    ConditionType.MOREQ: "More or equal",
}

LIST_CONDITIONS = frozenset({ConditionType.IN, ConditionType.NIN})
SORT_DIRECTIONS = ("ASC", "DESC")


@dataclass(frozen=True)
class Filter:
    field: str
    value: Any
    condition_type: ConditionType = ConditionType.EQ


@dataclass(frozen=True)
class SortOrder:
    field: str
    direction: str = "ASC"


@dataclass(frozen=True)
class SearchCriteriaRequest:
    filters: Sequence[Filter] = field(default_factory=tuple)
    sort_orders: Sequence[SortOrder] = field(default_factory=tuple)
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class CompiledSearch:
    query_string: str
    page: int
    page_size: int


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_paging(page: Any, page_size: Any) -> None:
    if not _is_int(page) or page < 1:
        raise ValidationError(f"page must be an integer >= 1, got {page!r}")
    if not _is_int(page_size) or not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValidationError(f"pageSize must be an integer between 1 and {MAX_PAGE_SIZE}, got {page_size!r}")


def _format_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError(f"Filter value must be a finite number, got {value!r}")
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    if isinstance(value, str):
        return value
    raise ValidationError(f"Unsupported filter value type {type(value).__name__}")


def format_filter_value(value: Any, condition_type: ConditionType) -> str:
    """Numbers become decimal strings, booleans 1/0, lists (in/nin only) comma-joined."""
    if isinstance(value, (list, tuple)):
        if condition_type not in LIST_CONDITIONS:
            raise ValidationError(
                f"A list value is only allowed with 'in' or 'nin', not {condition_type.value!r}"
            )
        return ",".join(_format_scalar(v) for v in value)
    return _format_scalar(value)


def _check_filter(f: Filter) -> ConditionType:
    if not isinstance(f.field, str) or not f.field.strip():
        raise ValidationError("Filter field cannot be empty")
    return ConditionType.parse(f.condition_type)


def _check_sort_order(s: SortOrder) -> None:
    if not isinstance(s.field, str) or not s.field.strip():
        raise ValidationError("Sort field cannot be empty")
    if s.direction not in SORT_DIRECTIONS:
        raise ValidationError(f"Sort direction must be ASC or DESC, got {s.direction!r}")


def compile_search_criteria(request: SearchCriteriaRequest) -> list[tuple[str, str]]:
    """Ordered (key, value) pairs for ``request``; raises ValidationError first."""
    validate_paging(request.page, request.page_size)
    conditions = [_check_filter(f) for f in request.filters]
    for s in request.sort_orders:
        _check_sort_order(s)

    pairs: list[tuple[str, str]] = []
    for g, (f, condition) in enumerate(zip(request.filters, conditions)):
        prefix = f"searchCriteria[filterGroups][{g}][filters][0]"
        pairs.append((f"{prefix}[field]", f.field))
        pairs.append((f"{prefix}[value]", format_filter_value(f.value, condition)))
        pairs.append((f"{prefix}[condition_type]", condition.value))
    for i, s in enumerate(request.sort_orders):
        pairs.append((f"searchCriteria[sortOrders][{i}][field]", s.field))
        pairs.append((f"searchCriteria[sortOrders][{i}][direction]", s.direction))
    pairs.append(("searchCriteria[pageSize]", str(request.page_size)))
    pairs.append(("searchCriteria[currentPage]", str(request.page)))
    return pairs


def encode_query(pairs: Iterable[tuple[str, str]]) -> str:
    """Percent-encode each key and value exactly once; brackets in keys stay literal."""
    return "&".join(f"{quote(k, safe='[]')}={quote(v, safe='')}" for k, v in pairs)


def _get(mapping: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    for name in names:
        if name in mapping and mapping[name] is not None:
            return mapping[name]
    return default


def parse_filter(raw: Any) -> Filter:
    if isinstance(raw, Filter):
        return raw
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Each filter must be an object with field and value, got {type(raw).__name__}")
    if "field" not in raw:
        raise ValidationError("Filter is missing 'field'")
    condition = ConditionType.parse(_get(raw, "conditionType", "condition_type"))
    if "value" not in raw and condition not in (ConditionType.NULL, ConditionType.NOTNULL):
        raise ValidationError(f"Filter on {raw['field']!r} is missing 'value'")
    return Filter(field=raw["field"], value=raw.get("value"), condition_type=condition)


def parse_sort_order(raw: Any) -> SortOrder:
    if isinstance(raw, SortOrder):
        return raw
    if not isinstance(raw, Mapping):
        raise ValidationError(f"Each sort order must be an object with field and direction, got {type(raw).__name__}")
    direction = raw.get("direction", "ASC")
    if not isinstance(direction, str):
        raise ValidationError(f"Sort direction must be ASC or DESC, got {direction!r}")
    return SortOrder(field=raw.get("field", ""), direction=direction.strip().upper())


def parse_search_input(args: Optional[Mapping[str, Any]]) -> SearchCriteriaRequest:
    """Build a request from tool input ``{filters?, sortOrders?, page?, pageSize?}``."""
    args = args or {}
    filters = _get(args, "filters", default=[])
    sort_orders = _get(args, "sortOrders", "sort_orders", default=[])
    if not isinstance(filters, (list, tuple)):
        raise ValidationError("filters must be a list")
    if not isinstance(sort_orders, (list, tuple)):
        raise ValidationError("sortOrders must be a list")
    return SearchCriteriaRequest(
        filters=tuple(parse_filter(f) for f in filters),
        sort_orders=tuple(parse_sort_order(s) for s in sort_orders),
        page=_get(args, "page", default=DEFAULT_PAGE),
        page_size=_get(args, "pageSize", "page_size", default=DEFAULT_PAGE_SIZE),
    )


def build_search_criteria_from_input(args: Optional[Mapping[str, Any]]) -> CompiledSearch:
    request = parse_search_input(args)
    query_string = encode_query(compile_search_criteria(request))
    return CompiledSearch(query_string=query_string, page=request.page, page_size=request.page_size)


_FILTER_KEY = re.compile(
    r"^searchCriteria\[filter(?:Groups|_groups)\]\[(\d+)\]\[filters\]\[(\d+)\]\[(field|value|condition_type|conditionType)\]$"
)
_SORT_KEY = re.compile(r"^searchCriteria\[sort(?:Orders|_orders)\]\[(\d+)\]\[(field|direction)\]$")
_PAGING_KEY = re.compile(r"^searchCriteria\[(pageSize|page_size|currentPage|current_page)\]$")


def decode_search_criteria(query_string: str) -> SearchCriteriaRequest:
    """Inverse of the encoding: filters (values as strings), sort orders and paging, in order.

    Keys outside ``searchCriteria[...]`` are ignored.
    """
    filters: dict[tuple[int, int], dict[str, str]] = {}
    sorts: dict[int, dict[str, str]] = {}
    paging: dict[str, str] = {}

    for key, value in parse_qsl(query_string, keep_blank_values=True):
        if not key.startswith("searchCriteria"):
            continue
        filter_match = _FILTER_KEY.match(key)
        sort_match = _SORT_KEY.match(key)
        paging_match = _PAGING_KEY.match(key)
        if filter_match:
            group, index, part = filter_match.groups()
            part = "condition_type" if part == "conditionType" else part
            filters.setdefault((int(group), int(index)), {})[part] = value
        elif sort_match:
            sorts.setdefault(int(sort_match.group(1)), {})[sort_match.group(2)] = value
        elif paging_match:
            paging["page_size" if paging_match.group(1).startswith("page") else "page"] = value
        else:
            raise ValidationError(f"Unrecognised search criteria key {key!r}")

    decoded_filters = []
    for index in sorted(filters):
        parts = filters[index]
        if "field" not in parts:
            raise ValidationError(f"Filter {index} has no field")
        decoded_filters.append(
            Filter(
                field=parts["field"],
                value=parts.get("value", ""),
                condition_type=ConditionType.parse(parts.get("condition_type")),
            )
        )

    decoded_sorts = [
        SortOrder(field=sorts[i].get("field", ""), direction=sorts[i].get("direction", "ASC").upper())
        for i in sorted(sorts)
    ]

    try:
        page = int(paging.get("page", DEFAULT_PAGE))
        page_size = int(paging.get("page_size", DEFAULT_PAGE_SIZE))
    except ValueError as e:
        raise ValidationError(f"Invalid paging value: {e}") from e

    return SearchCriteriaRequest(
        filters=tuple(decoded_filters),
        sort_orders=tuple(decoded_sorts),
        page=page,
        page_size=page_size,
    )


def unwrap_items(data: Any) -> list:
    """Search endpoints answer ``{"items": [...], "search_criteria": ..., "total_count": n}``."""
    if isinstance(data, dict):
        return data.get("items") or []
    return []
