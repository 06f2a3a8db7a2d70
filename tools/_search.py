"""Shared plumbing for the search_* tools."""
from typing import Any, Awaitable, Callable
import logging

from commerce.client import CommerceClient
from commerce.errors import ValidationError
from commerce.search_criteria import CONDITION_DESCRIPTIONS, MAX_PAGE_SIZE, CompiledSearch, build_search_criteria_from_input
from core.client import get_client  # type: ignore
from utils import ApiResult, render_items, tool_text_response  # type: ignore

logger = logging.getLogger(__name__)

SEARCH_HELP = (
    "filters: list of {field, value, conditionType}; every filter must match. "
    "conditionType defaults to eq; options: "
    + ", ".join(f"{c.value} ({desc})" for c, desc in CONDITION_DESCRIPTIONS.items())
    + ". sortOrders: list of {field, direction} with direction ASC or DESC. "
    f"page starts at 1; pageSize is at most {MAX_PAGE_SIZE}."
)


async def run_search(
    name: str,
    search_fn: Callable[[CommerceClient, CompiledSearch], Awaitable[ApiResult[Any]]],
    filters: list[dict[str, Any]] | None,
    sort_orders: list[dict[str, Any]] | None,
    page: int,
    page_size: int,
) -> str:
    try:
        search = build_search_criteria_from_input(
            {"filters": filters, "sortOrders": sort_orders, "page": page, "pageSize": page_size}
        )
    except ValidationError as e:
        logger.info(f"Rejected {name} search input: {e}")
        return f"Invalid input: {e}"

    result = await search_fn(get_client(), search)
    return tool_text_response(result, lambda r: render_items(name, r, search.page, search.page_size))
