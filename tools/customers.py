from typing import Any

from commerce import customers as api
from core.client import get_client  # type: ignore
from tools._search import SEARCH_HELP, run_search  # type: ignore
from utils import render_document, tool_text_response  # type: ignore


async def search_customers(
    filters: list[dict[str, Any]] | None = None,
    sort_orders: list[dict[str, Any]] | None = None,
    page: int = 1,
    page_size: int = 10,
) -> str:
    return await run_search("Customers", api.search_customers, filters, sort_orders, page, page_size)


async def get_customer_by_id(customer_id: int) -> str:
    result = await api.get_customer_by_id(get_client(), customer_id)
    return tool_text_response(result, lambda r: render_document("Customer", r))


def get_tools() -> dict[str, Any]:
    return {
        "search_customers": {
            "func": search_customers,
            "title": "Search customers",
            "description": f"Search customers (e.g. by email, firstname, lastname, group_id). {SEARCH_HELP}",
            "read_only": True,
        },
        "get_customer_by_id": {
            "func": get_customer_by_id,
            "title": "Get customer by ID",
            "description": "Retrieve a single customer by ID.",
            "read_only": True,
        },
    }
