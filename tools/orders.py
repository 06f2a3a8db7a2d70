from typing import Any

from commerce import orders as api
from core.client import get_client  # type: ignore
from tools._search import SEARCH_HELP, run_search  # type: ignore
from utils import render_document, tool_text_response  # type: ignore


async def search_orders(
    filters: list[dict[str, Any]] | None = None,
    sort_orders: list[dict[str, Any]] | None = None,
    page: int = 1,
    page_size: int = 10,
) -> str:
    return await run_search("Orders", api.search_orders, filters, sort_orders, page, page_size)


async def get_order_by_id(order_id: int) -> str:
    result = await api.get_order_by_id(get_client(), order_id)
    return tool_text_response(result, lambda r: render_document("Order", r))


def get_tools() -> dict[str, Any]:
    return {
        "search_orders": {
            "func": search_orders,
            "title": "Search orders",
            "description": f"Search orders (e.g. by status, customer_email, created_at, grand_total). {SEARCH_HELP}",
            "read_only": True,
        },
        "get_order_by_id": {
            "func": get_order_by_id,
            "title": "Get order by ID",
            "description": "Retrieve a single order by its entity ID (not the increment ID shown to customers).",
            "read_only": True,
        },
    }
