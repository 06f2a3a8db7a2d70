from typing import Any

from commerce import products as api
from core.client import get_client  # type: ignore
from tools._search import SEARCH_HELP, run_search  # type: ignore
from utils import render_document, tool_text_response  # type: ignore


async def search_products(
    filters: list[dict[str, Any]] | None = None,
    sort_orders: list[dict[str, Any]] | None = None,
    page: int = 1,
    page_size: int = 10,
) -> str:
    """Search the product catalog with filters, sort orders and paging."""
    return await run_search("Products", api.search_products, filters, sort_orders, page, page_size)


async def get_product_by_sku(sku: str, store_code: str | None = None) -> str:
    if not sku or not sku.strip():
        return "Invalid input: sku is required"
    result = await api.get_product_by_sku(get_client(), sku, store_code=store_code)
    return tool_text_response(result, lambda r: render_document("Product", r))


def get_tools() -> dict[str, Any]:
    return {
        "search_products": {
            "func": search_products,
            "title": "Search products",
            "description": f"Search for products (e.g. by name, sku, price, status, type_id). {SEARCH_HELP}",
            "read_only": True,
        },
        "get_product_by_sku": {
            "func": get_product_by_sku,
            "title": "Get product by SKU",
            "description": "Retrieve a single product by its SKU, optionally scoped to a store view code.",
            "read_only": True,
        },
    }
