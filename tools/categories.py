from typing import Any
import logging

from commerce import categories as api
from commerce.errors import ValidationError
from commerce.payload import PayloadBuilder
from core.client import get_client  # type: ignore
from tools._search import SEARCH_HELP, run_search  # type: ignore
from utils import render_document, tool_text_response  # type: ignore

logger = logging.getLogger(__name__)


async def search_categories(
    filters: list[dict[str, Any]] | None = None,
    sort_orders: list[dict[str, Any]] | None = None,
    page: int = 1,
    page_size: int = 10,
) -> str:
    """Search categories with filters, sort orders and paging."""
    return await run_search("Categories", api.search_categories, filters, sort_orders, page, page_size)


async def get_category_by_id(category_id: int, store_code: str | None = None) -> str:
    result = await api.get_category_by_id(get_client(), category_id, store_code=store_code)
    return tool_text_response(result, lambda r: render_document("Category", r))


async def get_category_tree(root_category_id: int | None = None, depth: int | None = None) -> str:
    result = await api.get_category_tree(get_client(), root_category_id, depth)
    return tool_text_response(result, lambda r: render_document("Category Tree", r))


def _category_payload(
    parent_id: int | None,
    is_active: bool | None,
    position: int | None,
    include_in_menu: bool | None,
    available_sort_by: list[str] | None,
) -> PayloadBuilder:
    builder = PayloadBuilder()
    builder.update(
        parent_id=parent_id,
        is_active=is_active,
        position=position,
        include_in_menu=include_in_menu,
    )
    # an empty list would reset the store's sort options
    if available_sort_by:
        builder.set("available_sort_by", list(available_sort_by))
    return builder


async def create_category(
    name: str,
    parent_id: int | None = None,
    is_active: bool | None = None,
    position: int | None = None,
    include_in_menu: bool | None = None,
    available_sort_by: list[str] | None = None,
) -> str:
    """Create a category. Only the fields provided are sent."""
    builder = _category_payload(parent_id, is_active, position, include_in_menu, available_sort_by)
    try:
        builder.require("name", name.strip() if name and name.strip() else None)
    except ValidationError as e:
        return f"Invalid input: {e}"
    result = await api.create_category(get_client(), builder.build())
    return tool_text_response(result, lambda r: render_document("Created Category", r))


async def update_category(
    category_id: int,
    name: str | None = None,
    parent_id: int | None = None,
    is_active: bool | None = None,
    position: int | None = None,
    include_in_menu: bool | None = None,
    available_sort_by: list[str] | None = None,
) -> str:
    """Update a category; fields left out keep their current value."""
    builder = _category_payload(parent_id, is_active, position, include_in_menu, available_sort_by)
    builder.set("name", name)
    if not len(builder):
        return "Invalid input: provide at least one field to update"
    logger.info(f"Updating category {category_id} fields: {builder.provided()}")
    result = await api.update_category(get_client(), category_id, builder.build())
    return tool_text_response(result, lambda r: render_document("Updated Category", r))


async def delete_category(category_id: int) -> str:
    if int(category_id) <= 0:
        return "Invalid input: category_id must be a positive integer"
    result = await api.delete_category(get_client(), category_id)
    return tool_text_response(result, lambda r: f"Category {category_id} deleted. Endpoint: {r.endpoint}")


def get_tools() -> dict[str, Any]:
    return {
        "search_categories": {
            "func": search_categories,
            "title": "Search categories",
            "description": f"Search for categories with flexible filters. {SEARCH_HELP}",
            "read_only": True,
        },
        "get_category_by_id": {
            "func": get_category_by_id,
            "title": "Get category by ID",
            "description": "Retrieve a specific category by its ID, optionally scoped to a store view code.",
            "read_only": True,
        },
        "get_category_tree": {
            "func": get_category_tree,
            "title": "Get category tree",
            "description": "Retrieve the category tree with optional root category ID and depth.",
            "read_only": True,
        },
        "create_category": {
            "func": create_category,
            "title": "Create category",
            "description": "Create a new category. Returns the created category including its new ID.",
        },
        "update_category": {
            "func": update_category,
            "title": "Update category",
            "description": "Update an existing category. Only the fields provided are changed.",
        },
        "delete_category": {
            "func": delete_category,
            "title": "Delete category",
            "description": "Delete a category by ID. This cannot be undone.",
        },
    }
