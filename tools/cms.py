from typing import Any

from commerce import cms as api
from tools._search import SEARCH_HELP, run_search  # type: ignore


async def search_cms_blocks(
    filters: list[dict[str, Any]] | None = None,
    sort_orders: list[dict[str, Any]] | None = None,
    page: int = 1,
    page_size: int = 10,
) -> str:
    return await run_search("CMS Blocks", api.search_cms_blocks, filters, sort_orders, page, page_size)


async def search_cms_pages(
    filters: list[dict[str, Any]] | None = None,
    sort_orders: list[dict[str, Any]] | None = None,
    page: int = 1,
    page_size: int = 10,
) -> str:
    return await run_search("CMS Pages", api.search_cms_pages, filters, sort_orders, page, page_size)


def get_tools() -> dict[str, Any]:
    return {
        "search_cms_blocks": {
            "func": search_cms_blocks,
            "title": "Search CMS blocks",
            "description": f"Search CMS blocks (e.g. by identifier, title, is_active). {SEARCH_HELP}",
            "read_only": True,
        },
        "search_cms_pages": {
            "func": search_cms_pages,
            "title": "Search CMS pages",
            "description": f"Search CMS pages (e.g. by identifier, title, is_active). {SEARCH_HELP}",
            "read_only": True,
        },
    }
