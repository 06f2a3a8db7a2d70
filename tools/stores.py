from typing import Any

from commerce import stores as api
from core.client import get_client  # type: ignore
from utils import render_items, tool_text_response  # type: ignore


async def get_store_configs(store_codes: list[str] | None = None) -> str:
    """Store configurations (locale, currency, base URLs), optionally for some store codes only."""
    result = await api.get_store_configs(get_client(), store_codes)
    return tool_text_response(result, lambda r: render_items("Store Configurations", r))


async def get_store_views() -> str:
    result = await api.get_store_views(get_client())
    return tool_text_response(result, lambda r: render_items("Store Views", r))


async def get_store_groups() -> str:
    result = await api.get_store_groups(get_client())
    return tool_text_response(result, lambda r: render_items("Store Groups", r))


async def get_websites() -> str:
    result = await api.get_websites(get_client())
    return tool_text_response(result, lambda r: render_items("Websites", r))


def get_tools() -> dict[str, Any]:
    return {
        "get_store_configs": {
            "func": get_store_configs,
            "title": "Get store configurations",
            "description": "Retrieve store configurations with optional filtering by store codes.",
            "read_only": True,
        },
        "get_store_views": {
            "func": get_store_views,
            "title": "Get store views",
            "description": "Retrieve the list of all store views.",
            "read_only": True,
        },
        "get_store_groups": {
            "func": get_store_groups,
            "title": "Get store groups",
            "description": "Retrieve the list of all store groups.",
            "read_only": True,
        },
        "get_websites": {
            "func": get_websites,
            "title": "Get websites",
            "description": "Retrieve the list of all websites.",
            "read_only": True,
        },
    }
