from typing import Any

from core.resources import get_resource_map  # type: ignore
from tools._search import SEARCH_HELP  # type: ignore


async def get_instructions() -> str:
    """Return the assistant instructions resource content (exact file content)."""
    content = get_resource_map().get("assistant_instructions")
    if content:
        return content
    return "No assistant instructions resource found."


async def get_search_guide() -> str:
    """How to phrase filters for the search_* tools, with the full condition type list."""
    guide = get_resource_map().get("search_criteria")
    if guide:
        return f"{guide}\n\n{SEARCH_HELP}"
    return SEARCH_HELP


def get_tools() -> dict[str, Any]:
    return {
        "get_instructions": {
            "func": get_instructions,
            "title": "Read assistant instructions",
            "description": "Read these instructions before answering questions about the store: which tool to use for what and how to read their output.",
            "read_only": True,
        },
        "get_search_guide": {
            "func": get_search_guide,
            "title": "Search filter guide",
            "description": "Explains filters, condition types, sort orders and paging accepted by every search_* tool.",
            "read_only": True,
        },
    }
