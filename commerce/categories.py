from typing import Any, Optional

from commerce.client import CommerceClient
from commerce.search_criteria import CompiledSearch, unwrap_items
from utils import ApiResult


async def search_categories(client: CommerceClient, search: CompiledSearch) -> ApiResult[list]:
    endpoint = f"/categories/list?{search.query_string}"
    result = await client.call("GET", endpoint)
    return result.map(unwrap_items)


async def get_category_by_id(client: CommerceClient, category_id: int, store_code: Optional[str] = None) -> ApiResult[dict]:
    return await client.call("GET", f"/categories/{int(category_id)}", store_code=store_code)


async def get_category_tree(
    client: CommerceClient,
    root_category_id: Optional[int] = None,
    depth: Optional[int] = None,
) -> ApiResult[dict]:
    params = []
    if root_category_id is not None:
        params.append(f"rootCategoryId={int(root_category_id)}")
    if depth is not None:
        params.append(f"depth={int(depth)}")
    endpoint = "/categories" + (f"?{'&'.join(params)}" if params else "")
    return await client.call("GET", endpoint)


async def create_category(client: CommerceClient, category: dict[str, Any]) -> ApiResult[dict]:
    return await client.call("POST", "/categories", body={"category": category})


async def update_category(client: CommerceClient, category_id: int, category: dict[str, Any]) -> ApiResult[dict]:
    return await client.call("PUT", f"/categories/{int(category_id)}", body={"category": category})


async def delete_category(client: CommerceClient, category_id: int) -> ApiResult[bool]:
    return await client.call("DELETE", f"/categories/{int(category_id)}")
