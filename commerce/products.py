from typing import Optional
from urllib.parse import quote

from commerce.client import CommerceClient
from commerce.search_criteria import CompiledSearch, unwrap_items
from utils import ApiResult


async def search_products(client: CommerceClient, search: CompiledSearch) -> ApiResult[list]:
    endpoint = f"/products?{search.query_string}"
    return (await client.call("GET", endpoint)).map(unwrap_items)


async def get_product_by_sku(client: CommerceClient, sku: str, store_code: Optional[str] = None) -> ApiResult[dict]:
    # SKUs may contain slashes and spaces
    return await client.call("GET", f"/products/{quote(sku, safe='')}", store_code=store_code)
