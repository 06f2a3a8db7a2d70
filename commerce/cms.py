from commerce.client import CommerceClient
from commerce.search_criteria import CompiledSearch, unwrap_items
from utils import ApiResult


async def search_cms_blocks(client: CommerceClient, search: CompiledSearch) -> ApiResult[list]:
    return (await client.call("GET", f"/cmsBlock/search?{search.query_string}")).map(unwrap_items)


async def search_cms_pages(client: CommerceClient, search: CompiledSearch) -> ApiResult[list]:
    return (await client.call("GET", f"/cmsPage/search?{search.query_string}")).map(unwrap_items)
