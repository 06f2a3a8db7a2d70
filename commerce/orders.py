from commerce.client import CommerceClient
from commerce.search_criteria import CompiledSearch, unwrap_items
from utils import ApiResult


async def search_orders(client: CommerceClient, search: CompiledSearch) -> ApiResult[list]:
    return (await client.call("GET", f"/orders?{search.query_string}")).map(unwrap_items)


async def get_order_by_id(client: CommerceClient, order_id: int) -> ApiResult[dict]:
    return await client.call("GET", f"/orders/{int(order_id)}")
