from commerce.client import CommerceClient
from commerce.search_criteria import CompiledSearch, unwrap_items
from utils import ApiResult


async def search_customers(client: CommerceClient, search: CompiledSearch) -> ApiResult[list]:
    return (await client.call("GET", f"/customers/search?{search.query_string}")).map(unwrap_items)


async def get_customer_by_id(client: CommerceClient, customer_id: int) -> ApiResult[dict]:
    return await client.call("GET", f"/customers/{int(customer_id)}")
