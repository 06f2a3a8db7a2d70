from typing import Optional, Sequence
from urllib.parse import quote

from commerce.client import CommerceClient
from utils import ApiResult


async def get_store_configs(client: CommerceClient, store_codes: Optional[Sequence[str]] = None) -> ApiResult[list]:
    """Store configurations, optionally limited to ``store_codes``."""
    endpoint = "/store/storeConfigs"
    if store_codes:
        endpoint += "?" + "&".join(f"storeCodes[]={quote(code, safe='')}" for code in store_codes)
    return await client.call("GET", endpoint)


async def get_store_views(client: CommerceClient) -> ApiResult[list]:
    return await client.call("GET", "/store/storeViews")


async def get_store_groups(client: CommerceClient) -> ApiResult[list]:
    return await client.call("GET", "/store/storeGroups")


async def get_websites(client: CommerceClient) -> ApiResult[list]:
    return await client.call("GET", "/store/websites")
