from typing import Optional
from urllib.parse import quote

from core.config import get_config  # type: ignore


def get_endpoint(base_url: str, endpoint: str, store_code: Optional[str] = None) -> str:
    """Absolute URL for a REST endpoint such as ``/categories/list?...``.

    ``{base_url}{rest_path}[{store_code}/]{api_version}{endpoint}`` with
    ``rest_path`` and ``api_version`` taken from config.yaml.
    """
    _cfg = get_config() or {}
    rest_path = str(_cfg.get("rest_path", "rest/")).strip("/")
    api_version = str(_cfg.get("api_version", "V1")).strip("/")

    if not endpoint.startswith("/"):
        endpoint = f"/{endpoint}"

    prefix = f"{base_url.rstrip('/')}/{rest_path}/"
    if store_code:
        prefix += f"{quote(store_code, safe='')}/"
    return f"{prefix}{api_version}{endpoint}"
