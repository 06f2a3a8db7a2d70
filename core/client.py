"""Process-wide commerce client shared by every tool module.

`server.py` builds the client once at startup and stores it with
`set_client()`; tools fetch it with `get_client()`.
"""
from typing import Optional

from commerce.client import CommerceClient

_client: Optional[CommerceClient] = None


def set_client(client: Optional[CommerceClient]) -> None:
    global _client
    _client = client


def get_client() -> CommerceClient:
    if _client is None:
        raise RuntimeError("Commerce client has not been initialised; start the server through server.py")
    return _client
