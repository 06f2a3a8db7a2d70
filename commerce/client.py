"""Authenticated REST client for the commerce platform.

`CommerceClient.get/post/put/delete` return the parsed JSON body and raise
`AuthError`, `TransportError` or `UpstreamError`. `CommerceClient.call` runs
the same single request and folds every outcome into an `ApiResult`.
Nothing is retried: a failed create or delete is never replayed behind the
caller's back.
"""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from commerce.credentials import Credentials, resolve_credentials
from commerce.errors import AuthError, TransportError, UpstreamError
from commerce.signing import OAuth1Signer
from commerce.tokens import ClientCredentialsExchange, TokenCache
from core.config import get_setting
from utils import (
    ApiResult,
    api_error_response,
    api_success_response,
    format_upstream_message,
    get_endpoint,
    robust_parse_text,
)

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT", "DELETE")


class CommerceClient:
    def __init__(
        self,
        credentials: Credentials,
        timeout: Optional[float] = None,
        verify: Optional[bool] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        signer: Optional[OAuth1Signer] = None,
        token_cache: Optional[TokenCache] = None,
    ):
        self.credentials = credentials
        self.timeout = float(timeout if timeout is not None else get_setting("request_timeout", 30.0))
        self.verify = bool(verify if verify is not None else get_setting("verify_ssl", True))
        self._transport = transport
        self.signer: Optional[OAuth1Signer] = None
        self.token_cache: Optional[TokenCache] = None

        if credentials.mode == "signed":
            self.signer = signer or OAuth1Signer(credentials)
        else:
            self.token_cache = token_cache or TokenCache(
                ClientCredentialsExchange(credentials, timeout=self.timeout, verify=self.verify, transport=transport)
            )
        logger.info(f"Commerce client ready for {credentials.base_url} ({credentials.mode} mode)")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **kwargs: Any) -> "CommerceClient":
        return cls(resolve_credentials(environ), **kwargs)

    def url_for(self, endpoint: str, store_code: Optional[str] = None) -> str:
        return get_endpoint(self.credentials.base_url, endpoint, store_code)

    async def _auth_headers(self, method: str, url: str) -> tuple[dict[str, str], Optional[str]]:
        if self.signer is not None:
            return self.signer.authorization_header(method, url), None
        token = await self.token_cache.get()
        return {"Authorization": f"Bearer {token}"}, token

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        store_code: Optional[str] = None,
    ) -> Any:
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method {method!r}")

        url = self.url_for(endpoint, store_code)
        headers, token = await self._auth_headers(method, url)
        headers["Accept"] = "application/json"

        logger.info(f"{method} {endpoint}")
        async with httpx.AsyncClient(timeout=self.timeout, verify=self.verify, transport=self._transport) as client:
            try:
                resp = await client.request(method, url, headers=headers, json=body)
            except httpx.TimeoutException as e:
                raise TransportError(f"Request to {endpoint} timed out: {e!r}") from e
            except httpx.HTTPError as e:
                raise TransportError(f"Request to {endpoint} failed: {e!r}") from e

        if resp.status_code == 401 and token is not None:
            # the next call exchanges for a new token; this one is not replayed
            self.token_cache.invalidate(token)

        if not resp.is_success:
            error_body = robust_parse_text(resp.text) if resp.text.strip() else None
            message = format_upstream_message(error_body, resp.reason_phrase)
            logger.warning(f"{method} {endpoint} returned {resp.status_code}: {message}")
            raise UpstreamError(resp.status_code, message, error_body)

        if not resp.content.strip():
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(f"Response from {endpoint} is not valid JSON: {e}") from e

    async def call(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        store_code: Optional[str] = None,
    ) -> ApiResult[Any]:
        try:
            data = await self.request(method, endpoint, body=body, store_code=store_code)
        except (AuthError, TransportError, UpstreamError) as e:
            logger.warning(f"{method.upper()} {endpoint} failed: {e}")
            return api_error_response(endpoint, e)
        return api_success_response(endpoint, data)

    async def get(self, endpoint: str, store_code: Optional[str] = None) -> Any:
        return await self.request("GET", endpoint, store_code=store_code)

    async def post(self, endpoint: str, body: Any, store_code: Optional[str] = None) -> Any:
        return await self.request("POST", endpoint, body=body, store_code=store_code)

    async def put(self, endpoint: str, body: Any, store_code: Optional[str] = None) -> Any:
        return await self.request("PUT", endpoint, body=body, store_code=store_code)

    async def delete(self, endpoint: str, store_code: Optional[str] = None) -> Any:
        return await self.request("DELETE", endpoint, store_code=store_code)
