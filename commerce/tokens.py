"""Client-credentials token exchange and the per-client token cache."""
from __future__ import annotations

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import httpx

from commerce.credentials import BearerCredentials
from commerce.errors import AuthError
from core.config import get_setting
from utils.response_utils import robust_parse_text

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_PATH = "/ims/token/v3"
DEFAULT_TOKEN_LIFETIME = 3600.0


@dataclass(frozen=True)
class AccessToken:
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


def _retrieve_exception(task: asyncio.Future) -> None:
    # every waiter may have been cancelled; mark the failure as seen
    if not task.cancelled():
        task.exception()


class TokenCache:
    """Caches one access token and refreshes it at most once at a time.

    Every caller that finds the token missing or stale awaits the same
    refresh task; a failed refresh raises in all of them and leaves the
    cache empty so the next call starts a new exchange.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[AccessToken]],
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetch = fetch
        self._clock = clock
        self._token: Optional[AccessToken] = None
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def token(self) -> Optional[AccessToken]:
        return self._token

    async def get(self) -> str:
        token = self._token
        if token is not None and token.is_valid(self._clock()):
            return token.value
        if self._refresh_task is None:
            self._refresh_task = asyncio.ensure_future(self._refresh())
            self._refresh_task.add_done_callback(_retrieve_exception)
        # shield: one caller being cancelled must not cancel everyone's refresh
        token = await asyncio.shield(self._refresh_task)
        return token.value

    def invalidate(self, value: Optional[str] = None) -> None:
        """Drop the cached token, or only ``value`` if it is still the cached one."""
        if value is None or (self._token is not None and self._token.value == value):
            self._token = None

    async def _refresh(self) -> AccessToken:
        try:
            token = await self._fetch()
            self._token = token
            return token
        finally:
            self._refresh_task = None


class ClientCredentialsExchange:
    """Exchanges client id/secret for a bearer token at the token host."""

    def __init__(
        self,
        credentials: BearerCredentials,
        timeout: float = 30.0,
        verify: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.credentials = credentials
        self.timeout = timeout
        self.verify = verify
        self._transport = transport
        self._clock = clock
        self.leeway = float(get_setting("token.expiry_leeway", 60))
        self.default_lifetime = float(get_setting("token.default_lifetime", DEFAULT_TOKEN_LIFETIME))
        self.token_url = f"https://{credentials.token_host}{get_setting('token.path', DEFAULT_TOKEN_PATH)}"

    async def __call__(self) -> AccessToken:
        form = {
            "grant_type": "client_credentials",
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
            "scope": ",".join(self.credentials.scopes),
        }
        logger.info(f"Requesting access token from {self.token_url}")
        async with httpx.AsyncClient(timeout=self.timeout, verify=self.verify, transport=self._transport) as client:
            try:
                resp = await client.post(self.token_url, data=form)
            except httpx.HTTPError as e:
                raise AuthError(f"Token exchange with {self.token_url} failed: {e}") from e

        if resp.status_code >= 400:
            body = robust_parse_text(resp.text)
            detail = body.get("error_description") or body.get("error") if isinstance(body, dict) else body
            raise AuthError(
                f"Token exchange with {self.token_url} failed with status code {resp.status_code}: {detail or resp.reason_phrase}"
            )

        try:
            payload = resp.json()
        except ValueError as e:
            raise AuthError(f"Token endpoint returned a non-JSON body: {e}") from e

        value = payload.get("access_token") if isinstance(payload, dict) else None
        if not value:
            raise AuthError("Token endpoint response did not include an access_token")

        try:
            expires_in = float(payload.get("expires_in", 0))
        except (TypeError, ValueError):
            expires_in = 0.0
        if not math.isfinite(expires_in) or expires_in <= 0:
            expires_in = self.default_lifetime
        # some token hosts report milliseconds
        elif expires_in > 10 * 24 * 3600:
            expires_in = expires_in / 1000.0
        # leeway never takes more than half the lifetime
        lifetime = expires_in - min(self.leeway, expires_in / 2)
        logger.info(f"Access token acquired, valid for {int(lifetime)}s")
        return AccessToken(value=value, expires_at=self._clock() + lifetime)
