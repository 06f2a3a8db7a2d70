"""One-legged OAuth 1.0a request signing (HMAC-SHA256).

The consumer key/secret and the access token/secret are issued up front by
the platform's integration settings, so there is no request-token dance:
every request is signed directly with both secrets.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time
from typing import Callable, Iterable
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from commerce.credentials import SignedCredentials
from commerce.errors import AuthError

SIGNATURE_METHOD = "HMAC-SHA256"
OAUTH_VERSION = "1.0"


def percent_encode(value: str) -> str:
    """RFC 3986 encoding: everything but ALPHA / DIGIT / ``-._~``."""
    return quote(str(value), safe="~")


def normalize_url(url: str) -> str:
    """Scheme and host lower-cased, default port dropped, query and fragment removed."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    port = parts.port
    if port and not ((scheme == "http" and port == 80) or (scheme == "https" and port == 443)):
        host = f"{host}:{port}"
    return urlunsplit((scheme, host, parts.path or "/", "", ""))


def normalize_parameters(params: Iterable[tuple[str, str]]) -> str:
    encoded = sorted((percent_encode(k), percent_encode(v)) for k, v in params)
    return "&".join(f"{k}={v}" for k, v in encoded)


def signature_base_string(method: str, url: str, params: Iterable[tuple[str, str]]) -> str:
    return "&".join(
        [
            method.upper(),
            percent_encode(normalize_url(url)),
            percent_encode(normalize_parameters(params)),
        ]
    )


def sign(base_string: str, consumer_secret: str, token_secret: str) -> str:
    key = f"{percent_encode(consumer_secret)}&{percent_encode(token_secret)}"
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def generate_nonce() -> str:
    return secrets.token_hex(16)


class OAuth1Signer:
    """Produces a fresh ``Authorization: OAuth ...`` header for each request.

    ``nonce_factory`` and ``clock`` exist so tests can pin the otherwise
    random parts of the signature.
    """

    def __init__(
        self,
        credentials: SignedCredentials,
        nonce_factory: Callable[[], str] = generate_nonce,
        clock: Callable[[], float] = time.time,
    ):
        self.credentials = credentials
        self._nonce_factory = nonce_factory
        self._clock = clock

    def oauth_params(self) -> dict[str, str]:
        return {
            "oauth_consumer_key": self.credentials.consumer_key,
            "oauth_nonce": self._nonce_factory(),
            "oauth_signature_method": SIGNATURE_METHOD,
            "oauth_timestamp": str(int(self._clock())),
            "oauth_token": self.credentials.access_token,
            "oauth_version": OAUTH_VERSION,
        }

    def authorization_header(self, method: str, url: str) -> dict[str, str]:
        """Sign ``method url``; query parameters in ``url`` are part of the signature."""
        try:
            oauth = self.oauth_params()
            query = parse_qsl(urlsplit(url).query, keep_blank_values=True)
            base_string = signature_base_string(method, url, list(oauth.items()) + query)
            oauth["oauth_signature"] = sign(
                base_string,
                self.credentials.consumer_secret,
                self.credentials.access_token_secret,
            )
        except (TypeError, ValueError) as e:
            raise AuthError(f"Unable to sign {method} request: {e}") from e

        header = ", ".join(f'{percent_encode(k)}="{percent_encode(v)}"' for k, v in sorted(oauth.items()))
        return {"Authorization": f"OAuth {header}"}
