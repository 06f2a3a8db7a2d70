"""Resolve exactly one authentication mode from the process environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, Mapping, Union
from urllib.parse import urlparse

from commerce.errors import ConfigurationError
from core.config import get_setting

BASE_URL_VAR = "COMMERCE_BASE_URL"

SIGNED_VARS = (
    "COMMERCE_CONSUMER_KEY",
    "COMMERCE_CONSUMER_SECRET",
    "COMMERCE_ACCESS_TOKEN",
    "COMMERCE_ACCESS_TOKEN_SECRET",
)
BEARER_REQUIRED_VARS = ("OAUTH_CLIENT_ID", "OAUTH_CLIENT_SECRET")
BEARER_OPTIONAL_VARS = ("OAUTH_SCOPES", "OAUTH_HOST")

DEFAULT_SCOPES = ("AdobeID", "openid", "read_organizations")
DEFAULT_TOKEN_HOST = "ims-na1.adobelogin.com"


@dataclass(frozen=True)
class SignedCredentials:
    consumer_key: str
    consumer_secret: str
    access_token: str
    access_token_secret: str
    base_url: str
    mode: Literal["signed"] = "signed"

    def __repr__(self) -> str:
        return f"SignedCredentials(base_url={self.base_url!r}, consumer_key={self.consumer_key!r})"


@dataclass(frozen=True)
class BearerCredentials:
    client_id: str
    client_secret: str
    base_url: str
    scopes: tuple[str, ...] = DEFAULT_SCOPES
    token_host: str = DEFAULT_TOKEN_HOST
    mode: Literal["bearer"] = "bearer"

    def __repr__(self) -> str:
        return (
            f"BearerCredentials(base_url={self.base_url!r}, client_id={self.client_id!r}, "
            f"scopes={self.scopes!r}, token_host={self.token_host!r})"
        )


Credentials = Union[SignedCredentials, BearerCredentials]


def _value(environ: Mapping[str, str], name: str) -> str | None:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def normalize_base_url(raw: str | None) -> str:
    """Validate the platform URL and make sure it ends with exactly one slash."""
    if not raw:
        raise ConfigurationError(f"{BASE_URL_VAR} must be set")
    parsed = urlparse(raw)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(f"{BASE_URL_VAR} must be an absolute http(s) URL, got {raw!r}")
    if parsed.query or parsed.fragment:
        raise ConfigurationError(f"{BASE_URL_VAR} must not carry a query or fragment, got {raw!r}")
    return raw.rstrip("/") + "/"


def parse_scopes(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return tuple(get_setting("token.default_scopes", DEFAULT_SCOPES))
    return tuple(s.strip() for s in raw.split(",") if s.strip())


def resolve_credentials(environ: Mapping[str, str] | None = None) -> Credentials:
    """Build the credentials for the single configured mode.

    Any signed-mode variable together with any bearer-mode variable is
    rejected as ambiguous rather than silently preferring one of them.
    """
    if environ is None:
        environ = os.environ

    base_url = normalize_base_url(_value(environ, BASE_URL_VAR))

    signed = {name: _value(environ, name) for name in SIGNED_VARS}
    bearer = {name: _value(environ, name) for name in BEARER_REQUIRED_VARS + BEARER_OPTIONAL_VARS}
    has_signed = any(signed.values())
    has_bearer = any(bearer[name] for name in BEARER_REQUIRED_VARS)

    if has_signed and has_bearer:
        raise ConfigurationError(
            "Both signed (COMMERCE_CONSUMER_*/COMMERCE_ACCESS_*) and bearer (OAUTH_CLIENT_*) "
            "credentials are set; configure exactly one authentication mode"
        )

    if has_signed:
        missing = [name for name, value in signed.items() if not value]
        if missing:
            raise ConfigurationError(f"Incomplete signed-mode credentials, missing: {', '.join(missing)}")
        return SignedCredentials(
            consumer_key=signed["COMMERCE_CONSUMER_KEY"],
            consumer_secret=signed["COMMERCE_CONSUMER_SECRET"],
            access_token=signed["COMMERCE_ACCESS_TOKEN"],
            access_token_secret=signed["COMMERCE_ACCESS_TOKEN_SECRET"],
            base_url=base_url,
        )

    if has_bearer:
        missing = [name for name in BEARER_REQUIRED_VARS if not bearer[name]]
        if missing:
            raise ConfigurationError(f"Incomplete bearer-mode credentials, missing: {', '.join(missing)}")
        scopes = parse_scopes(bearer["OAUTH_SCOPES"])
        if not scopes:
            raise ConfigurationError("OAUTH_SCOPES must name at least one scope")
        return BearerCredentials(
            client_id=bearer["OAUTH_CLIENT_ID"],
            client_secret=bearer["OAUTH_CLIENT_SECRET"],
            base_url=base_url,
            scopes=scopes,
            token_host=bearer["OAUTH_HOST"] or get_setting("token.host", DEFAULT_TOKEN_HOST),
        )

    raise ConfigurationError(
        "No credentials configured: set COMMERCE_CONSUMER_KEY, COMMERCE_CONSUMER_SECRET, "
        "COMMERCE_ACCESS_TOKEN and COMMERCE_ACCESS_TOKEN_SECRET, or OAUTH_CLIENT_ID and OAUTH_CLIENT_SECRET"
    )
