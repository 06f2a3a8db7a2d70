"""Exception hierarchy shared by the commerce client and its callers.

ConfigurationError aborts startup. ValidationError is raised before any
request is built. AuthError, TransportError and UpstreamError are raised by
the client's verb methods and turned into ``ApiResult`` errors by
``CommerceClient.call``.
"""
from __future__ import annotations

from typing import Any


class CommerceError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(CommerceError):
    """Credential or server configuration is missing, incomplete or ambiguous."""


class AuthError(CommerceError):
    """Signing failed or the token endpoint refused to issue a token."""


class ValidationError(CommerceError, ValueError):
    """Caller input is out of range or malformed."""


class TransportError(CommerceError):
    """The request never produced an HTTP response (DNS, connect, timeout...)."""


class UpstreamError(CommerceError):
    """The platform answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, body: Any = None):
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"Request failed with status code {status_code}: {message}")
