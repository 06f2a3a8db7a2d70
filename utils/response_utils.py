"""Helpers for turning HTTP outcomes into results and results into tool text.

- `robust_parse_text` parses response bodies that may be JSON, NDJSON or
  JSON followed by noise, falling back to the raw text.
- `ApiResult` is the uniform outcome of one platform call.
- `format_upstream_message` extracts the platform's error message.
- `tool_text_response` renders a result as the text an MCP tool returns.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")


def robust_parse_text(text: str) -> Any:
    """Try to parse text as JSON. If it fails, try NDJSON (one JSON per line), then raw_decode the first JSON object, else return raw text."""
    try:
        return json.loads(text)
    except ValueError:
        pass

    try:
        lines = [ln for ln in text.splitlines() if ln.strip()]
        objs = [json.loads(ln) for ln in lines]
        if objs:
            return objs if len(objs) > 1 else objs[0]
    except ValueError:
        pass

    try:
        decoder = json.JSONDecoder()
        obj, _ = decoder.raw_decode(text)
        return obj
    except ValueError:
        pass

    return text


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of one platform call: ``data`` when ``success`` else ``error``."""

    success: bool
    endpoint: str
    data: Optional[T] = None
    error: Optional[str] = None

    def map(self, fn: Callable[[T], Any]) -> "ApiResult[Any]":
        """Apply ``fn`` to the data of a successful result; failures pass through."""
        if not self.success:
            return self
        return ApiResult(success=True, endpoint=self.endpoint, data=fn(self.data))


def api_success_response(endpoint: str, data: T) -> ApiResult[T]:
    return ApiResult(success=True, endpoint=endpoint, data=data)


def api_error_response(endpoint: str, error: Union[BaseException, str]) -> ApiResult[Any]:
    message = str(error) or type(error).__name__
    return ApiResult(success=False, endpoint=endpoint, error=message)


_NAMED_PLACEHOLDER = re.compile(r"%([A-Za-z_][A-Za-z0-9_]*)")
_POSITIONAL_PLACEHOLDER = re.compile(r"%(\d+)")


def format_upstream_message(body: Any, fallback: str = "") -> str:
    """Return the human message of a platform error body.

    The platform sends ``{"message": "No such entity with %fieldName = %fieldValue",
    "parameters": {"fieldName": "id", "fieldValue": 7}}`` or, for positional
    placeholders, ``"parameters": ["id", 7]`` referenced as ``%1``, ``%2``.
    """
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        message = body["message"]
        params = body.get("parameters")
        if isinstance(params, dict):
            message = _NAMED_PLACEHOLDER.sub(
                lambda m: str(params[m.group(1)]) if m.group(1) in params else m.group(0), message
            )
        elif isinstance(params, list):
            message = _POSITIONAL_PLACEHOLDER.sub(
                lambda m: str(params[int(m.group(1)) - 1]) if 0 < int(m.group(1)) <= len(params) else m.group(0),
                message,
            )
        return message
    if isinstance(body, str) and body.strip():
        return body.strip()
    if body:
        return json.dumps(body)
    return fallback


def tool_text_response(result: ApiResult[T], success_text: Union[str, Callable[[ApiResult[T]], str]]) -> str:
    if not result.success:
        return (
            "Failed to retrieve data from the commerce platform.\n"
            f"Endpoint: {result.endpoint}\n"
            f"Error: {result.error}"
        )
    return success_text(result) if callable(success_text) else success_text


def render_items(name: str, result: ApiResult[Any], page: int | None = None, page_size: int | None = None) -> str:
    """Success text for list results: a meta block and one JSON document per item."""
    if result.data is None:
        items = []
    else:
        items = result.data if isinstance(result.data, list) else [result.data]
    meta = [f"<name>{name}</name>"]
    if page is not None:
        meta.append(f"<page>{page}</page>")
    if page_size is not None:
        meta.append(f"<pageSize>{page_size}</pageSize>")
    meta.append(f"<endpoint>{result.endpoint}</endpoint>")
    meta.append(f"<totalItems>{len(items)}</totalItems>")
    body = "\n".join(json.dumps(item, ensure_ascii=False) for item in items)
    return "<meta>\n  " + "\n  ".join(meta) + "\n</meta>\n\n<data>\n" + body + "\n</data>"


def render_document(name: str, result: ApiResult[Any]) -> str:
    return (
        f"<meta>\n  <name>{name}</name>\n  <endpoint>{result.endpoint}</endpoint>\n</meta>\n\n"
        f"<data>\n{json.dumps(result.data, ensure_ascii=False)}\n</data>"
    )
