from utils.get_endpoint import get_endpoint
from utils.response_utils import (
    ApiResult,
    api_error_response,
    api_success_response,
    format_upstream_message,
    render_document,
    render_items,
    robust_parse_text,
    tool_text_response,
)

__all__ = [
    "ApiResult",
    "api_error_response",
    "api_success_response",
    "format_upstream_message",
    "get_endpoint",
    "render_document",
    "render_items",
    "robust_parse_text",
    "tool_text_response",
]
