"""
Tests for result helpers and the text rendered by tools.
"""

from commerce.errors import UpstreamError
from utils import (
    ApiResult,
    api_error_response,
    api_success_response,
    format_upstream_message,
    render_document,
    render_items,
    robust_parse_text,
    tool_text_response,
)


class TestRobustParseText:
    def test_json(self):
        assert robust_parse_text('{"a": 1}') == {"a": 1}

    def test_ndjson(self):
        assert robust_parse_text('{"a": 1}\n{"a": 2}\n') == [{"a": 1}, {"a": 2}]

    def test_json_followed_by_noise(self):
        assert robust_parse_text('{"a": 1} trailing') == {"a": 1}

    def test_plain_text(self):
        assert robust_parse_text("Bad gateway") == "Bad gateway"


class TestFormatUpstreamMessage:
    def test_named_placeholders(self):
        body = {"message": "No such entity with %fieldName = %fieldValue", "parameters": {"fieldName": "id", "fieldValue": 7}}
        assert format_upstream_message(body) == "No such entity with id = 7"

    def test_positional_placeholders(self):
        body = {"message": "%1 is a required field for %2.", "parameters": ["sku", "product"]}
        assert format_upstream_message(body) == "sku is a required field for product."

    def test_unknown_placeholders_are_kept(self):
        body = {"message": "Missing %what and %3", "parameters": {"other": 1}}
        assert format_upstream_message(body) == "Missing %what and %3"

    def test_non_message_bodies(self):
        assert format_upstream_message("  oops \n") == "oops"
        assert format_upstream_message({"errors": [1]}) == '{"errors": [1]}'
        assert format_upstream_message(None, "Not Found") == "Not Found"


class TestResults:
    def test_map_only_touches_success(self):
        ok = api_success_response("/x", {"items": [1, 2]})
        assert ok.map(lambda d: d["items"]).data == [1, 2]

        failed = api_error_response("/x", "boom")
        assert failed.map(lambda d: d["items"]) is failed

    def test_error_from_exception(self):
        result = api_error_response("/categories/9", UpstreamError(404, "No such entity"))
        assert result.success is False
        assert result.error == "Request failed with status code 404: No such entity"


class TestRendering:
    def test_failure_text(self):
        text = tool_text_response(ApiResult(False, "/orders/1", error="Request failed with status code 500: boom"), "ok")
        assert text == (
            "Failed to retrieve data from the commerce platform.\n"
            "Endpoint: /orders/1\n"
            "Error: Request failed with status code 500: boom"
        )

    def test_success_text_may_be_static(self):
        assert tool_text_response(ApiResult(True, "/x", data=1), "done") == "done"

    def test_render_items(self):
        text = render_items("Products", ApiResult(True, "/products?x", data=[{"sku": "a"}, {"sku": "ü"}]), 2, 5)
        assert text == (
            "<meta>\n"
            "  <name>Products</name>\n"
            "  <page>2</page>\n"
            "  <pageSize>5</pageSize>\n"
            "  <endpoint>/products?x</endpoint>\n"
            "  <totalItems>2</totalItems>\n"
            "</meta>\n\n"
            "<data>\n"
            '{"sku": "a"}\n'
            '{"sku": "ü"}\n'
            "</data>"
        )

    def test_render_items_without_data(self):
        assert "<totalItems>0</totalItems>" in render_items("Websites", ApiResult(True, "/store/websites"))

    def test_render_document(self):
        text = render_document("Order", ApiResult(True, "/orders/1", data={"entity_id": 1}))
        assert "<name>Order</name>" in text
        assert '{"entity_id": 1}' in text
