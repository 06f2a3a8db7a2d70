"""
Tests for the searchCriteria compiler.

Tests cover:
- The documented query layout and encoding
- Determinism and filter-group ordering
- Value formatting (numbers, booleans, lists, empty strings)
- Paging and filter validation
- Decoding a compiled query back into a request
"""

import pytest

from commerce.errors import ValidationError
from commerce.search_criteria import (
    ConditionType,
    Filter,
    SearchCriteriaRequest,
    SortOrder,
    build_search_criteria_from_input,
    compile_search_criteria,
    decode_search_criteria,
    encode_query,
    format_filter_value,
    unwrap_items,
)


def _query(**kwargs) -> str:
    return encode_query(compile_search_criteria(SearchCriteriaRequest(**kwargs)))


class TestQueryLayout:
    def test_single_eq_filter_example(self):
        result = build_search_criteria_from_input(
            {"filters": [{"field": "name", "value": "Default Category", "conditionType": "eq"}], "page": 1, "pageSize": 10}
        )
        qs = result.query_string
        assert "searchCriteria[filterGroups][0][filters][0][field]=name" in qs
        assert "searchCriteria[filterGroups][0][filters][0][value]=Default%20Category" in qs
        assert "searchCriteria[filterGroups][0][filters][0][condition_type]=eq" in qs
        assert "searchCriteria[pageSize]=10" in qs
        assert "searchCriteria[currentPage]=1" in qs
        assert (result.page, result.page_size) == (1, 10)

    def test_full_query_order(self):
        qs = _query(
            filters=(Filter("sku", "24-MB01"),),
            sort_orders=(SortOrder("price", "DESC"),),
            page=2,
            page_size=5,
        )
        assert qs == (
            "searchCriteria[filterGroups][0][filters][0][field]=sku"
            "&searchCriteria[filterGroups][0][filters][0][value]=24-MB01"
            "&searchCriteria[filterGroups][0][filters][0][condition_type]=eq"
            "&searchCriteria[sortOrders][0][field]=price"
            "&searchCriteria[sortOrders][0][direction]=DESC"
            "&searchCriteria[pageSize]=5"
            "&searchCriteria[currentPage]=2"
        )

    def test_no_filters_only_paging(self):
        assert _query() == "searchCriteria[pageSize]=10&searchCriteria[currentPage]=1"

    def test_each_filter_gets_its_own_group_in_input_order(self):
        filters = tuple(Filter(f"field_{i}", str(i)) for i in range(4))
        pairs = compile_search_criteria(SearchCriteriaRequest(filters=filters))
        field_keys = [(k, v) for k, v in pairs if k.endswith("[field]") and "filterGroups" in k]
        assert field_keys == [
            (f"searchCriteria[filterGroups][{i}][filters][0][field]", f"field_{i}") for i in range(4)
        ]

    def test_sort_orders_preserve_priority(self):
        pairs = compile_search_criteria(
            SearchCriteriaRequest(sort_orders=(SortOrder("name", "ASC"), SortOrder("created_at", "DESC")))
        )
        sorts = [(k, v) for k, v in pairs if "sortOrders" in k]
        assert sorts == [
            ("searchCriteria[sortOrders][0][field]", "name"),
            ("searchCriteria[sortOrders][0][direction]", "ASC"),
            ("searchCriteria[sortOrders][1][field]", "created_at"),
            ("searchCriteria[sortOrders][1][direction]", "DESC"),
        ]

    def test_reserved_characters_are_encoded_once(self):
        qs = _query(filters=(Filter("name", "%shirt% & co=1/2", "like"),))
        assert "[value]=%25shirt%25%20%26%20co%3D1%2F2&" in qs

    def test_empty_string_value_is_kept(self):
        qs = _query(filters=(Filter("description", ""),))
        assert "searchCriteria[filterGroups][0][filters][0][value]=&" in qs

    def test_compilation_is_deterministic(self):
        args = {
            "filters": [
                {"field": "price", "value": 10.5, "conditionType": "gteq"},
                {"field": "status", "value": ["pending", "processing"], "conditionType": "in"},
            ],
            "sortOrders": [{"field": "created_at", "direction": "DESC"}],
            "page": 3,
            "pageSize": 7,
        }
        first = build_search_criteria_from_input(args)
        second = build_search_criteria_from_input(args)
        assert first == second
        assert first.query_string.encode() == second.query_string.encode()


class TestValueFormatting:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (42, "42"),
            (-3, "-3"),
            (10.5, "10.5"),
            (10.0, "10"),
            (1e-7, "0.0000001"),
            (True, "1"),
            (False, "0"),
            (None, ""),
            ("abc", "abc"),
        ],
    )
    def test_scalars(self, value, expected):
        assert format_filter_value(value, ConditionType.EQ) == expected

    def test_list_for_in_is_comma_joined(self):
        assert format_filter_value(["a", 2, True], ConditionType.IN) == "a,2,1"
        assert format_filter_value([1, 2], ConditionType.NIN) == "1,2"

    def test_list_with_other_condition_is_rejected(self):
        with pytest.raises(ValidationError):
            format_filter_value(["a", "b"], ConditionType.EQ)

    def test_nested_values_are_rejected(self):
        with pytest.raises(ValidationError):
            format_filter_value([["a"]], ConditionType.IN)
        with pytest.raises(ValidationError):
            format_filter_value({"a": 1}, ConditionType.EQ)

    def test_non_finite_numbers_are_rejected(self):
        with pytest.raises(ValidationError):
            format_filter_value(float("nan"), ConditionType.GT)


class TestValidation:
    @pytest.mark.parametrize("page_size", [0, 11, -1, 100])
    def test_page_size_out_of_range(self, page_size):
        with pytest.raises(ValidationError, match="pageSize"):
            build_search_criteria_from_input({"pageSize": page_size})

    @pytest.mark.parametrize("page", [0, -5])
    def test_page_below_one(self, page):
        with pytest.raises(ValidationError, match="page"):
            build_search_criteria_from_input({"page": page})

    @pytest.mark.parametrize("bad", [True, 2.5, "3"])
    def test_paging_must_be_integers(self, bad):
        with pytest.raises(ValidationError):
            build_search_criteria_from_input({"page": bad})
        with pytest.raises(ValidationError):
            build_search_criteria_from_input({"pageSize": bad})

    def test_boundaries_accepted(self):
        assert build_search_criteria_from_input({"pageSize": 1}).page_size == 1
        assert build_search_criteria_from_input({"pageSize": 10}).page_size == 10

    def test_defaults(self):
        result = build_search_criteria_from_input(None)
        assert (result.page, result.page_size) == (1, 10)

    def test_unknown_condition_type(self):
        with pytest.raises(ValidationError, match="Unknown condition type"):
            build_search_criteria_from_input({"filters": [{"field": "name", "value": "x", "conditionType": "between"}]})

    def test_condition_type_is_case_insensitive_and_defaults_to_eq(self):
        result = build_search_criteria_from_input(
            {"filters": [{"field": "name", "value": "x", "conditionType": "LIKE"}, {"field": "sku", "value": "y"}]}
        )
        assert "[0][filters][0][condition_type]=like" in result.query_string
        assert "[1][filters][0][condition_type]=eq" in result.query_string

    def test_empty_field_rejected(self):
        with pytest.raises(ValidationError, match="field"):
            build_search_criteria_from_input({"filters": [{"field": " ", "value": "x"}]})

    def test_missing_value_rejected_unless_null_check(self):
        with pytest.raises(ValidationError, match="value"):
            build_search_criteria_from_input({"filters": [{"field": "name"}]})
        result = build_search_criteria_from_input({"filters": [{"field": "special_price", "conditionType": "notnull"}]})
        assert "[value]=&" in result.query_string

    def test_sort_direction_normalized_and_checked(self):
        result = build_search_criteria_from_input({"sortOrders": [{"field": "name", "direction": "desc"}]})
        assert "searchCriteria[sortOrders][0][direction]=DESC" in result.query_string
        with pytest.raises(ValidationError, match="direction"):
            build_search_criteria_from_input({"sortOrders": [{"field": "name", "direction": "up"}]})

    def test_filters_must_be_a_list(self):
        with pytest.raises(ValidationError):
            build_search_criteria_from_input({"filters": {"field": "name", "value": "x"}})


class TestDecode:
    def test_round_trip_recovers_triples_in_order(self):
        triples = [
            ("name", "Default Category", "eq"),
            ("sku", "a&b=c+d", "like"),
            ("status", "pending,processing", "in"),
            ("description", "", "neq"),
        ]
        args = {
            "filters": [{"field": f, "value": v, "conditionType": c} for f, v, c in triples],
            "sortOrders": [{"field": "created_at", "direction": "DESC"}],
            "page": 4,
            "pageSize": 3,
        }
        decoded = decode_search_criteria(build_search_criteria_from_input(args).query_string)

        assert [(f.field, f.value, f.condition_type.value) for f in decoded.filters] == triples
        assert decoded.sort_orders == (SortOrder("created_at", "DESC"),)
        assert (decoded.page, decoded.page_size) == (4, 3)

    def test_decode_then_compile_is_stable(self):
        qs = build_search_criteria_from_input(
            {"filters": [{"field": "price", "value": 5, "conditionType": "gt"}], "pageSize": 2}
        ).query_string
        assert _query(**vars(decode_search_criteria(qs))) == qs

    def test_accepts_snake_case_filter_groups(self):
        decoded = decode_search_criteria(
            "searchCriteria[filter_groups][0][filters][0][field]=name"
            "&searchCriteria[filter_groups][0][filters][0][value]=Bag"
            "&searchCriteria[currentPage]=2&searchCriteria[pageSize]=20"
        )
        assert decoded.filters == (Filter("name", "Bag", ConditionType.EQ),)
        assert (decoded.page, decoded.page_size) == (2, 20)

    def test_unknown_search_criteria_key(self):
        with pytest.raises(ValidationError):
            decode_search_criteria("searchCriteria[bogus]=1")


def test_unwrap_items():
    assert unwrap_items({"items": [{"id": 1}], "total_count": 1}) == [{"id": 1}]
    assert unwrap_items({"total_count": 0}) == []
    assert unwrap_items(None) == []
