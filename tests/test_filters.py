"""Tests for the filter model."""

import pytest
from pydantic import ValidationError

from insight_blueprint.source.filters import (
    Filter,
    FilterOperator,
    eq,
    gte,
    in_,
    lte,
    normalize_filters,
)


def test_bare_scalar_is_equality():
    predicate = Filter.coerce("0xabc")
    assert predicate.operator is None
    assert predicate.param_name("to_address") == "filter_to_address"
    assert predicate.render_value() == "0xabc"


def test_operator_mapping_is_qualified():
    predicate = Filter.coerce({"operator": "gte", "value": 100})
    assert predicate.operator is FilterOperator.GTE
    assert predicate.param_name("block_number") == "filter_block_number_gte"
    assert predicate.render_value() == "100"


def test_in_with_list_joins_values():
    predicate = in_(1, 2, 3)
    assert predicate.param_name("status") == "filter_status_in"
    assert predicate.render_value() == "1,2,3"


def test_in_with_single_value():
    assert in_("0xabc").render_value() == "0xabc"


def test_booleans_render_lowercase():
    assert eq(True).render_value() == "true"
    assert Filter(operator="ne", value=False).render_value() == "false"


def test_list_value_rejected_for_non_in_operator():
    with pytest.raises(ValidationError):
        Filter(operator="gte", value=[1, 2])
    with pytest.raises(ValidationError):
        Filter(value=[1, 2])


def test_empty_in_list_rejected():
    with pytest.raises(ValidationError):
        Filter(operator="in", value=[])


def test_unknown_operator_rejected():
    with pytest.raises(ValidationError):
        Filter.coerce({"operator": "like", "value": "x"})


def test_normalize_wraps_single_predicates_and_keeps_lists():
    normalized = normalize_filters(
        {
            "address": "0xabc",
            "block_timestamp": [{"operator": "gte", "value": 10}, lte(20)],
        }
    )
    assert normalized["address"] == [eq("0xabc")]
    assert normalized["block_timestamp"] == [gte(10), lte(20)]


def test_normalize_empty():
    assert normalize_filters(None) == {}
    assert normalize_filters({}) == {}
