"""
tests/test_filters.py

Unit tests for the filter expression parser.
"""

from __future__ import annotations

import pytest

from web_vitals.errors import InvalidFilterExpressionError, UnsupportedFilterExpressionError
from web_vitals.filters import FilterClause, parse_filters


class TestParseFilters:
    def test_parses_two_fragments_in_order(self) -> None:
        clauses = parse_filters("ga:eventAction==LCP;ga:dimension2!@foo")

        assert clauses == [
            FilterClause(dimension_name="ga:eventAction", expressions=["LCP"], operator="EXACT"),
            FilterClause(
                dimension_name="ga:dimension2",
                expressions=["foo"],
                operator="PARTIAL",
                not_=True,
            ),
        ]

    def test_serialised_clause_omits_not_when_false(self) -> None:
        first, second = parse_filters("ga:eventAction==LCP;ga:dimension2!@foo")

        assert first.to_dict() == {
            "dimensionName": "ga:eventAction",
            "operator": "EXACT",
            "expressions": ["LCP"],
        }
        assert second.to_dict() == {
            "dimensionName": "ga:dimension2",
            "operator": "PARTIAL",
            "expressions": ["foo"],
            "not": True,
        }

    def test_not_equal_is_negated_exact(self) -> None:
        (clause,) = parse_filters("ga:contentGroup1!=home")
        assert clause.operator == "EXACT"
        assert clause.not_ is True

    def test_contains_operator(self) -> None:
        (clause,) = parse_filters("ga:contentGroup1=@blog")
        assert clause.operator == "PARTIAL"
        assert clause.not_ is False

    def test_regexp_is_detected_from_value_suffix(self) -> None:
        (clause,) = parse_filters("ga:dimension2=~^img.*~")
        assert clause.operator == "REGEXP"
        assert clause.expressions == ["^img.*~"]

    def test_regexp_symbols_without_tilde_value_leave_operator_unset(self) -> None:
        (clause,) = parse_filters("ga:dimension2=~^img")
        assert clause.operator is None
        assert "operator" not in clause.to_dict()

    def test_negated_regexp_symbols(self) -> None:
        (clause,) = parse_filters("ga:dimension2!~bot~")
        assert clause.operator == "REGEXP"
        assert clause.not_ is True

    def test_escaped_comma_is_allowed(self) -> None:
        (clause,) = parse_filters(r"ga:contentGroup1==a\,b")
        assert clause.expressions == [r"a\,b"]

    def test_value_may_contain_operator_characters(self) -> None:
        (clause,) = parse_filters("ga:eventLabel==a==b")
        assert clause.dimension_name == "ga:eventLabel"
        assert clause.expressions == ["a==b"]


class TestParseFiltersErrors:
    def test_unescaped_comma_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedFilterExpressionError):
            parse_filters("a,b")

    def test_leading_comma_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedFilterExpressionError):
            parse_filters(",ga:eventAction==LCP")

    def test_unescaped_comma_in_value_is_unsupported(self) -> None:
        with pytest.raises(UnsupportedFilterExpressionError) as ctx:
            parse_filters("ga:contentGroup1==home,blog")
        assert ctx.value.code == "unsupported_filter_expression"

    def test_missing_namespace_is_invalid(self) -> None:
        with pytest.raises(InvalidFilterExpressionError) as ctx:
            parse_filters("eventAction==LCP")
        assert ctx.value.expression == "eventAction==LCP"

    def test_invalid_fragment_is_reported_on_its_own(self) -> None:
        with pytest.raises(InvalidFilterExpressionError) as ctx:
            parse_filters("ga:eventAction==LCP;ga:dimension2>5")
        assert ctx.value.expression == "ga:dimension2>5"
        assert ctx.value.to_dict()["detail"] == "ga:dimension2>5"

    def test_trailing_semicolon_yields_invalid_empty_fragment(self) -> None:
        with pytest.raises(InvalidFilterExpressionError) as ctx:
            parse_filters("ga:eventAction==LCP;")
        assert ctx.value.expression == ""

    def test_missing_value_is_invalid(self) -> None:
        with pytest.raises(InvalidFilterExpressionError):
            parse_filters("ga:eventAction==")
