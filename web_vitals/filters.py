"""
web_vitals/filters.py

Parser for the compact filter DSL accepted in view options.

A filter string is a ``;``-separated list of fragments, each of the form
``<ga:dimension><operator><value>``:

    ==  exact match          !=  does not exactly match
    =@  contains             !@  does not contain
    =~  regular expression   !~  does not match regular expression

Example::

    ga:eventAction==LCP;ga:dimension2!@foo

Comma-separated (OR) values are not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Final, Literal

from web_vitals.errors import InvalidFilterExpressionError, UnsupportedFilterExpressionError

FilterOperator = Literal["EXACT", "PARTIAL", "REGEXP", "IN_LIST"]

_UNESCAPED_COMMA: Final = re.compile(r"(?<!\\),")
_FRAGMENT: Final = re.compile(r"(ga:\w+)([!=][=@~])(.+)$")


@dataclass(frozen=True)
class FilterClause:
    """
    One dimension filter in the reporting API's ``dimensionFilterClauses``.
    """

    dimension_name: str
    expressions: list[str] = field(default_factory=list)
    operator: FilterOperator | None = None
    not_: bool = False

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "dimensionName": self.dimension_name,
            "expressions": list(self.expressions),
        }
        if self.operator is not None:
            payload["operator"] = self.operator
        if self.not_:
            payload["not"] = True
        return payload


def parse_filters(expression: str) -> list[FilterClause]:
    """
    Parse *expression* into filter clauses, preserving fragment order.

    Raises
    ------
    UnsupportedFilterExpressionError
        If the expression contains a comma not preceded by a backslash.
    InvalidFilterExpressionError
        If any fragment does not match ``<ga:dimension><operator><value>``.
    """

    if _UNESCAPED_COMMA.search(expression):
        raise UnsupportedFilterExpressionError(expression)

    # TODO: support escaping semicolons inside values.
    return [_parse_fragment(fragment) for fragment in expression.split(";")]


def _parse_fragment(fragment: str) -> FilterClause:
    match = _FRAGMENT.search(fragment)
    if match is None:
        raise InvalidFilterExpressionError(fragment)

    dimension_name, symbols, value = match.groups()

    operator: FilterOperator | None = None
    if symbols.endswith("="):
        operator = "EXACT"
    elif symbols.endswith("@"):
        operator = "PARTIAL"
    elif value.endswith("~"):
        # Checked against the value, not the operator symbols.
        operator = "REGEXP"

    return FilterClause(
        dimension_name=dimension_name,
        expressions=[value],
        operator=operator,
        not_=symbols.startswith("!"),
    )
