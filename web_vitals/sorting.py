"""
web_vitals/sorting.py

Reorders breakdown collections so the most frequent entries come first.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeVar

from web_vitals.aggregation import AggregatedData, Breakdown

B = TypeVar("B", bound=Breakdown)


def sort_by_count(container: Mapping[str, B]) -> dict[str, B]:
    """
    Return a new dict with keys in descending ``count`` order.

    The sort is stable: entries with equal counts keep their first-seen order,
    so sorting an already sorted container is a no-op.
    """

    ordered = sorted(container.items(), key=lambda item: item[1].count, reverse=True)
    return dict(ordered)


def sort_aggregated_data(data: AggregatedData) -> AggregatedData:
    """
    Sort ``pages``, ``page_group`` and ``debug_events`` by count in place.

    ``metrics`` keeps its fixed LCP, FID, CLS order.
    """

    data.pages = sort_by_count(data.pages)
    data.page_group = sort_by_count(data.page_group)
    data.debug_events = sort_by_count(data.debug_events)
    return data
