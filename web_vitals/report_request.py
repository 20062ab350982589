"""
web_vitals/report_request.py

Builds the declarative reporting API request for a web vitals report.

The request is pure data; executing it is the reporting connector's job.
Dimension order is part of the contract: the aggregator unpacks each row's
dimensions positionally in exactly this order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Final

from web_vitals.filters import FilterClause, parse_filters
from web_vitals.options import ReportState, get_view_options

PAGE_SIZE: Final[int] = 100_000
SEGMENT_PREFIX: Final[str] = "gaid::"
EVENT_VALUE_METRIC: Final[str] = "ga:eventValue"
SEGMENT_DIMENSION: Final[str] = "ga:segment"
DATE_DIMENSION: Final[str] = "ga:date"
PAGE_GROUP_DIMENSION: Final[str] = "ga:contentGroup1"
DEBUG_EVENT_DIMENSION: Final[str] = "ga:dimension2"


@dataclass(frozen=True)
class ReportRequest:
    """
    One ``reportRequests`` entry for the reporting API.
    """

    view_id: str
    start_date: str
    end_date: str
    segment_ids: tuple[str, str]
    dimensions: tuple[str, ...]
    filters: tuple[FilterClause, ...]
    metric_expression: str = EVENT_VALUE_METRIC
    order_by: tuple[str, ...] = (EVENT_VALUE_METRIC, DATE_DIMENSION)
    page_size: int = PAGE_SIZE
    include_empty_rows: bool = True
    page_token: str | None = field(default=None, compare=False)

    @property
    def raw_segment_ids(self) -> tuple[str, ...]:
        """Segment ids with the ``gaid::`` prefix removed."""
        return tuple(segment_id[len(SEGMENT_PREFIX):] for segment_id in self.segment_ids)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialise into the reporting API's camelCase JSON body.
        """

        payload: dict[str, Any] = {
            "viewId": self.view_id,
            "pageSize": self.page_size,
            "includeEmptyRows": self.include_empty_rows,
            "dateRanges": [{"startDate": self.start_date, "endDate": self.end_date}],
            "segments": [{"segmentId": segment_id} for segment_id in self.segment_ids],
            "metrics": [{"expression": self.metric_expression}],
            "dimensions": [{"name": name} for name in self.dimensions],
            "dimensionFilterClauses": {
                "operator": "AND",
                "filters": [clause.to_dict() for clause in self.filters],
            },
            "orderBys": [
                {"fieldName": field_name, "sortOrder": "ASCENDING"}
                for field_name in self.order_by
            ],
        }
        if self.page_token:
            payload["pageToken"] = self.page_token
        return payload


def build_report_request(state: ReportState) -> ReportRequest:
    """
    Combine the view's options and the requested range into a ReportRequest.

    Raises
    ------
    UnsupportedFilterExpressionError, InvalidFilterExpressionError
        If the view's filter expression cannot be parsed.
    """

    options = get_view_options(state)

    filters: list[FilterClause] = [
        FilterClause(
            dimension_name=options.metric_name_dim,
            operator="IN_LIST",
            expressions=[options.lcp_name, options.fid_name, options.cls_name],
        )
    ]
    if options.filters:
        filters.extend(parse_filters(options.filters))

    return ReportRequest(
        view_id=state.view_id,
        start_date=state.start_date,
        end_date=state.end_date,
        segment_ids=(
            f"{SEGMENT_PREFIX}{state.segment_a}",
            f"{SEGMENT_PREFIX}{state.segment_b}",
        ),
        dimensions=(
            SEGMENT_DIMENSION,
            DATE_DIMENSION,
            options.metric_name_dim,
            PAGE_GROUP_DIMENSION,
            DEBUG_EVENT_DIMENSION,
            options.metric_id_dim,
        ),
        filters=tuple(filters),
    )
