"""
web_vitals package marker.

Pure aggregation core: filter parsing, report request building, row
aggregation and count sorting. No I/O happens in this package.
"""

from web_vitals.aggregation import (
    AggregatedData,
    AggregationResult,
    Breakdown,
    MetricBucket,
    RawRow,
    WebVitalsAggregator,
)
from web_vitals.errors import (
    InvalidFilterExpressionError,
    InvalidMetricValueError,
    NoWebVitalsEventsError,
    UnexpectedMetricError,
    UnsupportedFilterExpressionError,
    WebVitalsError,
)
from web_vitals.filters import FilterClause, parse_filters
from web_vitals.options import ReportState, WebVitalsOptions, get_default_options, get_view_options
from web_vitals.report_request import ReportRequest, build_report_request
from web_vitals.sorting import sort_aggregated_data, sort_by_count

__all__ = [
    "AggregatedData",
    "AggregationResult",
    "Breakdown",
    "FilterClause",
    "InvalidFilterExpressionError",
    "InvalidMetricValueError",
    "MetricBucket",
    "NoWebVitalsEventsError",
    "RawRow",
    "ReportRequest",
    "ReportState",
    "UnexpectedMetricError",
    "UnsupportedFilterExpressionError",
    "WebVitalsAggregator",
    "WebVitalsError",
    "WebVitalsOptions",
    "build_report_request",
    "get_default_options",
    "get_view_options",
    "parse_filters",
    "sort_aggregated_data",
    "sort_by_count",
]
