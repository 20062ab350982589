"""
web_vitals/errors.py

Typed failures raised by the web vitals aggregation pipeline.

Every error carries a stable ``code`` so callers (the HTTP layer, a
dashboard) can present a message without parsing exception text.
"""

from __future__ import annotations

from typing import Any


class WebVitalsError(ValueError):
    """
    Base class for all pipeline failures.

    Raised synchronously at the point of detection and never retried.
    """

    code: str = "web_vitals_error"
    message: str = "The web vitals report could not be built."

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(f"{self.code}: {detail}" if detail is not None else self.code)
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }


class NoWebVitalsEventsError(WebVitalsError):
    """
    Raised when the report returned no rows for the requested range.
    """

    code = "no_web_vitals_events"
    message = "No web vitals events were found for the selected view, segments and date range."


class UnsupportedFilterExpressionError(WebVitalsError):
    """
    Raised when a filter expression uses comma-separated (OR) values.
    """

    code = "unsupported_filter_expression"
    message = "Filter expressions containing unescaped commas (OR) are not supported."


class InvalidFilterExpressionError(WebVitalsError):
    """
    Raised when one ``;``-separated filter fragment cannot be parsed.
    """

    code = "invalid_filter_expression"
    message = "A filter expression is not in the form <ga:dimension><operator><value>."

    def __init__(self, expression: str) -> None:
        super().__init__(expression)
        self.expression = expression


class InvalidMetricValueError(WebVitalsError):
    """
    Raised when a row's value is not a number.
    """

    code = "invalid_metric_value"
    message = "The report contained a metric value that is not a number."

    def __init__(self, value: str) -> None:
        super().__init__(value)
        self.value = value


class UnexpectedMetricError(WebVitalsError):
    """
    Raised when a row's metric name does not map to LCP, FID or CLS.

    This usually means the reporting backend collapsed long-tail rows into an
    ``(other)`` bucket, which invalidates the whole report. Narrow the date
    range or add filters and request again.
    """

    code = "unexpected_metric"
    message = (
        "The report contained an unexpected metric. Try a shorter date range "
        "or add filters to reduce the number of rows."
    )

    def __init__(self, metric: str | None) -> None:
        super().__init__(metric)
        self.metric = metric
