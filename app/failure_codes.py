"""Shared failure code constants for web vitals error handling."""

CLIENT_FAILURES = [
    "unsupported_filter_expression",
    "invalid_filter_expression",
]

DATA_FAILURES = [
    "no_web_vitals_events",
    "unexpected_metric",
    "invalid_metric_value",
]
