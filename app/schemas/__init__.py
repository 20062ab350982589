"""
app/schemas package marker.
"""

from app.schemas.web_vitals import (
    WebVitalsErrorEnvelope,
    WebVitalsErrorResponse,
    WebVitalsOptionsPayload,
    WebVitalsReportRequest,
    WebVitalsReportResponse,
)

__all__ = [
    "WebVitalsErrorEnvelope",
    "WebVitalsErrorResponse",
    "WebVitalsOptionsPayload",
    "WebVitalsReportRequest",
    "WebVitalsReportResponse",
]
