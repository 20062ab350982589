"""
app/schemas/web_vitals.py

Request and response schemas for the web vitals endpoint.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from web_vitals.aggregation import AggregationResult
from web_vitals.options import ReportState, WebVitalsOptions


class WebVitalsOptionsPayload(BaseModel):
    """
    Customisable event and dimension names for one view.
    """

    model_config = ConfigDict(extra="forbid")

    active: bool = False
    metric_name_dim: str = Field(default="ga:eventAction", min_length=1)
    metric_id_dim: str = Field(default="ga:eventLabel", min_length=1)
    lcp_name: str = Field(default="LCP", min_length=1)
    fid_name: str = Field(default="FID", min_length=1)
    cls_name: str = Field(default="CLS", min_length=1)
    filters: str = ""

    def to_options(self) -> WebVitalsOptions:
        return WebVitalsOptions(**self.model_dump())


class WebVitalsReportRequest(BaseModel):
    """
    One report: a view, a date range and the two segments to compare.
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "view_id": "123456789",
                "start_date": "2020-06-01",
                "end_date": "2020-06-28",
                "segment_a": "-15",
                "segment_b": "-14",
                "options": {"active": True, "filters": "ga:dimension2!@bot"},
            }
        },
    )

    view_id: str = Field(..., min_length=1)
    start_date: str = Field(..., min_length=1)
    end_date: str = Field(..., min_length=1)
    segment_a: str = Field(..., min_length=1)
    segment_b: str = Field(..., min_length=1)
    options: WebVitalsOptionsPayload | None = None

    def to_state(self) -> ReportState:
        view_options = {self.view_id: self.options.to_options()} if self.options else {}
        return ReportState(
            view_id=self.view_id,
            start_date=self.start_date,
            end_date=self.end_date,
            segment_a=self.segment_a,
            segment_b=self.segment_b,
            view_options=view_options,
        )


class WebVitalsErrorResponse(BaseModel):
    code: str
    message: str
    detail: str | None = None


class WebVitalsErrorEnvelope(BaseModel):
    """
    Error body as sent on the wire: FastAPI wraps HTTPException details in
    a top-level ``detail`` key.
    """

    detail: WebVitalsErrorResponse


class WebVitalsReportResponse(BaseModel):
    """
    Aggregated report data plus the raw rows and source metadata.

    ``data`` has the keys ``metrics``, ``pages``, ``pageGroup`` and
    ``debugEvents``. Breakdown entries are ``{"count": n, "metrics": {...}}``.
    """

    data: dict[str, Any]
    rows: list[dict[str, Any]]
    meta: dict[str, Any] | None = None

    @classmethod
    def from_result(cls, result: AggregationResult) -> WebVitalsReportResponse:
        return cls(
            data=result.data.to_dict(),
            rows=[row.to_dict() for row in result.rows],
            meta=dict(result.meta) if result.meta is not None else None,
        )
