"""
app/api/routers/web_vitals_router.py

Web vitals report endpoint.

Runs the full pipeline for one view, date range and segment pair:
    build request → fetch rows → aggregate → sort by count

Pipeline failures are translated into HTTP errors here and nowhere else.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.connectors import ConnectorRequestError
from app.failure_codes import CLIENT_FAILURES, DATA_FAILURES
from app.schemas.web_vitals import (
    WebVitalsErrorEnvelope,
    WebVitalsReportRequest,
    WebVitalsReportResponse,
)
from app.services.web_vitals_service import WebVitalsService, get_web_vitals_service
from web_vitals.errors import WebVitalsError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["web-vitals"])


def _status_for(error: WebVitalsError) -> int:
    if error.code in CLIENT_FAILURES:
        return status.HTTP_400_BAD_REQUEST
    if error.code in DATA_FAILURES:
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.post(
    "/web-vitals",
    response_model=WebVitalsReportResponse,
    responses={
        400: {"model": WebVitalsErrorEnvelope},
        422: {
            "model": WebVitalsErrorEnvelope,
            "description": "Report data could not be aggregated. Request validation "
            "errors share this status and carry a list in ``detail`` instead.",
        },
        502: {"model": WebVitalsErrorEnvelope},
    },
)
def get_web_vitals_report(
    body: WebVitalsReportRequest,
    service: WebVitalsService = Depends(get_web_vitals_service),
) -> WebVitalsReportResponse:
    """
    Return LCP, FID and CLS values bucketed by segment, date, page group and
    debug event.
    """

    try:
        result = service.get_web_vitals_data(body.to_state())
    except WebVitalsError as exc:
        raise HTTPException(status_code=_status_for(exc), detail=exc.to_dict()) from exc
    except ConnectorRequestError as exc:
        logger.error("Web vitals report fetch failed view_id=%s error=%s", body.view_id, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "code": "reporting_api_unavailable",
                "message": "The analytics reporting API could not be reached.",
                "detail": str(exc),
            },
        ) from exc

    return WebVitalsReportResponse.from_result(result)
