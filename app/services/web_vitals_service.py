"""
app/services/web_vitals_service.py

Web vitals report pipeline.

Wires ReportRequestBuilder → ReportingAPIConnector → WebVitalsAggregator →
count sorting into a single call. No aggregation logic lives here; every
layer keeps its own responsibility:

    build_report_request   – options + state → declarative request
    ReportingAPIConnector  – HTTP, paging, retries
    WebVitalsAggregator    – validation and bucketing of rows
    sort_aggregated_data   – deterministic ordering of breakdowns

Failure contract
----------------
- Filter expression errors  → raised before any request is made
- Transport failures        → ConnectorRequestError from the connector
- Empty report              → NoWebVitalsEventsError
- Unexpected metric         → UnexpectedMetricError; nothing is returned
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache

from app.config import get_external_http_settings, get_reporting_api_settings
from app.connectors import ConnectorRequestError, ReportingAPIConnector, SegmentResolver
from app.logging_utils import log_event
from web_vitals.aggregation import AggregationResult, SegmentResolver as ResolveSegment, WebVitalsAggregator
from web_vitals.errors import WebVitalsError
from web_vitals.options import ReportState, get_view_options
from web_vitals.report_request import build_report_request
from web_vitals.sorting import sort_aggregated_data

logger = logging.getLogger(__name__)


class WebVitalsService:
    """
    Produces sorted web vitals aggregates for one report state per call.

    The service holds no per-request state and may be shared across
    concurrent requests.
    """

    def __init__(
        self,
        *,
        connector: ReportingAPIConnector,
        resolve_segment: ResolveSegment,
    ) -> None:
        self._connector = connector
        self._resolve_segment = resolve_segment

    def get_web_vitals_data(self, state: ReportState) -> AggregationResult:
        """
        Build, fetch, aggregate and sort the report described by *state*.

        Returns
        -------
        AggregationResult
            Sorted aggregates plus the fetched rows and source metadata,
            unchanged.

        Raises
        ------
        WebVitalsError
            For filter, empty-report and unexpected-metric failures.
        ConnectorRequestError
            If the reporting API cannot be reached.
        """

        run_start = time.monotonic()
        options = get_view_options(state)

        try:
            report_request = build_report_request(state)
            fetched = self._connector.fetch_report(report_request)
            aggregator = WebVitalsAggregator(
                options,
                self._resolve_segment,
                segment_ids=report_request.raw_segment_ids,
            )
            result = aggregator.aggregate(fetched.rows, meta=fetched.meta)
        except (WebVitalsError, ConnectorRequestError) as exc:
            log_event(
                logger,
                logging.WARNING,
                "web_vitals_report_failed",
                view_id=state.view_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

        sort_aggregated_data(result.data)

        log_event(
            logger,
            logging.INFO,
            "web_vitals_report_completed",
            view_id=state.view_id,
            start_date=state.start_date,
            end_date=state.end_date,
            rows=len(result.rows),
            pages=len(result.data.pages),
            debug_events=len(result.data.debug_events),
            elapsed_seconds=round(time.monotonic() - run_start, 3),
        )
        return result


@lru_cache(maxsize=1)
def get_web_vitals_service() -> WebVitalsService:
    """
    Build and cache the web vitals service.
    """

    settings = get_reporting_api_settings()
    http_settings = get_external_http_settings()
    return WebVitalsService(
        connector=ReportingAPIConnector(settings=settings, http_settings=http_settings),
        resolve_segment=SegmentResolver(settings=settings, http_settings=http_settings),
    )
