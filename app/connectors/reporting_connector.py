"""
app/connectors/reporting_connector.py

Executes web vitals report requests against the analytics reporting API.

Rows are returned in the order the API sends them (the request sorts by
event value then date). When a report spans several pages, ``nextPageToken``
is followed and rows are concatenated page by page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any

import requests

from app.config import ExternalHTTPSettings, ReportingAPISettings
from app.connectors.base import BaseConnector, ConnectorRequestError
from web_vitals.aggregation import RawRow
from web_vitals.report_request import ReportRequest

logger = logging.getLogger(__name__)

_META_DATA_FIELDS = ("rowCount", "isDataGolden", "samplesReadCounts", "samplingSpaceSizes")


@dataclass(frozen=True)
class ReportFetchResult:
    """
    Rows of one report plus the source metadata of its first page.
    """

    rows: list[RawRow]
    meta: dict[str, Any] = field(default_factory=dict)
    pages_fetched: int = 1


class ReportingAPIConnector(BaseConnector):
    """
    Connector for the reporting API's ``reports:batchGet`` endpoint.
    """

    def __init__(
        self,
        *,
        settings: ReportingAPISettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            source="reporting_api",
            http_settings=http_settings,
            access_token=settings.access_token,
            session=session,
        )
        self._settings = settings

    def fetch_report(self, report_request: ReportRequest) -> ReportFetchResult:
        """
        Run *report_request* and return every row across all pages.

        Raises
        ------
        ConnectorRequestError
            On transport failure, an unexpected response shape, or when the
            report needs more than the configured number of pages.
        """

        rows: list[RawRow] = []
        meta: dict[str, Any] = {}
        request = report_request
        pages_fetched = 0

        while True:
            if pages_fetched >= self._settings.max_pages:
                raise ConnectorRequestError(
                    f"{self.source}: report exceeded {self._settings.max_pages} pages; "
                    "narrow the date range or add filters."
                )

            payload = self._request_json(
                method="POST",
                url=self._settings.batch_get_url,
                json_body={"reportRequests": [request.to_dict()]},
            )
            report = self._first_report(payload)
            pages_fetched += 1

            if not meta:
                meta = self._extract_meta(report)

            page_rows = (report.get("data") or {}).get("rows") or []
            try:
                rows.extend(RawRow.from_api_row(row) for row in page_rows)
            except (KeyError, IndexError, TypeError, ValueError) as exc:
                raise ConnectorRequestError(f"{self.source}: malformed report row.") from exc

            next_token = report.get("nextPageToken")
            if not next_token:
                break
            request = replace(report_request, page_token=next_token)

        logger.info(
            "Fetched report view_id=%s rows=%d pages=%d",
            report_request.view_id,
            len(rows),
            pages_fetched,
        )
        return ReportFetchResult(rows=rows, meta=meta, pages_fetched=pages_fetched)

    def _first_report(self, payload: Any) -> dict[str, Any]:
        reports = payload.get("reports") if isinstance(payload, dict) else None
        if not reports:
            raise ConnectorRequestError(f"{self.source}: response contained no reports.")
        return reports[0]

    @staticmethod
    def _extract_meta(report: dict[str, Any]) -> dict[str, Any]:
        data = report.get("data") or {}
        meta: dict[str, Any] = {"columnHeader": report.get("columnHeader")}
        for key in _META_DATA_FIELDS:
            if key in data:
                meta[key] = data[key]
        return meta
