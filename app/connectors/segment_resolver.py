"""
app/connectors/segment_resolver.py

Resolves analytics segment ids to their display names.

The segment list is fetched from the management API on first use and cached
for the lifetime of the resolver. Ids missing from the list resolve to
themselves, so resolution never fails mid-aggregation.
"""

from __future__ import annotations

import logging
import threading

import requests

from app.config import ExternalHTTPSettings, ReportingAPISettings
from app.connectors.base import BaseConnector, ConnectorRequestError

logger = logging.getLogger(__name__)


class SegmentResolver(BaseConnector):
    """
    Cached id → name lookup over the management API's segment list.
    """

    def __init__(
        self,
        *,
        settings: ReportingAPISettings,
        http_settings: ExternalHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(
            source="segments_api",
            http_settings=http_settings,
            access_token=settings.access_token,
            session=session,
        )
        self._settings = settings
        self._names: dict[str, str] | None = None
        self._unknown_ids: set[str] = set()
        self._lock = threading.Lock()

    def __call__(self, segment_id: str) -> str:
        return self.resolve(segment_id)

    def resolve(self, segment_id: str) -> str:
        """
        Return the display name for *segment_id*, or the id itself if unknown.
        """

        names = self._load()
        name = names.get(segment_id)
        if name is not None:
            return name

        with self._lock:
            if segment_id not in self._unknown_ids:
                self._unknown_ids.add(segment_id)
                logger.warning("Unknown segment id=%r; using the id as its name", segment_id)
        return segment_id

    def _load(self) -> dict[str, str]:
        with self._lock:
            if self._names is None:
                self._names = self._fetch_names()
            return self._names

    def _fetch_names(self) -> dict[str, str]:
        payload = self._request_json(
            method="GET",
            url=self._settings.segments_url,
            params={"max-results": 1000},
        )
        items = payload.get("items") if isinstance(payload, dict) else None
        if items is None:
            raise ConnectorRequestError(f"{self.source}: response contained no segment items.")

        names: dict[str, str] = {}
        for item in items:
            segment_id = item.get("id")
            name = item.get("name")
            if segment_id is None or name is None:
                continue
            names[str(segment_id)] = name
        logger.info("Loaded %d segment names", len(names))
        return names
