"""
app/connectors package marker.
"""

from app.connectors.base import BaseConnector, ConnectorRequestError
from app.connectors.reporting_connector import ReportFetchResult, ReportingAPIConnector
from app.connectors.segment_resolver import SegmentResolver

__all__ = [
    "BaseConnector",
    "ConnectorRequestError",
    "ReportFetchResult",
    "ReportingAPIConnector",
    "SegmentResolver",
]
