"""
web_vitals/options.py

Per-view report options and the request state they are resolved from.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Final

CANONICAL_METRICS: Final[tuple[str, ...]] = ("LCP", "FID", "CLS")
"""The three metrics every report is bucketed into, in display order."""


@dataclass(frozen=True)
class WebVitalsOptions:
    """
    Customisable dimension and event names for one analytics view.

    Options are only honoured when ``active`` is set; otherwise the defaults
    returned by :func:`get_default_options` are used.
    """

    active: bool = False
    metric_name_dim: str = "ga:eventAction"
    metric_id_dim: str = "ga:eventLabel"
    lcp_name: str = "LCP"
    fid_name: str = "FID"
    cls_name: str = "CLS"
    filters: str = ""

    def metric_name_map(self) -> dict[str, str]:
        """
        Map the configured event names back to the canonical metric names.
        """

        return {
            self.lcp_name: "LCP",
            self.fid_name: "FID",
            self.cls_name: "CLS",
        }


@dataclass(frozen=True)
class ReportState:
    """
    Everything needed to request one web vitals report.
    """

    view_id: str
    start_date: str
    end_date: str
    segment_a: str
    segment_b: str
    view_options: Mapping[str, WebVitalsOptions] = field(default_factory=dict)


def get_default_options() -> WebVitalsOptions:
    """
    Return a fresh default options value.
    """

    return WebVitalsOptions()


def get_view_options(state: ReportState) -> WebVitalsOptions:
    """
    Return the stored options for ``state.view_id`` when they are active,
    otherwise the defaults.
    """

    stored = state.view_options.get(state.view_id)
    if stored is not None and stored.active:
        return stored
    return get_default_options()
