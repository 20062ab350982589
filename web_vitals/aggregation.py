"""
web_vitals/aggregation.py

Row-to-aggregate transformation for web vitals reports.

Reshapes the flat, ordered rows of one report into four views that a
dashboard renders directly:

    metrics       metric → {values, segments, dates}
    pages         page group → metric → segment → values   (+ count)
    page_group    page group → metric → segment → values   (+ count)
    debug_events  debug event → metric → page group → values (+ count)

``pages`` and ``page_group`` are populated by the same logic and are kept as
separate objects; callers may mutate one without affecting the other.

Values are bucketed only. Percentiles and scoring are computed downstream.

Failure contract
----------------
- Empty input                           → NoWebVitalsEventsError
- Metric name outside {LCP, FID, CLS}   → UnexpectedMetricError
- Non-numeric value                     → InvalidMetricValueError

All three abort the whole call. No partially filled AggregatedData is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from web_vitals.errors import InvalidMetricValueError, NoWebVitalsEventsError, UnexpectedMetricError
from web_vitals.options import CANONICAL_METRICS, WebVitalsOptions

logger = logging.getLogger(__name__)

SegmentResolver = Callable[[str], str]

# CLS is sent to the analytics backend at 1000x so it survives as an integer.
CLS_SCALE = 1000


# ---------------------------------------------------------------------------
# Input rows
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RawRow:
    """
    One report row: a string-encoded value and its six dimensions.
    """

    value: str
    segment_id: str
    date: str
    metric_name: str
    page_group: str
    debug_event: str
    metric_id: str

    @classmethod
    def from_api_row(cls, row: Mapping[str, Any]) -> RawRow:
        """
        Build from a reporting API row::

            {"dimensions": [segment, date, metric, pageGroup, debugEvent, metricId],
             "metrics": [{"values": ["1234"]}]}
        """

        dimensions = list(row["dimensions"])
        if len(dimensions) != 6:
            raise ValueError(f"Expected 6 dimensions per row, got {len(dimensions)}.")
        segment_id, date, metric_name, page_group, debug_event, metric_id = dimensions
        return cls(
            value=str(row["metrics"][0]["values"][0]),
            segment_id=segment_id,
            date=date,
            metric_name=metric_name,
            page_group=page_group,
            debug_event=debug_event,
            metric_id=metric_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "dimensions": [
                self.segment_id,
                self.date,
                self.metric_name,
                self.page_group,
                self.debug_event,
                self.metric_id,
            ],
            "metrics": [{"values": [self.value]}],
        }


# ---------------------------------------------------------------------------
# Output structures
# ---------------------------------------------------------------------------


@dataclass
class MetricBucket:
    """
    All values of one canonical metric, flat and broken down.
    """

    values: list[float] = field(default_factory=list)
    segments: dict[str, list[float]] = field(default_factory=dict)
    dates: dict[str, dict[str, list[float]]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "values": list(self.values),
            "segments": {name: list(values) for name, values in self.segments.items()},
            "dates": {
                date: {name: list(values) for name, values in segments.items()}
                for date, segments in self.dates.items()
            },
        }


@dataclass
class Breakdown:
    """
    Values of one dimension entry, keyed by metric then by a secondary key.

    The secondary key is a segment name for page entries and a page group for
    debug event entries. ``count`` is the number of rows that touched this
    entry and is kept outside ``metrics`` so it never shows up as a key.
    """

    metrics: dict[str, dict[str, list[float]]]
    count: int = 0

    def add(self, metric: str, key: str, value: float) -> None:
        self.metrics[metric].setdefault(key, []).append(value)
        self.count += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "metrics": {
                metric: {key: list(values) for key, values in by_key.items()}
                for metric, by_key in self.metrics.items()
            },
        }


@dataclass
class AggregatedData:
    metrics: dict[str, MetricBucket]
    pages: dict[str, Breakdown] = field(default_factory=dict)
    page_group: dict[str, Breakdown] = field(default_factory=dict)
    debug_events: dict[str, Breakdown] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": {name: bucket.to_dict() for name, bucket in self.metrics.items()},
            "pages": {key: entry.to_dict() for key, entry in self.pages.items()},
            "pageGroup": {key: entry.to_dict() for key, entry in self.page_group.items()},
            "debugEvents": {key: entry.to_dict() for key, entry in self.debug_events.items()},
        }


@dataclass(frozen=True)
class AggregationResult:
    """
    Aggregated data plus the untouched rows and source metadata.
    """

    data: AggregatedData
    rows: tuple[RawRow, ...]
    meta: Mapping[str, Any] | None = None


# ---------------------------------------------------------------------------
# Aggregator
# ---------------------------------------------------------------------------


class WebVitalsAggregator:
    """
    Aggregates report rows for one set of view options.

    Parameters
    ----------
    options:
        View options; supplies the event-name → canonical-metric map.
    resolve_segment:
        Maps a row's segment id to its display name.
    segment_ids:
        The report's comparison segment ids (without ``gaid::``). Their
        resolved names seed every per-segment container so both segments
        are always present, even with no samples.
    """

    def __init__(
        self,
        options: WebVitalsOptions,
        resolve_segment: SegmentResolver,
        *,
        segment_ids: Sequence[str] = (),
    ) -> None:
        self._metric_name_map = options.metric_name_map()
        self._resolve_segment = resolve_segment
        self._segment_ids = tuple(segment_ids)

    def aggregate(
        self,
        rows: Iterable[RawRow],
        meta: Mapping[str, Any] | None = None,
    ) -> AggregationResult:
        """
        Aggregate *rows* in order.

        Raises
        ------
        NoWebVitalsEventsError
            If *rows* is empty.
        UnexpectedMetricError
            If any row's metric does not map to LCP, FID or CLS.
        InvalidMetricValueError
            If any row's value is not a number.
        """

        rows = tuple(rows)
        if not rows:
            raise NoWebVitalsEventsError()

        segment_names = tuple(self._resolve_segment(segment_id) for segment_id in self._segment_ids)
        data = AggregatedData(
            metrics={
                metric: MetricBucket(segments=_segments_dict(segment_names))
                for metric in CANONICAL_METRICS
            }
        )

        for row in rows:
            self._add_row(data, row, segment_names)

        logger.debug(
            "Aggregated %d rows into pages=%d page_groups=%d debug_events=%d",
            len(rows),
            len(data.pages),
            len(data.page_group),
            len(data.debug_events),
        )
        return AggregationResult(data=data, rows=rows, meta=meta)

    def _add_row(self, data: AggregatedData, row: RawRow, segment_names: tuple[str, ...]) -> None:
        metric = self._metric_name_map.get(row.metric_name)
        if metric not in CANONICAL_METRICS:
            raise UnexpectedMetricError(row.metric_name)

        try:
            value = float(row.value)
        except ValueError as exc:
            raise InvalidMetricValueError(row.value) from exc
        if metric == "CLS":
            value = value / CLS_SCALE

        segment = self._resolve_segment(row.segment_id)

        bucket = data.metrics[metric]
        bucket.values.append(value)
        bucket.segments.setdefault(segment, []).append(value)
        bucket.dates.setdefault(row.date, _segments_dict(segment_names)).setdefault(
            segment, []
        ).append(value)

        for breakdowns in (data.pages, data.page_group):
            if row.page_group not in breakdowns:
                breakdowns[row.page_group] = Breakdown(metrics=_metrics_dict(segment_names))
            breakdowns[row.page_group].add(metric, segment, value)

        if row.debug_event not in data.debug_events:
            data.debug_events[row.debug_event] = Breakdown(metrics=_metrics_dict(()))
        data.debug_events[row.debug_event].add(metric, row.page_group, value)


def _segments_dict(segment_names: Iterable[str]) -> dict[str, list[float]]:
    return {name: [] for name in segment_names}


def _metrics_dict(keys: tuple[str, ...]) -> dict[str, dict[str, list[float]]]:
    return {metric: _segments_dict(keys) for metric in CANONICAL_METRICS}
