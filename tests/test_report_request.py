"""
tests/test_report_request.py

Unit tests for view option resolution and report request building.
"""

from __future__ import annotations

import pytest

from web_vitals.errors import InvalidFilterExpressionError, UnsupportedFilterExpressionError
from web_vitals.options import ReportState, WebVitalsOptions, get_default_options, get_view_options
from web_vitals.report_request import PAGE_SIZE, build_report_request


def _state(**options_kwargs: object) -> ReportState:
    view_options = {"42": WebVitalsOptions(**options_kwargs)} if options_kwargs else {}
    return ReportState(
        view_id="42",
        start_date="2020-06-01",
        end_date="2020-06-28",
        segment_a="-15",
        segment_b="-14",
        view_options=view_options,
    )


# ---------------------------------------------------------------------------
# View options
# ---------------------------------------------------------------------------


class TestViewOptions:
    def test_default_options_are_fresh_values(self) -> None:
        first = get_default_options()
        second = get_default_options()
        assert first == second
        assert first is not second

    def test_inactive_stored_options_fall_back_to_defaults(self) -> None:
        state = _state(active=False, lcp_name="largest_paint")
        assert get_view_options(state) == get_default_options()

    def test_active_stored_options_are_used(self) -> None:
        state = _state(active=True, lcp_name="largest_paint")
        assert get_view_options(state).lcp_name == "largest_paint"

    def test_options_for_other_views_are_ignored(self) -> None:
        state = ReportState(
            view_id="42",
            start_date="2020-06-01",
            end_date="2020-06-28",
            segment_a="-15",
            segment_b="-14",
            view_options={"7": WebVitalsOptions(active=True, lcp_name="x")},
        )
        assert get_view_options(state).lcp_name == "LCP"

    def test_metric_name_map(self) -> None:
        options = WebVitalsOptions(lcp_name="a", fid_name="b", cls_name="c")
        assert options.metric_name_map() == {"a": "LCP", "b": "FID", "c": "CLS"}


# ---------------------------------------------------------------------------
# Request building
# ---------------------------------------------------------------------------


class TestBuildReportRequest:
    def test_default_request_body(self) -> None:
        body = build_report_request(_state()).to_dict()

        assert body == {
            "viewId": "42",
            "pageSize": 100000,
            "includeEmptyRows": True,
            "dateRanges": [{"startDate": "2020-06-01", "endDate": "2020-06-28"}],
            "segments": [{"segmentId": "gaid::-15"}, {"segmentId": "gaid::-14"}],
            "metrics": [{"expression": "ga:eventValue"}],
            "dimensions": [
                {"name": "ga:segment"},
                {"name": "ga:date"},
                {"name": "ga:eventAction"},
                {"name": "ga:contentGroup1"},
                {"name": "ga:dimension2"},
                {"name": "ga:eventLabel"},
            ],
            "dimensionFilterClauses": {
                "operator": "AND",
                "filters": [
                    {
                        "dimensionName": "ga:eventAction",
                        "operator": "IN_LIST",
                        "expressions": ["LCP", "FID", "CLS"],
                    }
                ],
            },
            "orderBys": [
                {"fieldName": "ga:eventValue", "sortOrder": "ASCENDING"},
                {"fieldName": "ga:date", "sortOrder": "ASCENDING"},
            ],
        }

    def test_custom_dimensions_and_names_are_used(self) -> None:
        request = build_report_request(
            _state(
                active=True,
                metric_name_dim="ga:dimension5",
                metric_id_dim="ga:dimension6",
                lcp_name="lcp",
                fid_name="fid",
                cls_name="cls",
            )
        )

        assert request.dimensions[2] == "ga:dimension5"
        assert request.dimensions[5] == "ga:dimension6"
        base_filter = request.filters[0]
        assert base_filter.dimension_name == "ga:dimension5"
        assert base_filter.expressions == ["lcp", "fid", "cls"]

    def test_parsed_filters_are_appended_after_base_filter(self) -> None:
        request = build_report_request(
            _state(active=True, filters="ga:contentGroup1==home;ga:dimension2!@bot")
        )

        names = [clause.dimension_name for clause in request.filters]
        assert names == ["ga:eventAction", "ga:contentGroup1", "ga:dimension2"]
        assert request.filters[0].operator == "IN_LIST"
        assert request.filters[2].not_ is True

    def test_filters_of_inactive_options_are_ignored(self) -> None:
        request = build_report_request(_state(active=False, filters="not a filter"))
        assert len(request.filters) == 1

    def test_raw_segment_ids_strip_prefix(self) -> None:
        assert build_report_request(_state()).raw_segment_ids == ("-15", "-14")

    def test_page_size_is_fixed(self) -> None:
        assert build_report_request(_state()).page_size == PAGE_SIZE == 100_000

    def test_building_is_deterministic(self) -> None:
        state = _state(active=True, filters="ga:contentGroup1=@blog")
        assert build_report_request(state) == build_report_request(state)

    def test_unsupported_filter_propagates(self) -> None:
        with pytest.raises(UnsupportedFilterExpressionError):
            build_report_request(_state(active=True, filters="ga:contentGroup1==a,b"))

    def test_invalid_filter_propagates(self) -> None:
        with pytest.raises(InvalidFilterExpressionError):
            build_report_request(_state(active=True, filters="contentGroup1==a"))
