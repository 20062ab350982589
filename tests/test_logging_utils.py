"""
tests/test_logging_utils.py

Tests for the structured report log line.
"""

from __future__ import annotations

import json
import logging

import pytest

from app.logging_utils import log_event

LOGGER_NAME = "tests.web_vitals.events"


def test_payload_carries_service_and_view_id(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    log_event(logger, logging.INFO, "web_vitals_report_completed", view_id="42", rows=3)

    (record,) = caplog.records
    assert json.loads(record.getMessage()) == {
        "event": "web_vitals_report_completed",
        "rows": 3,
        "service": "web_vitals",
        "view_id": "42",
    }


def test_reserved_fields_cannot_be_overridden(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)

    log_event(logger, logging.INFO, "web_vitals_report_failed", view_id=None, service="other")

    payload = json.loads(caplog.records[0].getMessage())
    assert payload["service"] == "web_vitals"
    assert payload["view_id"] is None


def test_disabled_level_emits_nothing(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger(LOGGER_NAME)
    caplog.set_level(logging.WARNING, logger=LOGGER_NAME)

    log_event(logger, logging.DEBUG, "web_vitals_report_completed", view_id="42")

    assert caplog.records == []


def test_view_id_is_required() -> None:
    with pytest.raises(TypeError):
        log_event(logging.getLogger(LOGGER_NAME), logging.INFO, "web_vitals_report_completed")
