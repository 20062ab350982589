"""
app/logging_utils.py

Structured logging helpers for web vitals report events.

Every line carries ``service`` and ``view_id`` so report logs from many
analytics views can be filtered without parsing free text.
"""

from __future__ import annotations

import json
import logging
from typing import Any

SERVICE_NAME = "web_vitals"


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    *,
    view_id: str | None,
    **fields: Any,
) -> None:
    """
    Emit one structured report log line as compact JSON.

    ``view_id`` is always present in the payload, as ``null`` when the
    view is unknown. Nothing is serialised when *level* is disabled.
    """

    if not logger.isEnabledFor(level):
        return

    payload = {**fields, "event": event, "service": SERVICE_NAME, "view_id": view_id}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))
