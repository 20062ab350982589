"""
app/services package marker.
"""

from app.services.web_vitals_service import WebVitalsService, get_web_vitals_service

__all__ = [
    "WebVitalsService",
    "get_web_vitals_service",
]
