"""
app/api/routers package marker.
"""

from app.api.routers.web_vitals_router import router as web_vitals_router

__all__ = [
    "web_vitals_router",
]
