"""
app/api/routers package marker.
"""

from app.api.routers.analysis import router as analysis_router
from app.api.routers.integrations import router as integrations_router
from app.api.routers.onboarding import router as onboarding_router
from app.api.routers.uploads import router as uploads_router

__all__ = [
    "analysis_router",
    "integrations_router",
    "onboarding_router",
    "uploads_router",
]
