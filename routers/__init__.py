"""
Routers Module

API routers for the VerbLab application.
"""

from .verbs import router as verbs_router
from .preferences import router as preferences_router

__all__ = ["verbs_router", "preferences_router"]
