"""Credit Report API - API Routers"""
from .reports import router as reports_router

__all__ = [
    "reports_router",
]
