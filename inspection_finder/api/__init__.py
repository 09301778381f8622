from inspection_finder.api.inspections import router as inspections_router
from inspection_finder.api.dashboard import router as dashboard_router

__all__ = ["inspections_router", "dashboard_router"]
