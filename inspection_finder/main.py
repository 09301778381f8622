import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from inspection_finder import __version__
from inspection_finder.config import Settings, settings as default_settings
from inspection_finder.api.inspections import router as inspections_router
from inspection_finder.api.dashboard import router as dashboard_router
from inspection_finder.services.board import InspectionBoard

# Configure logging
logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the inspection data once at startup; drop it on shutdown."""
    logger.info("Starting Inspection Finder application...")

    board: InspectionBoard = app.state.board
    await board.load()
    if board.error_message:
        logger.warning("Application running without inspection data")
    else:
        logger.info(f"Inspection data ready: {len(board.records)} records, {len(board.city_options) - 1} cities")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down Inspection Finder application...")
    board.reset()
    logger.info("Application shutdown complete")


# Set CSP headers so the page's inline script and the Tailwind CDN are allowed
class CSPMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' 'unsafe-inline' https://cdn.tailwindcss.com; "
            "style-src 'self' 'unsafe-inline' https://cdn.tailwindcss.com; "
            "img-src 'self' data:; "
            "connect-src 'self'"
        )
        return response


def create_app(settings: Optional[Settings] = None, board: Optional[InspectionBoard] = None) -> FastAPI:
    """Build the application. A prebuilt board can be passed in (tests do this)."""
    settings = settings or default_settings

    app = FastAPI(
        title="Inspection Finder",
        description="Search, filter and sort restaurant inspection results",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.board = board or InspectionBoard(settings=settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(CSPMiddleware)

    # API routes
    app.include_router(inspections_router, prefix="/api/inspections", tags=["inspections"])
    app.include_router(dashboard_router, tags=["dashboard"])

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        board_state: InspectionBoard = app.state.board
        return {
            "status": "healthy",
            "service": "inspection-finder",
            "records": len(board_state.records),
            "data_available": board_state.data_available,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "inspection_finder.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        reload=True,
    )
