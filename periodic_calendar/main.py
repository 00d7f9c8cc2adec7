"""
FastAPI application factory
"""
import logging
import traceback

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from periodic_calendar.config import get_settings
from periodic_calendar.infrastructure.db.session import check_db_connection
from periodic_calendar.api.v1 import calendar, entries, reports, statuses

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every unhandled exception with its traceback and answers 500"""

    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            tb_str = traceback.format_exc()
            logger.error(f"\n{'='*60}\nERROR on {request.method} {request.url.path}\n{tb_str}{'='*60}")
            return Response(content=f"Internal Server Error: {exc}", status_code=500)


def create_app() -> FastAPI:
    """
    Application factory - builds and configures the FastAPI app
    """
    settings = get_settings()

    app = FastAPI(
        title="Periodic Calendar",
        debug=settings.DEBUG,
    )

    app.add_middleware(ErrorLoggingMiddleware)

    app.include_router(entries.router)
    app.include_router(calendar.router)
    app.include_router(statuses.router)
    app.include_router(reports.router)

    # Health checks
    @app.get("/health", response_class=PlainTextResponse, tags=["system"])
    def health():
        """Health check endpoint"""
        return "ok"

    @app.get("/ready", response_class=PlainTextResponse, tags=["system"])
    def ready():
        """Readiness check endpoint (verifies the database answers)"""
        check_db_connection()
        return "ok"

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "periodic_calendar.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
