"""
Exception handlers turning dashboard errors into JSON notices.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from shop_admin.errors import DashboardError

logger = structlog.get_logger(__name__)


async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    logger.warning(
        "Action failed",
        path=request.url.path,
        error_type=type(exc).__name__,
        status_code=exc.status_code,
        description=exc.description,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.description,
            "notice": exc.to_notice().model_dump(mode="json"),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DashboardError, dashboard_error_handler)
