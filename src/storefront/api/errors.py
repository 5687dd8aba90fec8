"""Exception handlers for the storefront API.

Protean's handlers cover validation (400) and missing records (404); the
storefront adds store failures and corrupt order data.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import NotFoundError, RemoteOperationError, UnknownOrderStatus

logger = structlog.get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": exc.messages})

    @app.exception_handler(RemoteOperationError)
    async def remote_operation_failed(request: Request, exc: RemoteOperationError):
        logger.error("Remote operation failed", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=503, content={"error": str(exc) or "Service unavailable"})

    @app.exception_handler(UnknownOrderStatus)
    async def unknown_order_status(request: Request, exc: UnknownOrderStatus):
        logger.error("Order has unrecognised status", order_id=exc.order_id, status=exc.status)
        return JSONResponse(status_code=500, content={"error": str(exc)})
