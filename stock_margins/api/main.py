"""Stock margins service entry point: app factory, probes and error envelope"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from stock_margins.api.dependencies import get_request_id
from stock_margins.api.middleware import RequestIDMiddleware, MetricsMiddleware
from stock_margins.api.v1 import margins
from stock_margins.infrastructure.observability.logging import setup_logging
from stock_margins.config import settings

API_VERSION = "0.1.0"
INVALID_REQUEST_ERROR = "Invalid request"

setup_logging(settings.log_level)


def _describe(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{location}: {error['msg']}" if location else error["msg"]


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request shape errors in the same error/details envelope as margin validation"""
    details = [_describe(error) for error in exc.errors()]
    logging.warning(
        "Request rejected",
        extra={"request_id": get_request_id(request), "path": request.url.path, "errors": details},
    )
    return JSONResponse(status_code=422, content={"detail": {"error": INVALID_REQUEST_ERROR, "details": details}})


def create_app() -> FastAPI:
    """Build the margins API with probes, middleware and the v1 router"""
    app = FastAPI(
        title="Stock Margins Service",
        description="Vehicle VAT, profit and margin calculations for dealer stock",
        version=API_VERSION,
    )

    # Request IDs are assigned before metrics time the request
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name, "version": API_VERSION}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(margins.router, prefix="/v1", tags=["margins"])

    return app


app = create_app()
