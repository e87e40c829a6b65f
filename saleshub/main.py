"""
FastAPI application for SalesHub
AI Sales Assistant API with request logging and uniform error envelopes
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog

from . import __version__
from .config import get_settings
from .utils.helpers import utc_now_iso
from .web.routers.sales_assistant import router as sales_assistant_router

logging.basicConfig(format="%(message)s", level=get_settings().log_level)

# Setup structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger("saleshub.main")

# HTTP status -> error code in the response envelope
ERROR_CODES = {
    400: "INVALID_REQUEST",
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    422: "INVALID_REQUEST",
}
DEFAULT_ERROR_CODE = "SALES_ASSISTANT_ERROR"


def error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": {
                "code": ERROR_CODES.get(status_code, DEFAULT_ERROR_CODE),
                "message": message,
                "timestamp": utc_now_iso()
            }
        }
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    settings = get_settings()
    logger.info("Starting SalesHub", version=__version__, environment=settings.environment)

    if not settings.google_ai_api_key and not settings.deepseek_api_key:
        logger.warning("No AI provider configured, analysis requests will fail")
    if not settings.supabase_service_role_key:
        logger.warning("Supabase service role key not configured")

    yield

    logger.info("Application shutdown completed")


# Create FastAPI app
app = FastAPI(
    title="SalesHub",
    description="AI sales assistant: lead scoring, stage analysis, pricing and forecasting",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if get_settings().is_development else None,
    redoc_url="/redoc" if get_settings().is_development else None
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    max_age=86400,
)

app.include_router(sales_assistant_router)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests"""
    start_time = datetime.utcnow()

    # Generate request ID
    request_id = f"{int(start_time.timestamp())}-{id(request)}"

    logger.info(
        "Request started",
        request_id=request_id,
        method=request.method,
        url=str(request.url),
        client_ip=request.client.host if request.client else None
    )

    try:
        response = await call_next(request)

        duration = (datetime.utcnow() - start_time).total_seconds()

        logger.info(
            "Request completed",
            request_id=request_id,
            status_code=response.status_code,
            duration_seconds=round(duration, 3)
        )

        return response

    except Exception as e:
        duration = (datetime.utcnow() - start_time).total_seconds()

        logger.error(
            "Request failed",
            request_id=request_id,
            error=str(e),
            duration_seconds=round(duration, 3)
        )

        raise


# Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions"""
    return error_response(exc.status_code, exc.detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request body / query validation errors"""
    errors = [
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    ]
    return error_response(422, "; ".join(errors))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return error_response(500, "Internal server error")


# Health check endpoint
@app.get("/health")
async def health_check():
    """Liveness check"""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "saleshub",
        "version": __version__,
        "environment": settings.environment,
        "providers": {
            "gemini": bool(settings.google_ai_api_key),
            "deepseek": bool(settings.deepseek_api_key)
        },
        "timestamp": utc_now_iso()
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "saleshub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
        access_log=True
    )
