from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from holiday_api.core.config import settings
from holiday_api.core.exceptions import AggregationFailed, HolidayServiceError, UpstreamUnavailable
from holiday_api.core.logging_config import get_logger, setup_logging
from holiday_api.core.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from holiday_api.routers import holidays
from holiday_api.schemas.holiday import ErrorResponse, ValidationErrorResponse


setup_logging(json_format=settings.LOG_FORMAT.lower() == "json", level=settings.LOG_LEVEL)
logger = get_logger(__name__)

HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body.model_dump()))


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Read-only API aggregating public holidays from an upstream provider",
    docs_url=f"{settings.API_PREFIX}/docs",
    openapi_url=f"{settings.API_PREFIX}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_methods=["GET"],
    allow_headers=["Content-Type", "X-Request-ID"],
    max_age=3600,
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)


app.include_router(
    holidays.router,
    prefix=settings.API_PREFIX,
)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for monitoring"""
    return {"status": "healthy", "service": settings.PROJECT_NAME}


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed input as 400 with the offending fields."""
    validation_errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("path", "query", "body")]
        field = ".".join(loc) or "request"
        validation_errors.setdefault(field, error.get("msg", "Invalid value"))

    logger.warning("Validation Error: %s", validation_errors, extra={'path': request.url.path})

    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ValidationErrorResponse(
            detail="Validation failed",
            error_code="VALIDATION_ERROR",
            validation_errors=validation_errors,
        ),
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(
        exc.status_code,
        ErrorResponse(
            detail=str(exc.detail),
            error_code=HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR"),
        ),
    )


@app.exception_handler(UpstreamUnavailable)
@app.exception_handler(AggregationFailed)
async def upstream_exception_handler(request: Request, exc: HolidayServiceError):
    """Upstream holiday provider failures surface as 503."""
    logger.warning(
        "%s occurred: %s", type(exc).__name__, exc,
        extra={'path': request.url.path, 'cause': repr(exc.__cause__)},
    )
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        ErrorResponse(detail=str(exc), error_code=exc.error_code),
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent information leakage.
    Never expose internal errors to clients.
    """
    logger.error("Internal Server Error: %s", exc, exc_info=exc)

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorResponse(
            detail="An unexpected error occurred",
            error_code="INTERNAL_SERVER_ERROR",
        ),
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "holiday_api.main:app",
        host="0.0.0.0",
        port=8000,
    )
