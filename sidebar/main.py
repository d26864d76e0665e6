"""
Mr. Better Boss sidebar backend.

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from sidebar.api import router as api_router
from sidebar.api.middleware.request_id import RequestIdMiddleware
from sidebar.config import get_settings
from sidebar.errors import SidebarError
from sidebar.kernel.identity.credential_store import get_credential_store
from sidebar.kernel.identity.jwt import get_token_service
from sidebar.logging_config import configure_logging, get_logger
from sidebar.schemas.common import ErrorResponse, HealthResponse

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Process-wide identity state lives as long as the process; there is no
    teardown and nothing is persisted.
    """
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    logger.info("Starting %s v%s", settings.project_name, settings.version)
    get_credential_store()
    get_token_service()

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.project_name,
    description="""
    Backend for the Mr. Better Boss sidebar.

    ## Features

    - **Auth**: register, login, token verification, saved API keys
    - **AI Chat**: contractor assistant with optional job context
    - **Estimator**: line-item estimates generated as JSON
    - **Scheduler**: crew schedules generated as JSON
    - **JobTread**: jobs, leads, schedule and financials (demo data without a key)
    """,
    version=settings.version,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# add_middleware stacks innermost-first: CORS added last wraps everything.
app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    headers = {}
    req_id = getattr(request.state, "request_id", None)
    if req_id:
        headers["X-Request-ID"] = req_id
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=headers,
    )


@app.exception_handler(SidebarError)
async def sidebar_error_handler(request: Request, exc: SidebarError):
    """Render domain and upstream errors as {"error": message}."""
    if exc.status_code >= 500:
        logger.warning("%s: %s", type(exc).__name__, exc.message)
    return _error_response(request, exc.status_code, exc.message)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error_response(request, exc.status_code, message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors with a short message, not 422 dumps."""
    message = "Invalid request body"
    errors = exc.errors()
    if errors:
        field = ".".join(str(loc) for loc in errors[0]["loc"][1:])
        if field:
            message = f"{message}: {field} - {errors[0]['msg']}"
    return _error_response(request, status.HTTP_400_BAD_REQUEST, message)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Unexpected faults never leak internals unless DEBUG is on."""
    logger.exception("Unhandled exception: %s", exc)
    message = f"{type(exc).__name__}: {exc}" if settings.debug else "Internal server error"
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Check application health."""
    return HealthResponse(status="ok", version=settings.version)


app.include_router(api_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sidebar.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
