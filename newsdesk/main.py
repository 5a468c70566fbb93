import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsdesk import __version__
from newsdesk.api import create_api_router
from newsdesk.core.config import Settings, get_settings
from newsdesk.core.logging import configure_logging
from newsdesk.infrastructure.database import dispose_engine, init_db
from newsdesk.schemas import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await dispose_engine()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        body = ErrorResponse(**exc.detail)
    else:
        body = ErrorResponse(message=str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = {
        ".".join(str(part) for part in error["loc"] if part != "body"): error["msg"]
        for error in exc.errors()
    }
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(message="Validation failed", errors=errors).model_dump(),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="Admin identity and access control for the news site",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health")
    async def health():
        return {"success": True, "message": "Server is running", "version": __version__}

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using the ``server`` settings section."""
    import uvicorn

    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.project_name, settings.host, settings.port)
    uvicorn.run(
        "newsdesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    run()
