import logging
from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import api_router
from .config import Settings, get_settings
from .core.database import build_engine, build_session_factory, create_tables
from .exceptions import NewsdeskError, ValidationError
from .repositories.user_repository import InMemoryUserRepository, SqlUserRepository, UserRepository


def configure_logging(settings: Settings):
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(message)s"
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

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
            structlog.processors.JSONRenderer() if settings.log_format == "json" else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger(__name__)


def build_user_repository(settings: Settings) -> UserRepository:
    if not settings.database_url:
        return InMemoryUserRepository()

    engine = build_engine(settings.database_url, echo=settings.debug)
    create_tables(engine)
    logger.info("User store tables created/verified", backend="sql")
    return SqlUserRepository(build_session_factory(engine))


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Newsdesk API", version="0.1.0")
    yield
    logger.info("Shutting down Newsdesk API")


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(NewsdeskError)
    async def newsdesk_exception_handler(request: Request, exc: NewsdeskError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info("request_body_rejected", path=request.url.path, errors=len(exc.errors()))
        error = ValidationError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception occurred",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_application(settings: Optional[Settings] = None, user_repository: Optional[UserRepository] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Newsdesk",
        description="User accounts, reading preferences and personalized news headlines",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if user_repository is None:
        user_repository = build_user_repository(settings)
    app.state.user_repository = user_repository

    if settings.uses_default_secret:
        logger.warning("JWT_SECRET is not set; signing tokens with the insecure development default")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


settings = get_settings()
configure_logging(settings)

app = create_application(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "newsdesk.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info",
        access_log=False,
    )
