import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.config import Settings, settings as default_settings
from app.database import engine
from app.errors import install_exception_handlers
from app.middleware import RequestLogMiddleware, SecurityHeadersMiddleware
from app.routers import articles, comments, users
from app.schemas import HealthResponse

VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting blog API (env=%s)", app.state.settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings)

    app = FastAPI(
        title="Blog API",
        description="CRUD over users, articles and comments",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.expose_error_details = settings.expose_error_details
    app.state.cors_origins = settings.CORS_ORIGINS

    install_exception_handlers(app)

    # Middleware
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLogMiddleware, terse=settings.is_production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )

    # Routers
    app.include_router(articles.router)
    app.include_router(comments.router)
    app.include_router(users.router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return "Hello, world!"

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return {"status": "healthy", "version": VERSION}

    return app


app = create_app()
