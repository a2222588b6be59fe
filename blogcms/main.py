import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from blogcms.core.config import Settings, settings as default_settings
from blogcms.core.errors import register_exception_handlers
from blogcms.core.logging import configure_logging
from blogcms.core.middleware import SecurityHeadersMiddleware
from blogcms.core.rate_limit import RateLimiter
from blogcms.db.seed import seed_database
from blogcms.db.session import build_engine, create_db_and_tables
from blogcms.routers import auth, posts, categories, media, dashboard, homepage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    create_db_and_tables(app.state.engine)
    seed_database(app.state.engine, settings)
    logger.info("%s started (%s)", settings.PROJECT_NAME, settings.NODE_ENV)
    yield
    app.state.engine.dispose()
    logger.info("Database connection closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        lifespan=lifespan,
        description="API for the personal blog CMS",
    )

    # Services live on app.state and are handed out through dependencies
    app.state.settings = settings
    app.state.engine = build_engine(settings.DATABASE_URL)
    app.state.rate_limiter = RateLimiter(settings.RATE_LIMIT)
    app.state.auth_limiter = RateLimiter(settings.AUTH_RATE_LIMIT)

    register_exception_handlers(app)

    @app.get("/")
    def read_root():
        return {"message": f"Welcome to {settings.PROJECT_NAME} API. Visit /docs for Swagger UI."}

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(posts.router, prefix="/api/posts", tags=["posts"])
    app.include_router(categories.router, prefix="/api/categories", tags=["categories"])
    app.include_router(media.router, prefix="/api/media", tags=["media"])
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
    app.include_router(homepage.router, prefix="/api/homepage", tags=["homepage"])

    # Static files. The upload directory is created at startup.
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")
    if os.path.isdir(settings.ADMIN_DIR):
        app.mount("/admin", StaticFiles(directory=settings.ADMIN_DIR, html=True), name="admin")
    if os.path.isdir(settings.DATA_DIR):
        app.mount("/data", StaticFiles(directory=settings.DATA_DIR), name="data")

    app.add_middleware(GZipMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        max_age=24 * 60 * 60,
        https_only=settings.is_production,
    )
    app.add_middleware(SecurityHeadersMiddleware, production=settings.is_production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()
