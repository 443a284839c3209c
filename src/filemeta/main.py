"""File Metadata Microservice – FastAPI application entry-point."""

from contextlib import asynccontextmanager
import logging
from collections.abc import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from src.filemeta.config import PUBLIC_DIR, Settings
from src.filemeta.handlers import register_exception_handlers
from src.filemeta.middleware import BodySizeLimitMiddleware
from src.filemeta.router import health, upload

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Lifespan: announce where the service listens
# ──────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    logger.info("📁 %s running on port %d", settings.service_name, settings.port)
    logger.info("🏠 Homepage: http://localhost:%d/", settings.port)
    logger.info("📤 Upload endpoint: http://localhost:%d/api/fileanalyse", settings.port)
    logger.info('⚠️  Upload forms must use an input with name="%s"', settings.upload_field)
    yield
    logger.info("🛑 Shutting down …")


# ──────────────────────────────────────────────
# Application factory
# ──────────────────────────────────────────────
def create_app(settings: Settings | None = None) -> FastAPI:
    """Build a fully wired application around *settings*."""
    settings = settings or Settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="File Metadata Microservice",
        description="Upload a file and get back its name, MIME type and size.",
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ── CORS middleware (configured from environment variables) ──
    app.add_middleware(
        middleware_class=CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_methods_list,
        allow_headers=settings.cors_headers_list,
    )
    # ── reject oversized bodies while they stream in ──
    app.add_middleware(
        BodySizeLimitMiddleware,
        max_body_size=settings.max_body_size,
    )

    logger.debug("CORS configured with origins: %s", settings.cors_origins_list)

    register_exception_handlers(app)

    # ── register routers ──
    app.include_router(health.router)
    app.include_router(upload.router)

    # ── landing page with the upload form ──
    app.mount("/", StaticFiles(directory=str(PUBLIC_DIR), html=True), name="public")

    return app


def main() -> None:
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
