"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.books import router as books_router
from app.api.views import router as views_router
from app.core.config import get_settings
from app.core.tracing import setup_tracing, shutdown_tracing
from app.services.catalog import CatalogStore

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: the one catalog instance every route shares
    app.state.catalog = CatalogStore.from_settings(settings)
    logger.info(f"Catalog ready with {len(app.state.catalog.snapshot)} books")
    yield
    # Shutdown
    shutdown_tracing()


app = FastAPI(
    title="Book Catalog",
    description="An in-memory book catalog with search, filtering and validated editing",
    version="0.1.0",
    lifespan=lifespan,
)

# Setup OpenTelemetry tracing (must be done before adding routes)
setup_tracing(app)

# Include routers
app.include_router(views_router)
app.include_router(books_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
