import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import blog_api.models  # noqa: F401  (registers the Blog table on Base.metadata)
from blog_api.config import settings
from blog_api.database import engine, ensure_schema, verify_connection
from blog_api.errors import register_exception_handlers
from blog_api.logging_config import setup_logging
from blog_api.middleware import AccessLogMiddleware
from blog_api.routers import posts
from blog_api.schemas import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    logger.info("Starting Solid Blogs API (%s)", settings.APP_ENV)
    await verify_connection()
    if settings.ENSURE_SCHEMA:
        await ensure_schema()
    yield
    # Shutdown
    await engine.dispose()
    logger.info("Database engine disposed")


app = FastAPI(
    title="Solid Blogs API",
    description="A RESTful API for managing blog posts with a layered controller/service/repository design",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# Middleware
app.add_middleware(AccessLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routers
app.include_router(posts.router)


@app.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "healthy", "version": settings.APP_VERSION}
