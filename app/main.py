import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from .config import settings
from .database import engine
from .init_db import init_db
from .api.v1.api import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        init_db(engine)
        logger.info("Database tables ensured")
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.include_router(api_router)


# Root endpoint
@app.get("/")
def read_root():
    """Hello World endpoint"""
    return {
        "message": "Welcome to Marketplace Messaging API",
        "version": settings.API_VERSION,
        "status": "running"
    }


# Health check endpoint
@app.get("/health")
def health_check():
    """API health check"""
    return {"status": "healthy"}
