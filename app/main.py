"""Main application file for the Design Critique API service."""

import logging
from contextlib import asynccontextmanager

from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi import FastAPI

from app.utils.config import get_settings
from app.routers import critique, theme
from app.middleware.rate_limiter import RateLimitMiddleware

# Load settings
settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan events.
    """
    logger.info("Design Critique API starting up (model: %s)", settings.openai_model)
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; analysis and chat requests will fail")

    yield

    logger.info("Design Critique API shutting down")


app = FastAPI(
    title="Design Critique API",
    description="AI-powered UX critique and redesign chat for product design screenshots",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware
app.add_middleware(
    RateLimitMiddleware, requests_per_minute=settings.rate_limit_per_minute
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

# Include routers
app.include_router(critique.router, prefix="/api", tags=["critique"])
app.include_router(theme.router, prefix="/api", tags=["theme"])


@app.get("/")
async def root():
    """Root endpoint providing basic info about the API."""
    return {
        "message": "Design Critique API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy" if settings.openai_api_key else "degraded",
        "model": settings.openai_model,
    }
