"""
Main FastAPI Application
Entry point for the Inquiry Router API
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from src.core.config import settings
from src.core.logging import get_logger, setup_logging
from src.api.routes import analytics, categories, health, inquiries, languages, templates
from src.services.storage import get_storage
from src.services.translation import get_translation_service

setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
logger = get_logger(__name__)


# Lifespan context manager for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Warms up the shared storage and translation service on startup
    """
    logger.info(
        "application_starting",
        host=settings.API_HOST,
        port=settings.API_PORT,
        debug=settings.DEBUG_MODE,
        auto_response=settings.AUTO_RESPONSE_ENABLED
    )

    storage = get_storage()
    translator = get_translation_service()

    logger.info(
        "routing_data_loaded",
        categories=len(await storage.get_categories()),
        languages=len(await storage.get_languages()),
        translation_api_configured=translator.is_configured
    )

    yield

    logger.info("application_shutting_down")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Routes customer inquiries to categories and reply templates",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(categories.router, prefix="/api/categories", tags=["Categories"])
app.include_router(languages.router, prefix="/api/languages", tags=["Languages"])
app.include_router(templates.router, prefix="/api/templates", tags=["Templates"])
app.include_router(inquiries.router, prefix="/api/inquiries", tags=["Inquiries"])
app.include_router(analytics.router, prefix="/api", tags=["Analytics"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG_MODE,
        log_level=settings.LOG_LEVEL.lower()
    )
