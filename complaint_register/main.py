"""
FastAPI application entry point for Complaint Register
"""
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from complaint_register import __version__
from complaint_register.config import get_settings
from complaint_register.database import db_manager
from complaint_register.logging_config import logger, setup_logging
from complaint_register.routes import spreadsheets, web


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    setup_logging(settings)
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    await db_manager.initialize()
    logger.info("Complaint Register starting up")

    yield

    # Shutdown
    await db_manager.close()
    logger.info("Complaint Register shutting down")


# Get settings
settings = get_settings()

# Initialize FastAPI app
app = FastAPI(
    title="Complaint Register",
    description="Log, import and track farmer and dealer service complaints",
    version=__version__,
    lifespan=lifespan
)

# Uploaded attachments are served back by filename
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")

app.include_router(web.router)
app.include_router(spreadsheets.router)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    database_ok = await db_manager.health_check()
    return {
        "status": "healthy" if database_ok else "degraded",
        "service": "complaint-register",
        "database": database_ok
    }
