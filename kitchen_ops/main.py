"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kitchen_ops.config import get_settings
from kitchen_ops.api import (
    ingredient_mappings,
    inventory_checks,
    shortages,
)

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Central Kitchen Operations",
    description="Inventory shortage checks for central kitchen production",
    version="0.1.0",
)

# CORS configuration from environment
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(inventory_checks.router, prefix="/api/v1")
app.include_router(inventory_checks.admin_router, prefix="/api/v1")
app.include_router(shortages.router, prefix="/api/v1")
app.include_router(ingredient_mappings.router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint for Cloud Run."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Central Kitchen Operations API", "docs": "/docs"}
