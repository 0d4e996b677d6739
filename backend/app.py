"""
FastAPI application for the issue browser.

This provides a REST API that proxies GitHub for the browser frontend:
repository listing, repository detail (issue list) and single-issue detail.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.error_handlers import register_exception_handlers
from backend.routes import router, config
from utils.logger import setup_logger

logger = setup_logger(config.log_level, name=__name__)

# Create FastAPI app
app = FastAPI(
    title="Issue Browser API",
    description="REST API for browsing open source repositories and their GitHub issues",
    version="1.0.0"
)

# Enable CORS for local development
# This allows the frontend (running on port 5173) to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],  # Vite dev server
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(router)

logger.info("FastAPI app initialized")
