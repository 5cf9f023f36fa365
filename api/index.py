import logging

from app.core.logging_config import configure_logging
from app.main import app

# Setup logging to capture errors in Vercel Logs
configure_logging()
logger = logging.getLogger(__name__)

logger.info("Vercel api/index.py initialized")

# This is the entry point for Vercel Serverless Functions
# It exports the FastAPI app instance
__all__ = ["app"]
