# main.py
# Main application file for the FastAPI recipe sharing service.

import logging.config
import socket
from pathlib import Path
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse
import uvicorn

# Import the CORS middleware
from fastapi.middleware.cors import CORSMiddleware

# Rate limiting
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

# Import local modules
from app.db.session import engine
from app import models
from app.api import recipes
from app.core.config import settings
from app.core.logging_middleware import StructuredLoggingMiddleware
from app.core.rate_limit import limiter

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Load logging configuration
logging.config.fileConfig(str(PROJECT_ROOT / settings.LOGGING_CONFIG), disable_existing_loggers=False)

# Get the logger instance
logger = logging.getLogger(__name__)


# Create all database tables
models.Base.metadata.create_all(bind=engine)

# Initialize the FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for sharing recipes with steps, tags and ingredients.",
    version="1.0.0",
)

# Add rate limiter to app state and register exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# --- Add Structured Logging Middleware ---
app.add_middleware(StructuredLoggingMiddleware)

# --- Add CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,  # Wildcard origins cannot be combined with credentials
    allow_methods=["OPTIONS", "GET", "PUT", "POST", "DELETE"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept", "x-mac"],
    expose_headers=["x-mac", "x-host"],
)

# Routers registered at start-up, in order: (router, prefix, tags)
ROUTERS = [
    (recipes.router, "", ["Recipes"]),
]

for router, prefix, tags in ROUTERS:
    logger.debug(f"Registering router {tags} at '{prefix or '/'}'")
    app.include_router(router, prefix=prefix, tags=tags)


@app.get("/", tags=["Root"], response_class=PlainTextResponse)
async def read_root():
    """
    Liveness check. Identifies the serving host in the x-host header.
    """
    logger.debug("Root endpoint accessed")
    return PlainTextResponse(
        "Recipe API is live",
        headers={"x-host": f"server-{socket.gethostname()}"},
    )


if __name__ == "__main__":
    logger.info(f"API listening on PORT {settings.PORT}!")
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
