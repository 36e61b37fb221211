"""
Game Night Manager entry point.

Architecture:
- One Python process, one asyncio event loop
- FastAPI receives Discord interaction webhooks on /api/interactions
- Each command is acknowledged immediately and finished in a background task
  that talks to the Discord REST API

We use FastAPI's lifespan to manage startup/shutdown of shared clients.

Run with: python main.py [--port PORT]
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

# Set up import paths before any local imports
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

# Load .env.local first (if exists), then .env as fallback
# .env.local is gitignored and used for local dev overrides
load_dotenv(project_root / ".env.local")  # Local overrides (gitignored)
load_dotenv()  # Fallback to .env

import sentry_sdk
from fastapi import FastAPI

from core.config import (
    REQUIRED_ENV_VARS,
    check_required_env_vars,
    get_api_port,
    get_sentry_environment,
)
from core.database import close_engine
from web_api.dependencies import close_discord_client
from web_api.routes.interactions import router as interactions_router

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

if os.environ.get("SENTRY_DSN"):
    sentry_sdk.init(
        dsn=os.environ["SENTRY_DSN"],
        environment=get_sentry_environment(),
        traces_sample_rate=0.0,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Reports configuration problems at startup and closes shared clients on
    shutdown.
    """
    ok, warnings = check_required_env_vars()
    for warning in warnings:
        print(warning)
    if not ok:
        print("Warning: required configuration missing, commands will fail")

    yield

    print("Shutting down...")
    await close_discord_client()
    await close_engine()  # Close database connections


# Create FastAPI app with lifespan
app = FastAPI(
    title="Game Night Manager",
    lifespan=lifespan,
)

# Include routers
app.include_router(interactions_router)


@app.get("/")
async def root():
    """API status."""
    return {"status": "ok", "service": "game-night-manager"}


@app.get("/health")
async def health():
    """Health check endpoint with configuration status."""
    ok = all(os.environ.get(name) for name, _ in REQUIRED_ENV_VARS)
    return {
        "status": "healthy" if ok else "misconfigured",
        "configured": ok,
    }


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Game Night Manager Server")
    parser.add_argument(
        "--port",
        type=int,
        default=get_api_port(),
        help="Port to run the server on (default: API_PORT or 8000)",
    )
    args = parser.parse_args()

    # Pass app object directly (not string) to avoid module reimport issues
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=args.port,
    )
