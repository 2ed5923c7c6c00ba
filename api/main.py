"""
FastAPI application for the Soccer Scoreboard API.

Read-only HTTP surface over the aggregation pipeline:
- Health check endpoint
- Time-windowed scoreboard view
- Manual refresh trigger

Run with:
    uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import health, scoreboard
from api.state import AppState

logger = logging.getLogger(__name__)


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        state: Optional pre-built AppState (defaults to one built from settings)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initializes components on startup and cleans up on shutdown."""
        logger.info("Starting Soccer Scoreboard API...")

        app_state = state or AppState()
        await app_state.initialize()
        app.state.app_state = app_state

        logger.info("Soccer Scoreboard API started")

        yield

        logger.info("Shutting down Soccer Scoreboard API...")
        await app_state.shutdown()
        logger.info("Soccer Scoreboard API shutdown complete")

    app = FastAPI(
        title="Soccer Scoreboard API",
        description="Live soccer scores with moneyline-implied win probabilities",
        version="0.1.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(scoreboard.router, prefix="/api", tags=["Scoreboard"])

    @app.get("/")
    async def root():
        """Root endpoint points at the API documentation."""
        return {
            "name": "Soccer Scoreboard API",
            "version": "0.1.0",
            "docs": "/api/docs",
            "health": "/api/health",
        }

    return app


app = create_app()
