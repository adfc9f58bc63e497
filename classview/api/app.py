"""FastAPI application factory for classview.

Creates the app, stores the diagram service on app state and
registers the diagram routes.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)


def create_app(diagram_service) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        diagram_service: ClassDiagramService instance

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="classview API",
        description="Java inheritance-chain class diagrams",
        version="0.1.0",
    )

    # CORS for local front-ends
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.diagram_service = diagram_service

    from .routes.diagrams import router as diagrams_router

    app.include_router(diagrams_router, prefix="/api")

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "service": "classview"}

    logger.info("FastAPI app created with diagram routes registered")
    return app
