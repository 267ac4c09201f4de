"""FastAPI application for the Mycelium mind map.

Serves the render state of a single mind map session and accepts the UI
events (click, drill, toggle, add, delete, update, ...) that drive it.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mycelium.api.routes import router
from mycelium.config import Settings, settings as default_settings
from mycelium.session import MindMapSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown."""
    session: MindMapSession = app.state.session

    # Startup
    logger.info("Starting Mycelium API...")
    logger.info(f"Focus root: {session.focus_root.id}, drill path: {list(session.drill_path)}")

    yield

    # Shutdown
    logger.info("Shutting down Mycelium API...")


def create_app(
    settings: Settings | None = None,
    session: MindMapSession | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The session is created from settings unless one is passed in.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Mycelium",
        description="Progressive-disclosure mind map: collapse, expand and drill into a knowledge tree",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware for browser front ends
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.session = session or MindMapSession.from_settings(settings)

    app.include_router(router)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=default_settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "mycelium.api.main:app",
        host=default_settings.api_host,
        port=default_settings.api_port,
        reload=default_settings.api_debug,
    )
