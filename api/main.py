"""Task service API — FastAPI entry point.

Builds the app (middleware, error handlers, routers, lifecycle hooks) and
runs it under uvicorn. The task store is created with the app and filled
from the seed file on startup, before the first request is served.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import register_error_handlers
from api.middleware import RequestLogMiddleware
from core.config import Settings, get_settings
from core.logging_setup import setup_logging
from tasks.loader import seed_store
from tasks.repository import TaskStore
from tasks.router import router as tasks_router

# Fixed name: under `python -m api.main` __name__ is "__main__".
logger = logging.getLogger("api.main")

VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

class TaskServer(uvicorn.Server):
    """uvicorn server that confirms startup once the socket is bound.

    On a failed bind uvicorn logs the error itself and ``started`` stays
    False, so only one of the two messages is ever logged.
    """

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info("Server is listening on %d", self.config.port)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build a fresh app with its own empty TaskStore."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Seed the store, then serve."""
        seed_store(app.state.task_store, settings.seed_file)
        yield
        logger.info("Task service shutting down")

    app = FastAPI(
        title="Task Service",
        description="In-memory CRUD API for tasks, seeded from a JSON file",
        version=VERSION,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.task_store = TaskStore()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request id + access log
    app.add_middleware(RequestLogMiddleware)

    register_error_handlers(app)
    app.include_router(tasks_router, tags=["Tasks"])

    # -----------------------------------------------------------------------
    # Health & root
    # -----------------------------------------------------------------------

    @app.get("/health")
    async def health():
        return {"status": "healthy", "version": VERSION}

    @app.get("/")
    async def root():
        return {
            "name": "Task Service",
            "version": VERSION,
            "docs": "/docs",
            "resources": ["tasks"],
        }

    return app


app = create_app()


def main() -> None:
    """Run the service under uvicorn with settings from the environment."""
    settings = get_settings()
    setup_logging(settings.log_level)
    # log_config=None: uvicorn logs through our root handler.
    config = uvicorn.Config(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
    server = TaskServer(config)
    server.run()
    if not server.started:
        sys.exit(1)


if __name__ == "__main__":
    main()
