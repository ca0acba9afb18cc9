import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from volunteer_match.config import get_settings
from volunteer_match.infrastructure.database import engine, initialize_database
from volunteer_match.interfaces.api.errors import install_error_handlers
from volunteer_match.interfaces.api.routes import register_routes
from volunteer_match.workers import EventRelayWorker, run_once

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the schema, keep relaying pending events and release the engine on exit."""

    initialize_database()
    relayed = run_once()
    if relayed:
        logger.info("Relayed %s pending domain events at startup", relayed)

    relay_worker = EventRelayWorker()
    relay_worker.start()
    app.state.event_relay = relay_worker
    try:
        yield
    finally:
        await relay_worker.stop()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(title="Volunteer Match", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    install_error_handlers(app)
    register_routes(app)
    return app


app = create_app()
