"""Main module for the opportunity radar service."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from opportunity_radar.config import Settings, get_settings
from opportunity_radar.container import init_container
from opportunity_radar.errors import (install_error_handlers,
                                      install_request_logging)
from opportunity_radar.logging_config import configure_logging
from opportunity_radar.routers import (alerts_router, analytics_router,
                                       live_router, opportunities_router,
                                       sources_router)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    """Create tables and start background loops at startup; stop them and release resources on shutdown."""
    container = fastapi_app.state.container
    settings = container.settings()
    container.store()

    background = settings.enable_background_tasks
    if background:
        await container.scheduler().start()
        container.live_feed().start()
        await container.tracker().start()
    else:
        logger.info("Background tasks disabled")

    yield

    if background:
        await container.live_feed().stop()
        await container.tracker().stop()
        await container.scheduler().stop()
    container.engine().dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with its own container (tests pass explicit settings)."""
    settings = settings or get_settings()
    fastapi_app = FastAPI(
        title="Opportunity Radar",
        description="Discovers, scores and streams crypto opportunities (P2E games, airdrops, new listings)",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.container = init_container(settings)

    install_error_handlers(fastapi_app, expose_details=not settings.is_production)
    install_request_logging(fastapi_app)

    fastapi_app.include_router(opportunities_router)
    fastapi_app.include_router(analytics_router)
    fastapi_app.include_router(alerts_router)
    fastapi_app.include_router(sources_router)
    fastapi_app.include_router(live_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def run():
    """Run the server (uvicorn). Entry point for `opportunity-radar`."""
    settings = get_settings()
    configure_logging(settings)
    uvicorn.run("opportunity_radar.main:app", host=settings.host, port=settings.port)
