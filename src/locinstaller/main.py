"""FastAPI application for the LOC installer service."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from locinstaller.config import get_settings
from locinstaller.utils.logging import configure_logging
from locinstaller.services.session_controller import SessionController
from locinstaller.api.routes import router


async def drain_loop(controller: SessionController, interval: float) -> None:
    """Periodically apply queued installer events on the event loop.

    This loop is the UI context: it is the only place session state changes
    after a worker has started.
    """
    logger = logging.getLogger("locinstaller.drain")
    while True:
        try:
            controller.drain()
        except Exception as e:
            logger.error(f"Failed to apply installer events: {e}", exc_info=True)
        await asyncio.sleep(interval)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown hooks.

    Startup:
    - Initialize logger
    - Initialize SessionController singleton
    - Start the drain task

    Shutdown:
    - Stop the drain task
    - Warn if the installer is still running (it is not killed)
    """
    settings = get_settings()
    logger = configure_logging(settings)
    logger.info("LOC Installer service starting up...")

    controller = SessionController(max_line_length=settings.max_line_length)
    drain_task = asyncio.create_task(drain_loop(controller, settings.drain_interval))

    logger.info(f"LOC Installer ready on {settings.host}:{settings.port}")

    yield

    logger.info("LOC Installer shutting down...")
    drain_task.cancel()
    try:
        await drain_task
    except asyncio.CancelledError:
        pass
    if controller.is_running():
        logger.warning("Installer still running at shutdown, leaving it to finish")


app = FastAPI(
    title="LOC Installer",
    description="Installation execution and progress service for the LOC-OS installer wizard",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "loc-installer", "version": "1.0.0"}


def main():
    """Main entry point for running the server."""
    settings = get_settings()
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    main()
