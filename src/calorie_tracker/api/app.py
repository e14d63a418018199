"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from calorie_tracker.api.assistant import router as assistant_router
from calorie_tracker.api.history import router as history_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.services.estimation import EstimationError
from calorie_tracker.services.migration import import_local_history


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        migrator = state_container.local_history_migrator
        if migrator is not None:
            try:
                import_local_history(migrator, state_container.history_service)
            except Exception:
                logger.exception("Failed to import local history")
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(history_router)
    app.include_router(assistant_router)

    @app.exception_handler(EstimationError)
    async def estimation_error(request: Request, exc: EstimationError) -> JSONResponse:
        """Return estimation failures as a retryable error message."""
        return JSONResponse(status_code=502, content={"error": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
