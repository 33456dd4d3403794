"""thinklink - natural-language task commands over HTTP."""

import logging
import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from thinklink.core.config import settings
from thinklink.core.kv_store import build_store
from thinklink.core.logging import configure_logfire, instrument_fastapi
from thinklink.interface.command_router import router as command_router
from thinklink.services.interpreter_service import CommandInterpreter
from thinklink.services.scoring_service import TrainableScorer
from thinklink.services.task_board_service import TaskBoard


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Configure logging first so scorer start-up logs are captured
    configure_logfire()

    store = build_store(settings)
    rng = random.Random(settings.random_seed)
    scorer = TrainableScorer(store, rng=rng)
    app.state.interpreter = CommandInterpreter(scorer, rng=rng)
    app.state.board = TaskBoard()
    logger.info("startup_complete", extra={"store": type(store).__name__})
    yield


app = FastAPI(
    title="thinklink",
    description="Natural-language task command interpreter",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(command_router)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)
