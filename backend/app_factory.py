"""Application factory and context for the Reef Simulation API.

The FastAPI app is built by ``create_app()`` so importing this module has
no side effects. Runtime state lives in an ``AppContext`` dataclass rather
than module-level globals, so every test can build an app with a fresh
context.

Usage:
------
    # For production (settings from environment)
    app = create_app()

    # For testing (deterministic world, loop not started)
    app = create_app(seed=42, autostart=False)
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.logging_config import configure_logging
from backend.simulation_runner import SimulationRunner
from reef import __version__
from reef.config.parameters import SimulationParameters

DEFAULT_API_PORT = 8000


def _env_seed() -> Optional[int]:
    raw = os.getenv("REEF_SEED")
    return int(raw) if raw else None


@dataclass
class AppContext:
    """Runtime context holding all application state."""

    # Configuration
    server_version: str = __version__
    api_port: int = field(default_factory=lambda: int(os.getenv("REEF_API_PORT", str(DEFAULT_API_PORT))))
    seed: Optional[int] = field(default_factory=_env_seed)
    allowed_origins: list = field(default_factory=lambda: os.getenv("ALLOWED_ORIGINS", "*").split(","))
    autostart: bool = True
    params: Optional[SimulationParameters] = None

    # Runtime state (initialized during lifespan)
    runner: Optional[SimulationRunner] = None

    # Timing
    server_start_time: float = field(default_factory=time.time)

    # Logging
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("backend"))

    def get_health(self) -> dict:
        return {
            "status": "ok",
            "version": self.server_version,
            "uptime_seconds": time.time() - self.server_start_time,
            "simulation": self.runner.state if self.runner else "uninitialized",
        }


def create_app(
    *,
    seed: Optional[int] = None,
    params: Optional[SimulationParameters] = None,
    autostart: Optional[bool] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        seed: Override the world seed (default: from REEF_SEED env var)
        params: Initial simulation parameters
        autostart: Start the background loop at startup (default True)
        context: Pre-configured AppContext (for testing)

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    # Configure logging (idempotent)
    logger = configure_logging()

    if context is None:
        context = AppContext()

    if seed is not None:
        context.seed = seed
    if params is not None:
        context.params = params
    if autostart is not None:
        context.autostart = autostart

    context.logger = logger

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown."""
        ctx = app.state.context

        try:
            ctx.runner = SimulationRunner(params=ctx.params, seed=ctx.seed)
            ctx.logger.info("Setting up API routers...")
            _setup_routers(app, ctx)
            ctx.logger.info("API routers configured successfully")

            if ctx.autostart:
                ctx.runner.start(start_paused=False)

            ctx.logger.info("LIFESPAN: Startup complete - yielding control to app")
            yield
            ctx.logger.info("LIFESPAN: Received shutdown signal")

        except Exception as e:
            ctx.logger.error(f"Exception in lifespan startup: {e}", exc_info=True)
            raise
        finally:
            if ctx.runner:
                ctx.runner.stop()

    app = FastAPI(title="Reef Simulation API", version=context.server_version, lifespan=lifespan)

    # Attach context to app state for access in routes
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return JSONResponse(app.state.context.get_health())

    return app


def _setup_routers(app: FastAPI, ctx: AppContext) -> None:
    """Setup and include all API routers."""
    from backend.routers import simulation

    simulation_router = simulation.setup_router(ctx.runner)
    app.include_router(simulation_router)
