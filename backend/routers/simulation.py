"""Simulation API router.

All endpoints operate on the single SimulationRunner held by the app
context. The router is a transport only: every decision is delegated to
the runner and, through it, to the engine.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Query
from fastapi.responses import JSONResponse, Response

from backend.models import ParametersPatch, PopulationRequest, StatusResponse
from backend.simulation_runner import SimulationRunner
from reef.exceptions import ConfigurationError, StepError
from reef.simulation.engine import PopulationKind

logger = logging.getLogger(__name__)

MAX_STEPS_PER_REQUEST = 10_000


async def _status_response(runner: SimulationRunner, status_code: int = 200) -> JSONResponse:
    status = StatusResponse(**(await runner.get_status_async()))
    return JSONResponse(status.model_dump(by_alias=True), status_code=status_code)


def _json_bytes(content: bytes) -> Response:
    return Response(content=content, media_type="application/json")


def setup_router(runner: SimulationRunner) -> APIRouter:
    """Create the simulation router bound to a runner.

    Endpoints:
        GET  /api/simulation/status
        POST /api/simulation/start | pause | resume | stop
        POST /api/simulation/reset
        POST /api/simulation/step
        GET  /api/simulation/snapshot | stats | history
        GET  /api/simulation/params
        PUT  /api/simulation/params
        POST /api/simulation/population/{kind}
    """
    router = APIRouter(prefix="/api/simulation", tags=["simulation"])

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @router.get("/status")
    async def get_status():
        return await _status_response(runner)

    @router.post("/start")
    async def start_simulation():
        """Start (or un-pause) the background loop."""
        runner.start(start_paused=False)
        return await _status_response(runner)

    @router.post("/pause")
    async def pause_simulation():
        if not runner.running:
            return JSONResponse({"error": "Simulation is not running"}, status_code=400)
        runner.pause()
        return await _status_response(runner)

    @router.post("/resume")
    async def resume_simulation():
        if not runner.running:
            return JSONResponse({"error": "Simulation is not running"}, status_code=400)
        if runner.driver.finished:
            return JSONResponse({"error": "Tick limit reached; reset to continue"}, status_code=409)
        runner.resume()
        return await _status_response(runner)

    @router.post("/stop")
    async def stop_simulation():
        await runner.stop_async()
        return await _status_response(runner)

    @router.post("/reset")
    async def reset_simulation(
        patch: Optional[ParametersPatch] = Body(default=None),
        seed: Optional[int] = Query(default=None),
    ):
        """Re-seed the world, optionally with new parameters."""
        overrides = patch.overrides() if patch is not None else None
        try:
            await runner.reset_async(overrides, seed=seed)
        except ConfigurationError as e:
            return JSONResponse({"error": str(e)}, status_code=422)
        logger.info("Simulation reset via API (seed=%s)", seed)
        return await _status_response(runner)

    @router.post("/step")
    async def step_simulation(count: int = Query(default=1, ge=1, le=MAX_STEPS_PER_REQUEST)):
        """Compute ticks manually; only allowed while not actively running."""
        if runner.running and not runner.paused:
            return JSONResponse({"error": "Pause the simulation before stepping"}, status_code=409)
        try:
            reports = await runner.step_async(count)
        except StepError as e:
            return JSONResponse({"error": str(e), "tick": e.tick}, status_code=500)
        return JSONResponse(
            {
                "steps": len(reports),
                "reports": [report.to_dict() for report in reports],
                "status": StatusResponse(**(await runner.get_status_async())).model_dump(by_alias=True),
            }
        )

    # =========================================================================
    # Views
    # =========================================================================

    @router.get("/snapshot")
    async def get_snapshot():
        return _json_bytes(await runner.get_snapshot_bytes_async())

    @router.get("/stats")
    async def get_stats():
        return _json_bytes(await runner.get_stats_bytes_async())

    @router.get("/history")
    async def get_history():
        return _json_bytes(await runner.get_history_bytes_async())

    # =========================================================================
    # Parameters and populations
    # =========================================================================

    @router.get("/params")
    async def get_params():
        return JSONResponse(await runner.get_params_async())

    @router.put("/params")
    async def update_params(patch: ParametersPatch):
        try:
            params = await runner.update_params_async(patch.overrides())
        except ConfigurationError as e:
            return JSONResponse({"error": str(e)}, status_code=422)
        return JSONResponse(params)

    @router.post("/population/{kind}")
    async def resize_population(kind: PopulationKind, request: PopulationRequest):
        try:
            previous, new_count = await runner.resize_population_async(
                kind, count=request.count, delta=request.delta
            )
        except ConfigurationError as e:
            return JSONResponse({"error": str(e)}, status_code=422)
        return JSONResponse({"kind": kind.value, "previous": previous, "count": new_count})

    return router
