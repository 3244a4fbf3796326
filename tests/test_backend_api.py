"""Tests for the reef simulation HTTP API."""

import threading
import time

import pytest
from fastapi.testclient import TestClient

from backend.app_factory import AppContext, create_app
from backend.simulation_runner import SimulationRunner
from reef.config.parameters import SimulationParameters


@pytest.fixture
def client():
    app = create_app(seed=42, autostart=False, context=AppContext(allowed_origins=["*"]))
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["simulation"] == "stopped"


def test_status_starts_stopped(client):
    body = client.get("/api/simulation/status").json()
    assert body["state"] == "stopped"
    assert body["tick"] == 0
    assert body["urchins"] == 30
    assert body["seed"] == 42
    assert "ticksPerSecond" in body


def test_manual_step(client):
    response = client.post("/api/simulation/step", params={"count": 5})
    assert response.status_code == 200
    body = response.json()
    assert body["steps"] == 5
    assert [r["tick"] for r in body["reports"]] == [1, 2, 3, 4, 5]
    assert body["status"]["tick"] == 5


def test_step_count_is_bounded(client):
    assert client.post("/api/simulation/step", params={"count": 0}).status_code == 422


def test_views(client):
    client.post("/api/simulation/step", params={"count": 20})

    stats = client.get("/api/simulation/stats")
    assert stats.headers["content-type"] == "application/json"
    assert stats.json()["tick"] == 20

    history = client.get("/api/simulation/history").json()
    assert history["ticks"] == [10, 20]
    assert len(history["urchinPop"]) == 2

    snapshot = client.get("/api/simulation/snapshot").json()
    assert snapshot["tick"] == 20
    assert snapshot["width"] == 800
    assert {"urchins", "harvesters", "corals"} <= set(snapshot)
    if snapshot["corals"]:
        assert snapshot["corals"][0]["status"] in {"healthy", "degraded", "dead"}


def test_params_roundtrip(client):
    params = client.get("/api/simulation/params").json()
    assert params["grazingRate"] == 0.5

    response = client.put("/api/simulation/params", json={"grazingRate": 1.25, "maturityTime": 90})
    assert response.status_code == 200
    body = response.json()
    assert body["grazingRate"] == 1.25
    assert body["minMaturityTime"] == body["maxMaturityTime"] == 90


@pytest.mark.parametrize(
    "payload",
    [{"grazingRate": -1}, {"initialCoralCoverage": 150}, {"urchinColour": "purple"}],
)
def test_invalid_params_rejected(client, payload):
    response = client.put("/api/simulation/params", json=payload)
    assert response.status_code == 422
    assert client.get("/api/simulation/params").json()["grazingRate"] == 0.5


def test_population_resize(client):
    response = client.post("/api/simulation/population/urchins", json={"count": 5})
    assert response.json() == {"kind": "urchins", "previous": 30, "count": 5}

    response = client.post("/api/simulation/population/harvesters", json={"delta": 2})
    assert response.json()["count"] == 5

    response = client.post("/api/simulation/population/harvesters", json={"delta": -10})
    assert response.json()["count"] == 0


@pytest.mark.parametrize(
    "kind, payload",
    [
        ("urchins", {"count": 1, "delta": 1}),
        ("urchins", {}),
        ("urchins", {"count": -3}),
        ("crabs", {"count": 1}),
    ],
)
def test_population_resize_rejects_bad_requests(client, kind, payload):
    assert client.post(f"/api/simulation/population/{kind}", json=payload).status_code == 422


def test_reset_with_params_and_seed(client):
    client.post("/api/simulation/step", params={"count": 3})
    response = client.post("/api/simulation/reset", params={"seed": 7}, json={"initialUrchins": 12})
    assert response.status_code == 200
    body = response.json()
    assert body["tick"] == 0
    assert body["urchins"] == 12
    assert body["seed"] == 7


def test_reset_without_body(client):
    client.post("/api/simulation/step", params={"count": 3})
    assert client.post("/api/simulation/reset").json()["tick"] == 0


def test_reset_with_invalid_params(client):
    response = client.post("/api/simulation/reset", json={"harvesterCount": -2})
    assert response.status_code == 422


def test_lifecycle(client):
    assert client.post("/api/simulation/resume").status_code == 400

    started = client.post("/api/simulation/start").json()
    assert started["state"] == "running"
    assert client.post("/api/simulation/step").status_code == 409

    paused = client.post("/api/simulation/pause").json()
    assert paused["state"] == "paused"
    tick = paused["tick"]
    assert client.post("/api/simulation/step").json()["status"]["tick"] == tick + 1

    assert client.post("/api/simulation/resume").json()["state"] == "running"
    assert client.post("/api/simulation/stop").json()["state"] == "stopped"


def test_runner_thread_advances_and_respects_tick_limit():
    params = SimulationParameters(tick_rate=1, speed_multiplier=5, enable_tick_limit=True, tick_limit=40)
    runner = SimulationRunner(params=params, seed=3)
    runner.start()
    try:
        deadline = time.time() + 5.0
        while not runner.driver.finished and time.time() < deadline:
            time.sleep(0.01)
    finally:
        runner.stop()

    assert runner.engine.tick == 40
    assert runner.paused
    assert runner.get_status()["state"] == "stopped"


def test_health_answers_while_step_batch_is_computing(client):
    runner = client.app.state.context.runner
    started = threading.Event()
    release = threading.Event()
    original_step = runner.engine.step

    def slow_step(params=None):
        started.set()
        release.wait(timeout=10.0)
        return original_step(params)

    runner.engine.step = slow_step
    responses = {}

    def post_step():
        responses["step"] = client.post("/api/simulation/step", params={"count": 1})

    def get_health():
        responses["health"] = client.get("/health")

    step_thread = threading.Thread(target=post_step)
    step_thread.start()
    try:
        assert started.wait(timeout=5.0)
        health_thread = threading.Thread(target=get_health)
        health_thread.start()
        health_thread.join(timeout=5.0)

        assert not health_thread.is_alive()
        assert responses["health"].status_code == 200
        assert "step" not in responses
    finally:
        release.set()
        step_thread.join(timeout=10.0)

    assert responses["step"].status_code == 200
    assert responses["step"].json()["steps"] == 1
