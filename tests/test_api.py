"""JSON API through Flask's test client."""

import pytest

from main import MAX_RUNS, create_app
from settings import AppConfig


@pytest.fixture
def app():
    return create_app(AppConfig(secret_key="test", max_input_size=40))


@pytest.fixture
def client(app):
    return app.test_client()


def _run(client, key="binary-search", inputs=None):
    body = {"algo_key": key}
    if inputs is not None:
        body["inputs"] = inputs
    return client.post("/api/run", json=body)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
def test_list_algorithms(client):
    resp = client.get("/api/algorithms")
    assert resp.status_code == 200
    keys = [card["key"] for card in resp.get_json()["algorithms"]]
    assert len(keys) == 14
    assert "coin-change" in keys


def test_list_algorithms_by_category(client):
    cards = client.get("/api/algorithms?category=search").get_json()["algorithms"]
    assert {c["key"] for c in cards} == {"binary-search", "linear-search"}


def test_single_card(client):
    assert client.get("/api/algorithms/factorial").get_json()["params"] == {"n": "integer"}
    assert client.get("/api/algorithms/quick-sort").status_code == 404


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------
def test_run_returns_steps_metrics_and_state(client):
    resp = _run(client, inputs={"array": "1, 3, 5, 7", "target": "7"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["algoKey"] == "binary-search"
    assert data["steps"][0]["stepType"] == "initialization"
    assert data["steps"][-1]["variables"]["found"] is True
    assert data["metrics"]["total_steps"] == len(data["steps"])
    assert data["state"]["currentStep"] == 0
    assert data["state"]["state"] == "paused"


def test_run_with_defaults(client):
    data = _run(client, key="coin-change").get_json()
    assert data["steps"][-1]["variables"]["minCoinsNeeded"] == 2


def test_run_cycle_detection_on_numeric_edge_list(client):
    resp = _run(client, key="cycle-detection", inputs={"graph": "1-12, 11-2"})
    assert resp.status_code == 200
    assert resp.get_json()["steps"][-1]["variables"]["hasCycle"] is False


def test_run_unknown_algorithm(client):
    assert _run(client, key="quick-sort").status_code == 404


def test_run_without_key(client):
    resp = client.post("/api/run", json={})
    assert resp.status_code == 400
    assert "algo_key" in resp.get_json()["error"]


@pytest.mark.parametrize("inputs", [
    {"target": "abc"},
    {"array": [1, 2], "colour": "red"},
    [1, 2, 3],
])
def test_run_rejects_bad_inputs(client, inputs):
    resp = _run(client, inputs=inputs)
    assert resp.status_code == 400
    assert resp.get_json()["error"]


def test_run_rejects_non_object_body(client):
    assert client.post("/api/run", json=[1, 2]).status_code == 400


def test_run_respects_configured_limits(client):
    resp = _run(client, key="factorial", inputs={"n": 15})
    assert resp.status_code == 400
    assert "at most" in resp.get_json()["error"]


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------
def test_navigation_needs_a_run(client):
    for path in ("/api/step/next", "/api/step/prev", "/api/step/rewind", "/api/step/end",
                 "/api/step/play", "/api/step/goto"):
        assert client.post(path, json={"index": 0}).status_code == 404


def test_state_without_run(client):
    data = client.get("/api/state").get_json()
    assert data["state"] == "idle"
    assert data["totalSteps"] == 0


def test_next_prev_and_bounds(client):
    total = len(_run(client, key="factorial", inputs={"n": 2}).get_json()["steps"])

    assert client.post("/api/step/prev").status_code == 400

    data = client.post("/api/step/next").get_json()
    assert data["state"]["currentStep"] == 1
    assert data["step"]["id"] == 1
    assert data["animation"] == "push"

    data = client.post("/api/step/end").get_json()
    assert data["state"]["currentStep"] == total - 1
    assert data["state"]["isFinished"] is True
    assert data["animation"] == "success"

    resp = client.post("/api/step/next")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Already at last step"

    data = client.post("/api/step/prev").get_json()
    assert data["state"]["state"] == "paused"

    data = client.post("/api/step/rewind").get_json()
    assert data["state"]["currentStep"] == 0


def test_goto(client):
    total = len(_run(client).get_json()["steps"])
    assert client.post("/api/step/goto", json={"index": 1}).get_json()["step"]["id"] == 1

    resp = client.post("/api/step/goto", json={"index": total})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Invalid step index"

    assert client.post("/api/step/goto", json={"index": "2"}).status_code == 400
    assert client.post("/api/step/goto", json={"index": True}).status_code == 400


def test_play_toggles(client):
    _run(client, key="bubble-sort")
    assert client.post("/api/step/play").get_json()["state"] == "playing"
    assert client.post("/api/step/play").get_json()["state"] == "paused"


def test_state_reports_the_current_run(client):
    _run(client, key="two-sum")
    client.post("/api/step/next")
    data = client.get("/api/state").get_json()
    assert data["algoKey"] == "two-sum"
    assert data["currentStep"] == 1


def test_sessions_are_isolated(app):
    first, second = app.test_client(), app.test_client()
    _run(first)
    assert second.post("/api/step/next").status_code == 404


def test_new_run_replaces_the_old_one(app, client):
    _run(client)
    _run(client, key="factorial")
    assert len(app.extensions["algoviz_runs"]) == 1
    assert client.get("/api/state").get_json()["algoKey"] == "factorial"


def test_run_store_is_bounded(app):
    for _ in range(MAX_RUNS + 3):
        _run(app.test_client(), key="factorial", inputs={"n": 1})
    assert len(app.extensions["algoviz_runs"]) == MAX_RUNS


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
def test_speed_applies_to_session_and_later_runs(client):
    assert client.post("/api/config/speed", json={"speed": "fast"}).get_json() == {"speed": "fast"}
    assert _run(client).get_json()["state"]["speed"] == "fast"
    client.post("/api/config/speed", json={"speed": "slow"})
    assert client.get("/api/state").get_json()["speed"] == "slow"


def test_speed_rejects_unknown_preset(client):
    resp = client.post("/api/config/speed", json={"speed": "warp"})
    assert resp.status_code == 400
    assert "turbo" in resp.get_json()["error"]


@pytest.mark.parametrize("speed", [["fast"], {"a": 1}, 3, None])
def test_speed_rejects_non_string_preset(client, speed):
    resp = client.post("/api/config/speed", json={"speed": speed})
    assert resp.status_code == 400
    assert "speed must be one of" in resp.get_json()["error"]


def test_default_speed_comes_from_config():
    client = create_app(AppConfig(secret_key="test", default_speed="turbo")).test_client()
    assert client.get("/api/state").get_json()["speed"] == "turbo"


# ---------------------------------------------------------------------------
# Compare
# ---------------------------------------------------------------------------
def test_compare(client):
    array = list(range(1, 33))
    resp = client.post("/api/compare", json={
        "left":  {"algo_key": "binary-search", "inputs": {"array": array, "target": 30}},
        "right": {"algo_key": "linear-search", "inputs": {"array": array, "target": 30}},
    })
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["winner_steps"] == "Binary Search"
    assert data["left"]["algo_key"] == "binary-search"
    assert data["right"]["terminal_type"] == "return_found"


def test_compare_needs_both_sides(client):
    assert client.post("/api/compare", json={"left": {"algo_key": "factorial"}}).status_code == 400


def test_compare_unknown_algorithm(client):
    resp = client.post("/api/compare", json={
        "left": {"algo_key": "factorial"}, "right": {"algo_key": "nope"},
    })
    assert resp.status_code == 404
