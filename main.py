"""
main.py — Algorithm Step Visualizer Flask App
===============================================
The JSON web service behind the browser visualizer.  It generates Step
sequences and drives server-side playback; drawing them is the
browser's job.

Routes:
  GET  /api/algorithms            – registry cards (optional ?category=)
  GET  /api/algorithms/<key>      – one card
  POST /api/run                   – {algo_key, inputs} → all steps + metrics
  POST /api/step/next             – advance one step
  POST /api/step/prev             – rewind one step
  POST /api/step/goto             – jump to step N ({index})
  POST /api/step/rewind           – back to step 0
  POST /api/step/end              – jump to the terminal step
  POST /api/step/play             – toggle play/pause
  GET  /api/state                 – current index / total / speed
  POST /api/config/speed          – set speed preset ({speed})
  POST /api/compare               – run two algorithms → ComparisonResult

State management:
  Each browser session gets a run id in the Flask session cookie.  The
  Stepper for that run lives in a process-local dict, bounded to the
  most recent MAX_RUNS runs.  Restarting the process forgets every run.
"""

import logging
import secrets
from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple

from flask import Blueprint, Flask, current_app, jsonify, request, session

from algorithms import get_algorithm, list_algorithms, algorithms_by_category
from algorithms.params import InputError, coerce_inputs
from engine import Recorder, Stepper, SPEED_PRESETS, animation_kind, compare
from settings import AppConfig, load_config

logger = logging.getLogger(__name__)

MAX_RUNS = 256

api = Blueprint("api", __name__, url_prefix="/api")


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[AppConfig] = None) -> Flask:
    config = config or load_config()
    app = Flask(__name__)
    app.secret_key = config.secret_key
    app.config["ALGOVIZ"] = config
    app.extensions["algoviz_runs"] = OrderedDict()
    app.register_blueprint(api)
    app.register_error_handler(InputError, _input_error)
    return app


def _input_error(exc: InputError):
    logger.warning("Rejected input on %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def _config() -> AppConfig:
    return current_app.config["ALGOVIZ"]


def _runs() -> "OrderedDict[str, Dict[str, Any]]":
    return current_app.extensions["algoviz_runs"]


def _current_run() -> Optional[Dict[str, Any]]:
    run_id = session.get("run_id")
    if run_id is None:
        return None
    return _runs().get(run_id)


def _store_run(run: Dict[str, Any]) -> str:
    runs = _runs()
    old = session.get("run_id")
    if old is not None:
        runs.pop(old, None)
    run_id = secrets.token_hex(8)
    runs[run_id] = run
    while len(runs) > MAX_RUNS:
        runs.popitem(last=False)
    session["run_id"] = run_id
    return run_id


def _body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InputError("request body must be a JSON object")
    return data


def _speed() -> str:
    return session.get("speed", _config().default_speed)


def _record(algo_key: Any, raw_inputs: Any) -> Recorder:
    if not isinstance(algo_key, str):
        raise InputError("algo_key is required")
    info = get_algorithm(algo_key)
    if info is None:
        raise LookupError(f"Unknown algorithm: {algo_key}")
    kwargs = coerce_inputs(info, raw_inputs, _config())
    rec = Recorder()
    rec.start(algo_key, kwargs)
    rec.run_to_completion()
    return rec


def _step_payload(stepper: Stepper) -> Dict[str, Any]:
    step = stepper.current_step
    return {
        "step":      step.to_dict() if step else None,
        "animation": animation_kind(step) if step else None,
        "state":     stepper.snapshot(),
    }


def _no_run() -> Tuple[Any, int]:
    return jsonify({"error": "No algorithm run loaded; POST /api/run first"}), 404


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@api.route("/algorithms", methods=["GET"])
def api_algorithms():
    category = request.args.get("category")
    infos = algorithms_by_category(category) if category else list_algorithms()
    return jsonify({"algorithms": [info.to_dict() for info in infos]})


@api.route("/algorithms/<key>", methods=["GET"])
def api_algorithm(key: str):
    info = get_algorithm(key)
    if info is None:
        return jsonify({"error": f"Unknown algorithm: {key}"}), 404
    return jsonify(info.to_dict())


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@api.route("/run", methods=["POST"])
def api_run():
    data = _body()
    try:
        rec = _record(data.get("algo_key"), data.get("inputs"))
    except LookupError as exc:
        return jsonify({"error": str(exc)}), 404

    rec.stepper.set_speed(_speed())
    run_id = _store_run({"algo_key": rec.metrics.algo_key, "stepper": rec.stepper,
                         "metrics": rec.metrics})

    return jsonify({
        "runId":   run_id,
        "algoKey": rec.metrics.algo_key,
        "steps":   [s.to_dict() for s in rec.steps],
        "metrics": rec.metrics.to_dict(),
        "state":   rec.stepper.snapshot(),
    })


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@api.route("/step/next", methods=["POST"])
def api_step_next():
    run = _current_run()
    if run is None:
        return _no_run()
    stepper: Stepper = run["stepper"]
    if not stepper.next_step():
        return jsonify({"error": "Already at last step"}), 400
    return jsonify(_step_payload(stepper))


@api.route("/step/prev", methods=["POST"])
def api_step_prev():
    run = _current_run()
    if run is None:
        return _no_run()
    stepper: Stepper = run["stepper"]
    if not stepper.prev_step():
        return jsonify({"error": "Already at first step"}), 400
    return jsonify(_step_payload(stepper))


@api.route("/step/goto", methods=["POST"])
def api_step_goto():
    run = _current_run()
    if run is None:
        return _no_run()
    stepper: Stepper = run["stepper"]
    idx = _body().get("index")
    if isinstance(idx, bool) or not isinstance(idx, int):
        raise InputError("index must be an integer")
    if not stepper.goto_step(idx):
        return jsonify({"error": "Invalid step index"}), 400
    return jsonify(_step_payload(stepper))


@api.route("/step/rewind", methods=["POST"])
def api_step_rewind():
    run = _current_run()
    if run is None:
        return _no_run()
    stepper: Stepper = run["stepper"]
    stepper.rewind()
    return jsonify(_step_payload(stepper))


@api.route("/step/end", methods=["POST"])
def api_step_end():
    run = _current_run()
    if run is None:
        return _no_run()
    stepper: Stepper = run["stepper"]
    stepper.jump_to_end()
    return jsonify(_step_payload(stepper))


@api.route("/step/play", methods=["POST"])
def api_step_play():
    run = _current_run()
    if run is None:
        return _no_run()
    stepper: Stepper = run["stepper"]
    stepper.toggle_play()
    return jsonify(stepper.snapshot())


@api.route("/state", methods=["GET"])
def api_state():
    run = _current_run()
    if run is None:
        return jsonify({"state": "idle", "currentStep": -1, "totalSteps": 0,
                        "speed": _speed(), "isFinished": False, "algoKey": None})
    stepper: Stepper = run["stepper"]
    state = stepper.snapshot()
    state["algoKey"] = run["algo_key"]
    return jsonify(state)


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@api.route("/config/speed", methods=["POST"])
def api_config_speed():
    speed = _body().get("speed", "medium")
    if not isinstance(speed, str) or speed not in SPEED_PRESETS:
        raise InputError(f"speed must be one of {', '.join(SPEED_PRESETS)}")
    session["speed"] = speed
    run = _current_run()
    if run is not None:
        run["stepper"].set_speed(speed)
    return jsonify({"speed": speed})


# ---------------------------------------------------------------------------
# API: Comparison Mode
# ---------------------------------------------------------------------------
@api.route("/compare", methods=["POST"])
def api_compare():
    data = _body()
    left, right = data.get("left"), data.get("right")
    if not isinstance(left, dict) or not isinstance(right, dict):
        raise InputError("compare needs 'left' and 'right' objects")
    try:
        left_rec = _record(left.get("algo_key"), left.get("inputs"))
        right_rec = _record(right.get("algo_key"), right.get("inputs"))
    except LookupError as exc:
        return jsonify({"error": str(exc)}), 404
    return jsonify(compare(left_rec, right_rec).to_dict())


app = create_app()


if __name__ == "__main__":
    from logging_setup import init_logging

    init_logging(app.config["ALGOVIZ"].log_level)
    app.run(debug=False, port=5000)
