"""Recorder metrics, export and comparison."""

import json
import logging

import pytest

from engine.animation import ANIMATION_KINDS, animation_kind, missing_step_types
from engine.recorder import Recorder, RunMetrics, compare
from engine.stepper import StepperState
from algorithms.step import StepType


def _recorded(key, inputs=None):
    rec = Recorder()
    rec.start(key, inputs)
    rec.run_to_completion()
    return rec


def test_start_unknown_algorithm():
    with pytest.raises(ValueError, match="Unknown algorithm"):
        Recorder().start("quick-sort")


def test_run_before_start():
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()


def test_metrics_come_from_the_step_stream():
    rec = _recorded("binary-search", {"target": 23})
    metrics = rec.get_metrics()
    assert metrics.algo_key == "binary-search"
    assert metrics.algo_label == "Binary Search"
    assert metrics.total_steps == len(rec.steps)
    assert metrics.comparisons == metrics.step_type_counts["comparison"]
    assert metrics.terminal_type == "return"
    assert metrics.result["found"] is True
    assert metrics.wall_time_ms >= 0


def test_run_loads_the_stepper():
    rec = _recorded("factorial", {"n": 3})
    assert rec.stepper.total_steps == len(rec.steps)
    assert rec.stepper.current_idx == 0
    assert rec.stepper.state == StepperState.PAUSED


def test_run_logs_summary(caplog):
    with caplog.at_level(logging.INFO, logger="engine.recorder"):
        _recorded("linear-search")
    assert "Ran linear-search" in caplog.text


def test_export_is_json_ready_for_structure_inputs():
    data = _recorded("cycle-detection").export()
    assert data["algoKey"] == "cycle-detection"
    assert data["inputs"]["graph"] is None
    assert len(data["steps"]) == data["metrics"]["total_steps"]
    json.dumps(data)


def test_export_serialises_tree_inputs():
    from structures.tree import BinaryTree

    data = _recorded("bfs-traversal", {"tree": BinaryTree.example("small")}).export()
    assert data["inputs"]["tree"]["root"] == "node1"
    json.dumps(data)


def test_compare_picks_the_shorter_run():
    binary = _recorded("binary-search", {"array": list(range(1, 33)), "target": 31})
    linear = _recorded("linear-search", {"array": list(range(1, 33)), "target": 31})
    result = compare(binary, linear)
    assert result.winner_steps == "Binary Search"
    assert result.winner_comparisons == "Binary Search"
    assert result.to_dict()["left"]["algo_key"] == "binary-search"


def test_compare_tie():
    left = _recorded("factorial", {"n": 4})
    right = _recorded("factorial", {"n": 4})
    result = compare(left, right)
    assert result.winner_steps == "tie"
    assert result.winner_comparisons == "tie"


def test_compare_handles_unrun_recorders():
    result = compare(Recorder(), Recorder())
    assert result.left == RunMetrics()
    assert result.winner_steps == "tie"


def test_every_step_type_has_an_animation():
    assert missing_step_types() == []
    assert len(ANIMATION_KINDS) == len(StepType)


def test_animation_kind_of_terminal_steps():
    rec = _recorded("balanced-parentheses", {"text": "(]"})
    assert animation_kind(rec.steps[-1]) == "failure"
    assert animation_kind(rec.steps[0]) == "fade_in"
