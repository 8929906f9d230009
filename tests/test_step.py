"""Step model, builder snapshots and the sequence contract."""

import json

import pytest

from algorithms.step import (
    InvalidStepSequence,
    Step,
    StepBuilder,
    StepType,
    TERMINAL_STEP_TYPES,
    check_sequence,
)


def _steps(*types):
    return [Step(id=i, step_type=t) for i, t in enumerate(types)]


def test_check_sequence_accepts_single_terminal_at_end():
    check_sequence(_steps(StepType.INITIALIZATION, StepType.COMPARISON, StepType.RETURN))


def test_check_sequence_rejects_empty():
    with pytest.raises(InvalidStepSequence):
        check_sequence([])


def test_check_sequence_rejects_bad_ids():
    steps = [Step(id=0, step_type=StepType.INITIALIZATION), Step(id=2, step_type=StepType.RETURN)]
    with pytest.raises(InvalidStepSequence, match="position 1"):
        check_sequence(steps)


def test_check_sequence_rejects_missing_terminal():
    with pytest.raises(InvalidStepSequence):
        check_sequence(_steps(StepType.INITIALIZATION, StepType.COMPARISON))


def test_check_sequence_rejects_early_terminal():
    with pytest.raises(InvalidStepSequence):
        check_sequence(_steps(StepType.RETURN_FOUND, StepType.RETURN))


def test_terminal_types():
    assert StepType.VALIDATION_FAILURE in TERMINAL_STEP_TYPES
    assert StepType.DP_OPTIMAL_SOLUTION_FOUND not in TERMINAL_STEP_TYPES
    assert Step(id=0, step_type=StepType.HEAP_RESULT_FOUND).is_terminal
    assert not Step(id=0, step_type=StepType.SWAP).is_terminal


def test_builder_snapshots_are_isolated_from_later_mutation():
    working = [3, 1, 2]
    sb = StepBuilder()
    sb.track("array", "array", working, label="Array")
    sb.variables = {"seen": [0]}
    first = sb.build(0)

    working[0] = 99
    sb.variables["seen"].append(1)
    second = sb.build(1)

    assert first.data_structures["array"].data == [3, 1, 2]
    assert first.variables == {"seen": [0]}
    assert second.data_structures["array"].data == [99, 1, 2]


def test_begin_clears_per_step_fields():
    sb = StepBuilder()
    sb.track("array", "array", [1], label="Array")
    sb.begin(StepType.COMPARISON, duration=800)
    sb.highlight("array", "indices", [0], "compare")
    sb.explanation = "x"
    sb.begin(StepType.ASSIGNMENT)
    step = sb.build(0)
    assert step.highlights == {}
    assert step.explanation == ""
    assert step.timing.duration == 1000


def test_to_dict_uses_camel_case_and_is_json_ready():
    sb = StepBuilder()
    sb.track("array", "array", [1, 2], label="Array", x=10, y=20, color="blue")
    sb.begin(StepType.COMPARISON, duration=800, delay=100)
    sb.highlight("array", "indices", range(2), "compare", intensity=0.5)
    sb.no_highlights("other")
    sb.step_context = {"operation": "compare"}
    out = sb.build(0).to_dict()

    assert set(out) == {"id", "stepType", "stepContext", "dataStructures", "highlights",
                        "explanation", "variables", "timing"}
    assert out["stepType"] == "comparison"
    assert out["timing"] == {"duration": 800, "delay": 100}
    assert out["highlights"]["array"] == [
        {"type": "indices", "values": [0, 1], "style": "compare", "intensity": 0.5}
    ]
    assert out["highlights"]["other"] == []
    meta = out["dataStructures"]["array"]["metadata"]
    assert meta["position"] == {"x": 10, "y": 20}
    assert meta["style"] == {"color": "blue"}
    json.dumps(out)


def test_relabel_changes_later_steps_only():
    sb = StepBuilder()
    sb.track("list", "linkedlist", [], label="Before")
    first = sb.build(0)
    sb.relabel("list", "After")
    second = sb.build(1)
    assert first.data_structures["list"].metadata["label"] == "Before"
    assert second.data_structures["list"].metadata["label"] == "After"
