"""Registry lookups and the contract every registered generator keeps."""

import json

import pytest

from algorithms import REGISTRY, algorithms_by_category, get_algorithm, list_algorithms, run_algorithm
from algorithms.step import check_sequence

ALL_KEYS = sorted(REGISTRY)


def test_registry_has_every_algorithm():
    assert len(REGISTRY) == 14
    assert "in-order-traversal" in REGISTRY
    for key, info in REGISTRY.items():
        assert info.key == key


def test_get_algorithm_unknown_key():
    assert get_algorithm("quick-sort") is None


def test_run_algorithm_unknown_key():
    with pytest.raises(KeyError):
        run_algorithm("quick-sort")


def test_algorithms_by_category():
    keys = {info.key for info in algorithms_by_category("trees")}
    assert keys == {"bfs-traversal", "in-order-traversal"}
    assert algorithms_by_category("no-such-category") == []


def test_list_algorithms_returns_every_card():
    assert [info.key for info in list_algorithms()] == list(REGISTRY)


def test_card_shape():
    card = REGISTRY["binary-search"].to_dict()
    assert card["complexityTime"] == "O(log n)"
    assert card["params"] == {"array": "numbers", "target": "number"}
    assert "fn" not in card
    assert REGISTRY["bfs-traversal"].to_dict()["defaults"] == {}
    json.dumps(card)


@pytest.mark.parametrize("key", ALL_KEYS)
def test_default_run_keeps_the_step_contract(key):
    steps = run_algorithm(key)
    check_sequence(steps)
    assert steps[-1].is_terminal
    assert all(not s.is_terminal for s in steps[:-1])


@pytest.mark.parametrize("key", ALL_KEYS)
def test_steps_serialise_to_json(key):
    for step in run_algorithm(key):
        json.dumps(step.to_dict())


@pytest.mark.parametrize("key", ALL_KEYS)
def test_runs_are_deterministic(key):
    first = [s.to_dict() for s in run_algorithm(key)]
    second = [s.to_dict() for s in run_algorithm(key)]
    assert first == second


def test_run_algorithm_does_not_mutate_defaults():
    before = list(REGISTRY["bubble-sort"].defaults["array"])
    run_algorithm("bubble-sort")
    assert REGISTRY["bubble-sort"].defaults["array"] == before


def test_run_algorithm_overrides_defaults():
    steps = run_algorithm("binary-search", target=99)
    assert steps[-1].variables["found"] is False
