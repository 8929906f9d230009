"""Per-algorithm behaviour of the step generators."""

import pytest

from algorithms.anagram import anagram_detection
from algorithms.balanced_parentheses import balanced_parentheses
from algorithms.bfs_traversal import bfs_traversal
from algorithms.binary_search import binary_search
from algorithms.bubble_sort import bubble_sort
from algorithms.coin_change import coin_change
from algorithms.cycle_detection import cycle_detection
from algorithms.factorial import factorial
from algorithms.inorder_traversal import inorder_traversal
from algorithms.k_largest import k_largest_elements
from algorithms.linear_search import linear_search
from algorithms.min_cost import min_cost_array
from algorithms.reverse_linked_list import reverse_linked_list
from algorithms.step import StepType, check_sequence
from algorithms.two_sum import two_sum
from structures.graph import Graph
from structures.tree import BinaryTree

SORTED = [2, 5, 8, 12, 16, 23, 38, 45, 67, 78, 89, 91]


def _types(steps):
    return [s.step_type for s in steps]


# ---------------------------------------------------------------------------
# Searching
# ---------------------------------------------------------------------------
def test_binary_search_finds_target():
    steps = binary_search(SORTED, 23)
    check_sequence(steps)
    last = steps[-1]
    assert last.step_type == StepType.RETURN
    assert last.variables["found"] is True
    assert last.variables["foundIndex"] == 5
    assert last.variables["foundValue"] == 23
    assert steps[0].step_type == StepType.INITIALIZATION


def test_binary_search_reports_missing_target():
    steps = binary_search(SORTED, 99)
    check_sequence(steps)
    last = steps[-1]
    assert last.variables["found"] is False
    assert last.highlights["searchArray"] == []
    # halves the window each time: at most ceil(log2(12 + 1)) comparisons
    assert _types(steps).count(StepType.COMPARISON) <= 4


def test_binary_search_searches_a_sorted_copy():
    data = [9, 1, 5]
    steps = binary_search(data, 5)
    assert data == [9, 1, 5]
    assert steps[0].data_structures["searchArray"].data == [1, 5, 9]
    assert steps[-1].variables["foundIndex"] == 1


def test_linear_search_found():
    steps = linear_search([64, 34, 25, 12, 22, 11, 90], 22)
    check_sequence(steps)
    assert steps[-1].step_type == StepType.RETURN_FOUND
    assert steps[-1].variables["foundIndex"] == 4


def test_linear_search_visits_every_index_before_giving_up():
    array = [4, 8, 15]
    steps = linear_search(array, 16)
    check_sequence(steps)
    last = steps[-1]
    assert last.step_type == StepType.RETURN_NOT_FOUND
    assert last.variables["currentIndex"] == len(array)
    assert last.variables["found"] is False
    assert last.highlights["searchArray"][0].values == [0, 1, 2]
    assert _types(steps).count(StepType.COMPARISON) == len(array)


def test_two_sum_walks_pointers_to_a_pair():
    steps = two_sum([2, 3, 6, 7, 8, 11, 15, 17], 9)
    check_sequence(steps)
    last = steps[-1]
    assert last.variables["found"] is True
    assert last.variables["solution"] == [0, 3]
    assert sum(last.variables["solutionValues"]) == 9
    # every sum starting from 2 + 17 overshoots until 2 + 7
    assert _types(steps).count(StepType.POINTER_MOVE_RIGHT) == 4
    assert StepType.POINTER_MOVE_LEFT not in _types(steps)


def test_two_sum_without_solution():
    steps = two_sum([1, 2, 4], 100)
    check_sequence(steps)
    assert steps[-1].variables["found"] is False


def test_binary_search_found_wording():
    steps = binary_search([2, 5, 8, 12, 16, 23, 38, 45], 23)
    assert steps[-1].explanation == "Target 23 found at index 5!"


@pytest.mark.parametrize("array, target", [
    (SORTED, 23),
    (SORTED, 99),
    (SORTED, 1),
    ([7], 7),
    ([1, 3, 5, 7, 9, 11], 4),
])
def test_binary_search_current_highlight_is_mid(array, target):
    comparisons = [s for s in binary_search(array, target) if s.step_type == StepType.COMPARISON]
    assert comparisons
    for step in comparisons:
        current = [h for h in step.highlights["searchArray"] if h.style == "current"]
        assert len(current) == 1
        assert list(current[0].values) == [step.variables["mid"]]
        assert step.variables["current"] == step.data_structures["searchArray"].data[step.variables["mid"]]


def test_two_sum_found_wording():
    steps = two_sum([2, 3, 6, 7, 8, 11, 15, 17], 9)
    assert steps[-1].explanation == "Found target sum! Indices [0, 3] with values [2, 7]"


@pytest.mark.parametrize("array, target", [
    ([2, 3, 6, 7, 8, 11, 15, 17], 9),
    ([1, 2, 4], 100),
    ([1, 2, 4], 0),
    ([5, 1, 9, 3], 12),
])
def test_two_sum_pointer_highlights_follow_variables(array, target):
    for step in two_sum(array, target):
        pointers = {
            h.color: list(h.values)
            for h in step.highlights.get("array", []) if h.style == "current"
        }
        if not pointers:
            continue
        assert pointers == {"blue": [step.variables["left"]], "red": [step.variables["right"]]}


def test_two_sum_empty_array_reads_null():
    steps = two_sum([], 5)
    check_sequence(steps)
    text = steps[1].explanation
    assert "None" not in text
    assert "(value: null)" in text
    assert steps[-1].variables["found"] is False


# ---------------------------------------------------------------------------
# Linked list / sorting
# ---------------------------------------------------------------------------
def test_reverse_linked_list():
    steps = reverse_linked_list([1, 2, 3, 4, 5])
    check_sequence(steps)
    last = steps[-1]
    assert last.variables["reversedList"] == [5, 4, 3, 2, 1]
    assert last.variables["totalIterations"] == 5
    assert last.data_structures["linkedList"].metadata["label"] == "Reversed Linked List"


def test_reversing_twice_restores_the_list():
    once = reverse_linked_list([7, 1, 3])[-1].variables["reversedList"]
    twice = reverse_linked_list(once)[-1].variables["reversedList"]
    assert twice == [7, 1, 3]


def test_reverse_empty_list():
    steps = reverse_linked_list([])
    check_sequence(steps)
    assert _types(steps) == [
        StepType.INITIALIZATION, StepType.POINTER_INITIALIZATION, StepType.RETURN,
    ]
    assert steps[-1].variables["reversedList"] == []


def test_reversal_meta_only_on_link_reversal_steps():
    for step in reverse_linked_list([1, 2]):
        has_meta = "reversingMeta" in step.data_structures["linkedList"].data
        assert has_meta == (step.step_type == StepType.LINK_REVERSAL)


def test_bubble_sort_sorts_and_counts_steps():
    array = [64, 34, 25, 12, 22, 11, 90]
    steps = bubble_sort(array)
    check_sequence(steps)
    n = len(array)
    expected = 1 + sum(1 + 2 * (n - i - 1) + 1 for i in range(n - 1)) + 1
    assert len(steps) == expected
    assert steps[-1].variables["sorted"] == sorted(array)
    assert array == [64, 34, 25, 12, 22, 11, 90]


def test_bubble_sort_snapshots_do_not_change_after_the_run():
    steps = bubble_sort([3, 2, 1])
    assert steps[0].data_structures["array"].data == [3, 2, 1]
    assert steps[-1].data_structures["array"].data == [1, 2, 3]


# ---------------------------------------------------------------------------
# Trees / graphs
# ---------------------------------------------------------------------------
def test_bfs_traversal_level_order():
    steps = bfs_traversal()
    check_sequence(steps)
    last = steps[-1]
    assert last.variables["finalResult"] == [4, 2, 6, 1, 3, 5, 7]
    assert last.variables["totalNodes"] == 7
    assert last.variables["totalLevels"] == 3


def test_bfs_traversal_matches_reference_order():
    tree = BinaryTree.from_level_order([1, None, 2, 3])
    assert bfs_traversal(tree)[-1].variables["finalResult"] == tree.level_order_values()


def test_bfs_traversal_empty_tree():
    steps = bfs_traversal(BinaryTree())
    assert _types(steps) == [StepType.INITIALIZATION, StepType.RETURN]
    assert steps[-1].variables["finalResult"] == []


def test_inorder_traversal_visits_left_root_right():
    steps = inorder_traversal()
    check_sequence(steps)
    assert steps[-1].variables["finalResult"] == [1, 2, 3, 4, 5, 6, 7]
    assert steps[-1].variables["isComplete"] is True
    assert _types(steps).count(StepType.RECURSIVE_CALL) == 7


def test_inorder_traversal_unbalanced_tree():
    tree = BinaryTree.example("unbalanced")
    steps = inorder_traversal(tree)
    assert steps[-1].variables["finalResult"] == [1, 2, 2.5, 3]


def test_inorder_traversal_empty_tree():
    steps = inorder_traversal(BinaryTree())
    assert _types(steps) == [StepType.INITIALIZATION, StepType.RETURN]


def test_cycle_detection_default_graph_has_cycle():
    steps = cycle_detection()
    check_sequence(steps)
    assert steps[-1].variables["hasCycle"] is True
    assert steps[-1].variables["result"] == "CYCLE_FOUND"
    assert steps[-2].step_type == StepType.GRAPH_CYCLE_DETECTED
    assert steps[-1].variables["cycleEdgesCount"] >= 3


def test_cycle_detection_forest_has_no_cycle():
    graph = Graph.from_edge_list("A-B, B-C\nD-E")
    steps = cycle_detection(graph)
    check_sequence(steps)
    last = steps[-1]
    assert last.variables["hasCycle"] is False
    assert last.variables["result"] == "NO_CYCLE"
    assert last.variables["totalComponents"] == 2
    assert StepType.GRAPH_CYCLE_DETECTED not in _types(steps)


def test_cycle_detection_triangle():
    steps = cycle_detection(Graph.from_edge_list("A-B, B-C, C-A"))
    assert steps[-1].variables["hasCycle"] is True
    assert steps[-1].variables["cycleEdgesCount"] == 3


def test_cycle_detection_numeric_node_ids():
    steps = cycle_detection(Graph.from_edge_list("1-12, 11-2"))
    check_sequence(steps)
    assert steps[-1].variables["hasCycle"] is False
    assert steps[-1].variables["totalComponents"] == 2


# ---------------------------------------------------------------------------
# Heaps / DP / greedy
# ---------------------------------------------------------------------------
def test_k_largest_defaults():
    steps = k_largest_elements()
    check_sequence(steps)
    assert steps[-1].step_type == StepType.HEAP_RESULT_FOUND
    assert steps[-1].variables["result"] == [9, 6, 5, 5]


def test_k_largest_default_input_survives_repeated_calls():
    first = k_largest_elements()
    second = k_largest_elements()
    assert first[-1].variables["result"] == second[-1].variables["result"] == [9, 6, 5, 5]
    assert first[0].data_structures["inputArray"].data == [3, 1, 4, 1, 5, 9, 2, 6, 5, 3]


@pytest.mark.parametrize("k", [0, -1, 11])
def test_k_largest_rejects_bad_k(k):
    steps = k_largest_elements([3, 1, 4, 1, 5, 9, 2, 6, 5, 3], k)
    assert len(steps) == 1
    assert steps[0].step_type == StepType.RETURN_NOT_FOUND
    assert steps[0].variables["valid"] is False


def test_coin_change_minimum_coins():
    steps = coin_change([1, 3, 4], 6)
    check_sequence(steps)
    last = steps[-1]
    assert last.step_type == StepType.RETURN
    assert last.variables["minCoinsNeeded"] == 2
    assert sum(last.variables["coinsUsed"]) == 6
    assert len(last.variables["coinsUsed"]) == 2
    assert StepType.DP_OPTIMAL_SOLUTION_FOUND in _types(steps)


def test_coin_change_unreachable_amount():
    steps = coin_change([2], 3)
    check_sequence(steps)
    assert steps[-1].step_type == StepType.DP_NO_SOLUTION
    assert StepType.DP_TABLE_INITIALIZATION in _types(steps)


@pytest.mark.parametrize("coins, amount", [([], 5), ([0, 1], 5), ([1, 2], -1)])
def test_coin_change_invalid_input(coins, amount):
    steps = coin_change(coins, amount)
    assert len(steps) == 1
    assert steps[0].step_type == StepType.DP_NO_SOLUTION


def test_min_cost_matches_formula():
    steps = min_cost_array([3, 1, 4, 2])
    check_sequence(steps)
    last = steps[-1]
    assert last.step_type == StepType.OPTIMALITY_PROOF
    assert last.variables["totalCost"] == 3
    assert last.variables["predictedCost"] == 3
    assert last.variables["formulaVerified"] is True


@pytest.mark.parametrize("values", [[], [7]])
def test_min_cost_trivial_arrays(values):
    steps = min_cost_array(values)
    assert _types(steps) == [StepType.INITIALIZATION, StepType.RETURN]
    assert steps[-1].variables["totalCost"] == 0


# ---------------------------------------------------------------------------
# Strings / stacks / recursion
# ---------------------------------------------------------------------------
def test_anagram_detected():
    steps = anagram_detection("listen", "silent")
    check_sequence(steps)
    assert steps[-1].step_type == StepType.RETURN_FOUND
    assert steps[-1].variables["isAnagram"] is True


def test_anagram_ignores_case_and_spaces():
    assert anagram_detection("Dormitory", "dirty room")[-1].variables["isAnagram"] is True


def test_anagram_same_length_different_letters():
    steps = anagram_detection("abc", "abd")
    assert steps[-1].step_type == StepType.RETURN_NOT_FOUND
    assert steps[-1].variables["isAnagram"] is False


def test_anagram_length_mismatch_stops_early():
    steps = anagram_detection("abc", "ab")
    assert _types(steps) == [
        StepType.INITIALIZATION, StepType.STRING_COMPARISON, StepType.RETURN_NOT_FOUND,
    ]


def test_balanced_parentheses_valid():
    steps = balanced_parentheses("([]{})")
    check_sequence(steps)
    assert steps[-1].step_type == StepType.VALIDATION_SUCCESS
    assert steps[-1].variables["totalPairs"] == 3


def test_balanced_parentheses_empty_string_is_valid():
    steps = balanced_parentheses("")
    assert steps[-1].step_type == StepType.VALIDATION_SUCCESS


def test_balanced_parentheses_mismatch():
    steps = balanced_parentheses("(]")
    check_sequence(steps)
    last = steps[-1]
    assert last.step_type == StepType.VALIDATION_FAILURE
    assert last.variables["errorType"] == "mismatched_brackets"


def test_balanced_parentheses_closing_on_empty_stack():
    steps = balanced_parentheses(")(")
    last = steps[-1]
    assert last.step_type == StepType.VALIDATION_FAILURE
    assert last.variables["errorType"] == "no_opening_bracket"


def test_balanced_parentheses_unclosed_openers():
    last = balanced_parentheses("({")[-1]
    assert last.step_type == StepType.VALIDATION_FAILURE
    assert last.variables["unmatchedBrackets"] == ["(", "{"]


def test_factorial_result_and_call_count():
    steps = factorial(5)
    check_sequence(steps)
    last = steps[-1]
    assert last.variables["finalResult"] == 120
    assert last.variables["totalCalls"] == 5
    assert _types(steps).count(StepType.RECURSIVE_CALL) == 5
    assert _types(steps).count(StepType.BASE_CASE_REACHED) == 1


@pytest.mark.parametrize("n", [0, 1])
def test_factorial_base_case(n):
    steps = factorial(n)
    check_sequence(steps)
    assert steps[-1].variables["finalResult"] == 1


# ---------------------------------------------------------------------------
# Snapshot isolation
# ---------------------------------------------------------------------------
def test_binary_search_short_array():
    steps = binary_search([2, 5, 8, 12, 16, 23, 38, 45], 23)
    assert steps[-1].variables["foundValue"] == 23
    assert binary_search([2, 5, 8, 12, 16, 23, 38, 45], 99)[-1].variables["found"] is False


@pytest.mark.parametrize("generate, name", [
    (lambda a: linear_search(a, 99), "searchArray"),
    (lambda a: binary_search(a, 99), "searchArray"),
    (lambda a: bubble_sort(a), "array"),
    (lambda a: min_cost_array(a), "array"),
])
def test_mutating_input_after_the_call_changes_nothing(generate, name):
    array = [5, 3, 8, 1]
    steps = generate(array)
    before = [s.data_structures[name].data for s in steps]
    array[0] = 1000
    array.append(7)
    assert [s.data_structures[name].data for s in steps] == before
    assert all(1000 not in data for data in before)


def test_linked_list_snapshots_are_per_step():
    values = [1, 2, 3]
    steps = reverse_linked_list(values)
    first = steps[0].data_structures["linkedList"].data
    values.append(4)
    assert [n["value"] for n in first["nodes"]] == [1, 2, 3]
    assert first["reversedLinks"] == []
    assert steps[-1].data_structures["linkedList"].data["reversedLinks"] == [
        "node0-null", "node1-node0", "node2-node1",
    ]
