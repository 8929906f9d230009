"""
params.py — Raw Input Coercion
===============================
Turns the loosely-typed JSON a browser sends into the Python values a
generator expects, using the parameter kinds declared on each AlgoInfo:

    numbers   list of ints / floats    [5, 3, 8]  or  "5, 3, 8"
    integers  list of ints             [1, 3, 4]  or  "1 3 4"
    number    int or float             23  or  "23"
    integer   int                      6   or  "6"
    text      string
    tree      {"nodes": [...], "root": id}  |  level-order list with nulls
              |  example name ("small", "medium", "unbalanced")
    graph     {"nodes": [...], "edges": [...]}  |  edge-list text
              |  {"random": {"nodes": 6, "probability": 0.3, "seed": 1}}

Anything that does not fit raises InputError, whose message is safe to
show to the user.  Size limits come from settings.AppConfig.
"""

import math
import re
from typing import Any, Dict, List, Optional

from settings import AppConfig
from structures.graph import Graph
from structures.tree import BinaryTree, EXAMPLE_TREES


class InputError(ValueError):
    """Raised when raw input cannot be turned into generator arguments."""


_SPLIT = re.compile(r"[,\s]+")


def coerce_inputs(info, raw: Optional[Dict[str, Any]], config: Optional[AppConfig] = None) -> Dict[str, Any]:
    """
    Validate `raw` against `info.params` and return generator kwargs.
    Parameters that are missing or null are left out, so the registry's
    example inputs apply.
    """
    config = config or AppConfig()
    raw = raw or {}
    if not isinstance(raw, dict):
        raise InputError("inputs must be an object")

    unknown = sorted(set(raw) - set(info.params))
    if unknown:
        raise InputError(f"{info.key} does not take: {', '.join(unknown)}")

    kwargs: Dict[str, Any] = {}
    for name, kind in info.params.items():
        value = raw.get(name)
        if value is None:
            continue
        kwargs[name] = _COERCERS[kind](name, value, config)

    _check_limits(info.key, kwargs, config)
    return kwargs


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------
def _number(name: str, value: Any, config: Optional[AppConfig] = None) -> float:
    if isinstance(value, bool):
        raise InputError(f"{name} must be a number")
    if isinstance(value, str):
        text = value.strip()
        try:
            value = int(text)
        except ValueError:
            try:
                value = float(text)
            except ValueError:
                raise InputError(f"{name} must be a number, got {text!r}") from None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    raise InputError(f"{name} must be a finite number")


def _integer(name: str, value: Any, config: Optional[AppConfig] = None) -> int:
    number = _number(name, value)
    if isinstance(number, float):
        if not number.is_integer():
            raise InputError(f"{name} must be a whole number, got {value!r}")
        number = int(number)
    return number


def _text(name: str, value: Any, config: AppConfig) -> str:
    if not isinstance(value, str):
        raise InputError(f"{name} must be a string")
    if len(value) > config.max_string_length:
        raise InputError(f"{name} is longer than {config.max_string_length} characters")
    return value


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------
def _items(name: str, value: Any, config: AppConfig) -> List[Any]:
    if isinstance(value, str):
        items = [part for part in _SPLIT.split(value.strip()) if part]
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise InputError(f"{name} must be a list of numbers")
    if len(items) > config.max_input_size:
        raise InputError(f"{name} has more than {config.max_input_size} elements")
    return items


def _numbers(name: str, value: Any, config: AppConfig) -> List[float]:
    return [_number(name, v) for v in _items(name, value, config)]


def _integers(name: str, value: Any, config: AppConfig) -> List[int]:
    return [_integer(name, v) for v in _items(name, value, config)]


# ---------------------------------------------------------------------------
# Structures
# ---------------------------------------------------------------------------
def _tree(name: str, value: Any, config: AppConfig) -> BinaryTree:
    try:
        if isinstance(value, str):
            if value not in EXAMPLE_TREES:
                raise InputError(
                    f"unknown example tree {value!r}; choose from {', '.join(EXAMPLE_TREES)}"
                )
            tree = BinaryTree.example(value)
        elif isinstance(value, list):
            tree = BinaryTree.from_level_order(
                [None if v is None else _number(name, v) for v in value]
            )
        elif isinstance(value, dict):
            tree = BinaryTree.from_dict(value)
        else:
            raise InputError(f"{name} must be a tree object, a level-order list or an example name")
    except (AttributeError, KeyError, TypeError) as exc:
        raise InputError(f"malformed {name}: {exc}") from exc
    except InputError:
        raise
    except ValueError as exc:
        raise InputError(f"invalid {name}: {exc}") from exc

    if len(tree) > config.max_input_size:
        raise InputError(f"{name} has more than {config.max_input_size} nodes")
    return tree


def _graph(name: str, value: Any, config: AppConfig) -> Graph:
    try:
        if isinstance(value, str):
            graph = Graph.from_edge_list(value)
        elif isinstance(value, dict) and "random" in value:
            opts = value["random"] or {}
            count = _integer("nodes", opts.get("nodes", 6))
            if not 0 <= count <= config.max_input_size:
                raise InputError(f"random graph needs 0..{config.max_input_size} nodes")
            graph = Graph.generate_random(
                num_nodes=count,
                edge_probability=float(_number("probability", opts.get("probability", 0.3))),
                seed=opts.get("seed"),
            )
        elif isinstance(value, dict):
            graph = Graph.from_dict(value)
        else:
            raise InputError(f"{name} must be a graph object or an edge list")
    except (AttributeError, KeyError, TypeError) as exc:
        raise InputError(f"malformed {name}: {exc}") from exc
    except InputError:
        raise
    except ValueError as exc:
        raise InputError(f"invalid {name}: {exc}") from exc

    if graph.node_count() > config.max_input_size:
        raise InputError(f"{name} has more than {config.max_input_size} nodes")
    return graph


_COERCERS = {
    "numbers":  _numbers,
    "integers": _integers,
    "number":   _number,
    "integer":  _integer,
    "text":     _text,
    "tree":     _tree,
    "graph":    _graph,
}


# ---------------------------------------------------------------------------
# Per-algorithm limits
# ---------------------------------------------------------------------------
def _check_limits(key: str, kwargs: Dict[str, Any], config: AppConfig) -> None:
    if key == "factorial" and kwargs.get("n", 0) > config.max_factorial_n:
        raise InputError(f"n must be at most {config.max_factorial_n}")
    if key == "coin-change" and kwargs.get("amount", 0) > config.max_amount:
        raise InputError(f"amount must be at most {config.max_amount}")
