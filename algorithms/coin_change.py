"""
coin_change.py — Minimum Coins (bottom-up DP)
==============================================
dp[a]   = fewest coins that make amount a (∞ if impossible)
path[a] = last coin used to reach dp[a]  (-1 if none)

dp[0] = 0; for every a in 1..amount and every coin c <= a,
dp[a] = min(dp[a], dp[a - c] + 1).

Rendered tables show ∞ as the string "∞" so every payload stays
JSON-safe. Invalid input (negative amount, no coins, a coin <= 0)
yields a single DP_NO_SOLUTION step.
"""

import math
from typing import List, Sequence, Union

from algorithms.step import Step, StepBuilder, StepType

DP    = "dpTable"
COINS = "coins"
PATH  = "pathTable"

INF_LABEL = "∞"


def _show(v: float) -> Union[int, str]:
    return INF_LABEL if v == math.inf else int(v)


def coin_change(coins: Sequence[int], amount: int) -> List[Step]:
    coins = list(coins)
    steps: List[Step] = []
    sb = StepBuilder()

    if amount < 0 or not coins or any(c <= 0 for c in coins):
        sb.track(DP,    "array", [],    label="DP Table")
        sb.track(COINS, "array", coins, label="Available Coins", x=1)
        sb.begin(StepType.DP_NO_SOLUTION, duration=2000)
        sb.explanation = (
            "Invalid input: amount must be non-negative and coins must be a "
            "non-empty list of positive values."
        )
        sb.variables = {"targetAmount": amount, "coins": ", ".join(str(c) for c in coins)}
        steps.append(sb.build(len(steps)))
        return steps

    sorted_coins = sorted(coins)
    dp:   List[float] = [0] + [math.inf] * amount
    path: List[int]   = [-1] * (amount + 1)
    dp_view: List[Union[int, str]] = []

    sb.track(DP,    "array", dp_view,      label="DP Table (min coins needed)")
    sb.track(COINS, "array", sorted_coins, label="Available Coins", x=1)
    sb.track(PATH,  "array", path,         label="Path Reconstruction", y=1)

    def emit() -> None:
        dp_view[:] = [_show(v) for v in dp]
        steps.append(sb.build(len(steps)))

    sb.begin(StepType.DP_TABLE_INITIALIZATION, duration=1500)
    sb.step_context = {"operation": "initialize", "dataStructure": "array"}
    sb.highlight(DP, "indices", [0], "highlight")
    sb.explanation = (
        "Initializing DP table: dp[0] = 0 (base case), all other values = ∞. "
        f"We'll find minimum coins needed for each amount from 0 to {amount}."
    )
    sb.variables = {"targetAmount": amount, "coins": list(sorted_coins),
                    "tableSize": amount + 1, "baseCase": "dp[0] = 0"}
    emit()

    for current in range(1, amount + 1):
        sb.begin(StepType.DP_AMOUNT_PROCESSING)
        sb.step_context = {"operation": "read", "dataStructure": "array",
                           "currentAmount": current, "targetAmount": amount}
        sb.highlight(DP, "indices", [current], "active")
        sb.explanation = (
            f"Processing amount {current}. Finding minimum coins needed by trying each "
            "available coin denomination."
        )
        sb.variables = {"currentAmount": current, "targetAmount": amount,
                        "currentValue": _show(dp[current])}
        emit()

        for ci, coin in enumerate(sorted_coins):
            usable = coin <= current
            sb.begin(StepType.DP_COIN_CONSIDERATION, duration=1200)
            sb.step_context = {"operation": "compare", "dataStructure": "array",
                               "currentAmount": current, "coinValue": coin}
            sb.highlight(DP, "indices", [current], "active")
            sb.highlight(COINS, "indices", [ci], "highlight")
            if usable:
                verdict = f"Can we use coin {coin}? Need to check dp[{current - coin}]."
            else:
                verdict = f"Cannot use coin {coin} as it's larger than amount {current}."
            sb.explanation = f"Considering coin {coin} for amount {current}. {verdict}"
            sb.variables = {"currentAmount": current, "currentCoin": coin, "canUseCoin": usable}
            emit()

            if not usable:
                continue

            sub = current - coin
            sub_value = dp[sub]
            sb.begin(StepType.DP_SUBPROBLEM_LOOKUP, duration=1500)
            sb.step_context = {"operation": "read", "dataStructure": "array",
                               "currentAmount": current, "coinValue": coin,
                               "subproblemAmount": sub}
            sb.highlight(DP, "indices", [sub], "highlight")
            sb.highlight(COINS, "indices", [ci], "highlight")
            if sub_value == math.inf:
                verdict = f"Cannot make amount {sub}, so cannot use coin {coin}."
            else:
                verdict = (
                    f"If we use coin {coin}, we need {int(sub_value)} + 1 = "
                    f"{int(sub_value) + 1} total coins."
                )
            sb.explanation = f"Looking up subproblem: dp[{sub}] = {_show(sub_value)}. {verdict}"
            sb.variables = {"currentAmount": current, "currentCoin": coin,
                            "subproblemAmount": sub, "subproblemValue": _show(sub_value)}
            emit()

            if sub_value == math.inf:
                continue

            candidate = sub_value + 1
            best = dp[current]
            better = candidate < best

            sb.begin(StepType.DP_COMPARISON, duration=1500)
            sb.step_context = {"operation": "compare", "dataStructure": "array",
                               "currentAmount": current, "coinValue": coin,
                               "comparisonValues": [_show(best), int(candidate)]}
            sb.highlight(DP, "indices", [current], "compare")
            sb.highlight(COINS, "indices", [ci], "highlight")
            if better:
                verdict = f"New option is better! Update dp[{current}] = {int(candidate)}"
            else:
                verdict = "Current option is better, no update needed."
            sb.explanation = (
                f"Comparing options: current minimum = {_show(best)}, using coin {coin} = "
                f"{int(candidate)}. {verdict}"
            )
            sb.variables = {"currentAmount": current, "currentCoin": coin,
                            "currentMin": _show(best), "newOption": int(candidate),
                            "willUpdate": better}
            emit()

            if not better:
                continue

            dp[current] = candidate
            path[current] = coin
            sb.begin(StepType.DP_TABLE_UPDATE, duration=1200)
            sb.step_context = {"operation": "write", "dataStructure": "array",
                               "currentAmount": current, "coinValue": coin, "pathCoin": coin}
            sb.highlight(DP, "indices", [current], "swap")
            sb.highlight(PATH, "indices", [current], "swap")
            sb.highlight(COINS, "indices", [ci], "match")
            sb.explanation = (
                f"Updated! dp[{current}] = {int(candidate)}, path[{current}] = {coin}. "
                f"Found better solution using coin {coin}."
            )
            sb.variables = {
                "currentAmount": current, "newValue": int(candidate), "coinUsed": coin,
                "improvement": INF_LABEL if best == math.inf else int(best - candidate),
            }
            emit()

    final = dp[amount]
    if final == math.inf:
        sb.begin(StepType.DP_NO_SOLUTION, duration=2000)
        sb.step_context = {"operation": "return_value", "dataStructure": "array"}
        sb.highlight(DP, "indices", [amount], "mismatch")
        sb.explanation = (
            f"No solution exists! Cannot make amount {amount} with the given coins "
            f"[{', '.join(str(c) for c in sorted_coins)}]."
        )
        sb.variables = {"targetAmount": amount, "finalResult": "No solution",
                        "canMakeAmount": False}
        emit()
        return steps

    sb.begin(StepType.DP_OPTIMAL_SOLUTION_FOUND, duration=1500)
    sb.step_context = {"operation": "read", "dataStructure": "array"}
    sb.highlight(DP, "indices", [amount], "match")
    sb.explanation = (
        f"Optimal solution found! Minimum {int(final)} coins needed for amount {amount}. "
        "Now reconstructing the path..."
    )
    sb.variables = {"targetAmount": amount, "minCoinsNeeded": int(final), "canMakeAmount": True}
    emit()

    used: List[int] = []
    remaining = amount
    while remaining > 0:
        coin = path[remaining]
        used.append(coin)
        sb.begin(StepType.DP_PATH_RECONSTRUCTION, duration=1200)
        sb.step_context = {"operation": "read", "dataStructure": "array",
                           "currentAmount": remaining, "pathCoin": coin}
        sb.highlight(DP, "indices", [remaining], "active")
        sb.highlight(PATH, "indices", [remaining], "highlight")
        sb.highlight(COINS, "indices", [sorted_coins.index(coin)], "match")
        sb.explanation = (
            f"Path reconstruction: For amount {remaining}, we used coin {coin}. "
            f"Next, check amount {remaining - coin}."
        )
        sb.variables = {"currentAmount": remaining, "coinUsed": coin,
                        "nextAmount": remaining - coin,
                        "pathSoFar": ", ".join(str(c) for c in used)}
        emit()
        remaining -= coin

    sb.begin(StepType.RETURN, duration=2500)
    sb.step_context = {"operation": "return_value", "dataStructure": "array"}
    sb.highlight(DP, "indices", [amount], "match")
    sb.highlight(COINS, "indices", [sorted_coins.index(c) for c in used], "match")
    sb.explanation = (
        f"Complete! Minimum {int(final)} coins needed: [{', '.join(str(c) for c in used)}]. "
        f"Total value: {sum(used)} = {amount}."
    )
    sb.variables = {"targetAmount": amount, "minCoinsNeeded": int(final),
                    "optimalCoins": ", ".join(str(c) for c in used),
                    "coinsUsed": list(used), "totalValue": sum(used),
                    "solutionFound": True}
    emit()
    return steps
