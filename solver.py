"""
Exhaustive search for the best reachable answer in a numbers round.
"""

from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from arithmetic import compute
from config import ADD, DIV, MUL, OPERATORS, SUB


def _candidates(a: int, b: int):
    """Every legal (left, op, right, result) for an unordered pair."""
    orders = [(a, b)] if a == b else [(a, b), (b, a)]
    for swapped, (left, right) in enumerate(orders):
        for op in OPERATORS:
            if swapped and op in (ADD, MUL):
                continue  # commutative, already tried
            result = compute(left, op, right)
            if result is None:
                continue
            # x*1, x/1 and x-0 style steps never lead anywhere new
            if op in (MUL, DIV) and right == 1:
                continue
            if op == SUB and right == 0:
                continue
            yield left, op, right, result


def best_solution(pool: Sequence[int], target: int) -> Tuple[Optional[int], List[str]]:
    """
    Search every sequence of legal operations over `pool` and return the value
    closest to `target` together with the steps that produce it.
    Pool entries on their own count as reachable. Returns (None, []) for an
    empty pool.
    """
    best = {"value": None, "steps": []}
    seen = set()

    def consider(value: int, steps: List[str]) -> bool:
        if best["value"] is None or abs(target - value) < abs(target - best["value"]):
            best["value"] = value
            best["steps"] = steps[:]
        return best["value"] == target

    def search(numbers: Tuple[int, ...], steps: List[str]) -> bool:
        key = tuple(sorted(numbers))
        if key in seen:
            return False
        seen.add(key)

        for i, j in combinations(range(len(numbers)), 2):
            rest = [n for k, n in enumerate(numbers) if k not in (i, j)]
            for left, op, right, result in _candidates(numbers[i], numbers[j]):
                steps.append(f"{left} {op} {right} = {result}")
                if consider(result, steps):
                    return True
                if rest and search(tuple(rest + [result]), steps):
                    return True
                steps.pop()
        return False

    for n in pool:
        if consider(n, []):
            return best["value"], best["steps"]
    search(tuple(pool), [])
    return best["value"], best["steps"]
