"""
Arithmetic engine for numbers rounds.

A player's turn works on a WorkingSet: one token per pool number, shrinking
by two and growing by one for every applied operation. Selection order is
operand -> operator -> operand; the first operand is fixed once chosen and
can only be changed by clearing the selection.
"""

import logging
from typing import Iterable, Optional

from config import (
    ADD,
    DIV,
    EMPTY_SUBMISSION,
    ILLEGAL_SELECTION,
    INVALID_OPERATION,
    MUL,
    OPERATOR_ALIASES,
    OPERATORS,
    SUB,
)
from models import ActionResult, NumberToken, WorkingSet

logger = logging.getLogger(__name__)


def normalize_operator(op: str) -> str:
    op = OPERATOR_ALIASES.get(op, op)
    if op not in OPERATORS:
        raise ValueError(f"Unknown operator {op!r}")
    return op


def compute(a: int, op: str, b: int) -> Optional[int]:
    """
    Result of `a op b`, or None when the operation is not allowed
    (division by zero or a non-integer quotient).
    """
    op = normalize_operator(op)
    if op == ADD:
        return a + b
    if op == SUB:
        return a - b
    if op == MUL:
        return a * b
    if b == 0 or a % b != 0:
        return None
    return a // b


def _new_token(work: WorkingSet, value: int) -> NumberToken:
    token = NumberToken(id=f"n{work.next_id}", value=value)
    work.next_id += 1
    return token


def clear_selection(work: WorkingSet) -> None:
    """Drop the in-progress operands and operator; tokens and log are kept."""
    work.first = None
    work.operator = None
    work.second = None


def reset_working_set(work: WorkingSet, pool: Iterable[int]) -> None:
    """Start over from the round pool: fresh tokens, no selection, empty log."""
    clear_selection(work)
    work.tokens = [_new_token(work, value) for value in pool]
    work.log = []
    work.last_result = None


def select_number(work: WorkingSet, token_id: str) -> Optional[str]:
    """Pick the first or second operand. Returns the rejection kind, if any."""
    if work.token(token_id) is None:
        return ILLEGAL_SELECTION
    if work.first is None:
        work.first = token_id
        return None
    if work.operator is None or work.second is not None or token_id == work.first:
        return ILLEGAL_SELECTION
    work.second = token_id
    return None


def select_operator(work: WorkingSet, op: str) -> Optional[str]:
    op = OPERATOR_ALIASES.get(op, op)
    if op not in OPERATORS or work.first is None or work.operator is not None:
        return ILLEGAL_SELECTION
    work.operator = op
    return None


def apply_operation(work: WorkingSet, target: Optional[int] = None) -> ActionResult:
    """
    Combine the selected operands. On success both operand tokens are replaced
    by one result token and the step is appended to the log; on failure
    nothing changes.
    """
    if work.first is None and work.operator is None and work.second is None:
        return ActionResult(ok=False, error=EMPTY_SUBMISSION)
    if work.first is None or work.operator is None or work.second is None:
        return ActionResult(ok=False, error=ILLEGAL_SELECTION)

    left = work.token(work.first)
    right = work.token(work.second)
    if left is None or right is None:
        return ActionResult(ok=False, error=ILLEGAL_SELECTION)

    result = compute(left.value, work.operator, right.value)
    if result is None:
        logger.debug("Rejected %s %s %s", left.value, work.operator, right.value)
        return ActionResult(ok=False, error=INVALID_OPERATION)

    work.tokens = [t for t in work.tokens if t.id not in (left.id, right.id)]
    work.tokens.append(_new_token(work, result))
    work.log.append(f"{left.value} {work.operator} {right.value} = {result}")
    work.last_result = result
    clear_selection(work)

    return ActionResult(ok=True, value=result, exact=target is not None and result == target)


def perform(work: WorkingSet, first_id: str, op: str, second_id: str, target: Optional[int] = None) -> ActionResult:
    """Select both operands and the operator, then apply, as a single step."""
    saved = (work.first, work.operator, work.second)
    clear_selection(work)
    steps = [
        lambda: select_number(work, first_id),
        lambda: select_operator(work, op),
        lambda: select_number(work, second_id),
    ]
    for step in steps:
        error = step()
        if error is not None:
            work.first, work.operator, work.second = saved
            return ActionResult(ok=False, error=error)
    result = apply_operation(work, target)
    if not result.ok:
        work.first, work.operator, work.second = saved
    return result
