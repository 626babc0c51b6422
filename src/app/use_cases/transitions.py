"""Checks shared by the repair request and maintenance project transitions"""

from enum import Enum
from typing import Optional

from libs.result import Error
from src.domain.errors import ErrorCode


def check_transition(current: Enum, new: Enum, allowed: bool, force: bool) -> Optional[Error]:
    """
    Error for a disallowed status change, None when it may proceed.

    Moving to the current status is a no-op unless forced, in which case a
    same-status history entry is written.
    """
    if new == current:
        if force:
            return None
        return Error(
            ErrorCode.NO_OP_TRANSITION,
            f"Status is already {current.value}",
            details={"from": current.value, "to": new.value},
        )
    if not allowed:
        return Error(
            ErrorCode.INVALID_TRANSITION,
            f"Cannot move from {current.value} to {new.value}",
            details={"from": current.value, "to": new.value},
        )
    return None


def version_mismatch(expected: Optional[int], actual: int) -> Optional[Error]:
    if expected is None or expected == actual:
        return None
    return Error(
        ErrorCode.CONCURRENT_MODIFICATION,
        "Record was modified by another request",
        details={"expected_version": expected, "actual_version": actual},
    )
