"""
lookout/utils/best_effort.py

Optional side effects against the remote context (moving the window, hiding the caret, ...).

Contains:
- BestEffortResult: value of the operation, or the error that prevented it
- best_effort: run an operation, logging and capturing driver failures instead of raising
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from lookout.utils.exceptions import DriverOperationError
from lookout.utils.logger import get_logger


logger = get_logger(name=__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BestEffortResult(Generic[T]):
    """Outcome of a best-effort operation."""
    value: T | None = None
    error: DriverOperationError | None = None

    @property
    def ok(self) -> bool:
        """Whether the operation completed."""
        return self.error is None


def best_effort(description: str, operation: Callable[[], T]) -> BestEffortResult[T]:
    """
    Run an operation whose failure must not abort the caller.

    Driver failures are logged as warnings and returned in the result;
    any other exception propagates.

    Args:
        description: Human readable description used in the warning.
        operation: Zero-argument callable performing the side effect.

    Returns:
        BestEffortResult holding either the value or the error.
    """
    try:
        return BestEffortResult(value=operation())
    except DriverOperationError as e:
        logger.warning(f"Warning: {description} failed: {e}")
        return BestEffortResult(error=e)
