"""
Cooperative cancellation for long-running evaluations.

A token is passed explicitly through every evaluation call. Loops that may
run for a long time (series summation, iterative MSD refinement, exact
comparison) poll it once per iteration.
"""

import logging
import threading
from typing import Optional

from .errors import CancelledError

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    A cancellation signal shared between a caller and an evaluation.

    Once cancelled, the token stays cancelled until ``reset()`` is called;
    every evaluation attempted in the meantime fails with CancelledError.
    """

    __slots__ = ("_event",)

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request that evaluations using this token stop."""
        self._event.set()

    def reset(self) -> None:
        """Clear the signal so the token can be used again."""
        self._event.clear()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def check(self) -> None:
        """
        Raise CancelledError if cancellation has been requested.

        Raises:
            CancelledError: If the token is set
        """
        if self._event.is_set():
            logger.debug("evaluation cancelled")
            raise CancelledError("evaluation cancelled")

    def __repr__(self) -> str:
        state = "cancelled" if self.is_cancelled else "active"
        return f"CancellationToken({state})"


class _NeverCancelled(CancellationToken):
    """Token used when the caller does not supply one."""

    __slots__ = ()

    def cancel(self) -> None:
        raise TypeError("the default token cannot be cancelled")

    def check(self) -> None:
        pass


NEVER_CANCELLED = _NeverCancelled()


def resolve_token(token: Optional[CancellationToken]) -> CancellationToken:
    """Return ``token``, or the never-cancelled token for None."""
    return NEVER_CANCELLED if token is None else token
