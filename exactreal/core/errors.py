"""Exception hierarchy for constructive real arithmetic."""


class ExactRealError(Exception):
    """Base class for all errors raised by exactreal."""


class PrecisionOverflowError(ExactRealError, OverflowError):
    """A precision exponent came too close to overflowing its fixed width.

    Usually the result of dividing by a value indistinguishable from zero,
    or of asking for an absurdly fine approximation.
    """

    def __init__(self, precision=None):
        self.precision = precision
        if precision is None:
            msg = "precision exponent overflow"
        else:
            msg = f"precision exponent {precision} is too close to overflow"
        super().__init__(msg)


class CancelledError(ExactRealError):
    """Evaluation was aborted through a cancellation token."""


class DomainError(ExactRealError, ValueError):
    """Argument outside the domain of the requested operation."""
