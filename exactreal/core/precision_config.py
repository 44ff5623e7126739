"""
Global precision configuration for exactreal.

This module holds the tunable constants of the evaluation machinery and the
guard that keeps precision exponents far away from overflow. Precision
exponents are plain Python integers, but they are checked against a fixed
width so that a runaway request fails loudly instead of silently asking for
an astronomically fine approximation.
"""

from typing import Any, Dict

from .errors import PrecisionOverflowError


class PrecisionConfig:
    """
    Global evaluation configuration.

    All settings are class-level. ``evaluation_context`` changes them
    temporarily.
    """

    # Width of the precision guard; exponents must satisfy
    # -2**bits <= p < 2**bits.
    _precision_bits: int = 28

    # Bounded re-evaluation: never evaluate coarser than this, and refine in
    # steps of this many bits.
    _slow_max_prec: int = -64
    _slow_prec_step: int = 32

    # Square root switches to a Newton step above this many result bits.
    _sqrt_fp_prec: int = 50
    _sqrt_fp_op_prec: int = 60

    # Coarse probe used to fix the sign of a select() selector.
    _select_probe_prec: int = -20

    # First tolerance tried by exact compare/signum; doubled every round.
    _compare_start_prec: int = -20

    _SETTINGS = (
        "precision_bits",
        "slow_max_prec",
        "slow_prec_step",
        "sqrt_fp_prec",
        "sqrt_fp_op_prec",
        "select_probe_prec",
        "compare_start_prec",
    )

    @classmethod
    def get_precision_bits(cls) -> int:
        """Get the width of the precision guard in bits."""
        return cls._precision_bits

    @classmethod
    def set_precision_bits(cls, bits: int) -> None:
        """
        Set the width of the precision guard.

        Args:
            bits: Number of magnitude bits an exponent may use (>= 8)

        Raises:
            ValueError: If bits is not an integer >= 8
        """
        if not isinstance(bits, int) or bits < 8:
            raise ValueError(f"Invalid precision width: {bits}")
        cls._precision_bits = bits

    @classmethod
    def get_slow_max_prec(cls) -> int:
        return cls._slow_max_prec

    @classmethod
    def set_slow_max_prec(cls, prec: int) -> None:
        if not isinstance(prec, int) or prec > 0:
            raise ValueError(f"Coarsest re-evaluation precision must be <= 0: {prec}")
        cls._slow_max_prec = prec

    @classmethod
    def get_slow_prec_step(cls) -> int:
        return cls._slow_prec_step

    @classmethod
    def set_slow_prec_step(cls, step: int) -> None:
        """
        Set the re-evaluation lattice step.

        Raises:
            ValueError: If step is not a positive power of two
        """
        if not isinstance(step, int) or step <= 0 or step & (step - 1):
            raise ValueError(f"Re-evaluation step must be a power of two: {step}")
        cls._slow_prec_step = step

    @classmethod
    def get_sqrt_fp_prec(cls) -> int:
        return cls._sqrt_fp_prec

    @classmethod
    def set_sqrt_fp_prec(cls, bits: int) -> None:
        if not isinstance(bits, int) or not 1 <= bits <= 52:
            raise ValueError(f"Floating point sqrt precision must be in [1, 52]: {bits}")
        cls._sqrt_fp_prec = bits

    @classmethod
    def get_sqrt_fp_op_prec(cls) -> int:
        return cls._sqrt_fp_op_prec

    @classmethod
    def set_sqrt_fp_op_prec(cls, bits: int) -> None:
        if not isinstance(bits, int) or not 54 <= bits <= 500:
            raise ValueError(f"Floating point sqrt operand bits must be in [54, 500]: {bits}")
        cls._sqrt_fp_op_prec = bits

    @classmethod
    def get_select_probe_prec(cls) -> int:
        return cls._select_probe_prec

    @classmethod
    def set_select_probe_prec(cls, prec: int) -> None:
        if not isinstance(prec, int) or prec > 0:
            raise ValueError(f"Selector probe precision must be <= 0: {prec}")
        cls._select_probe_prec = prec

    @classmethod
    def get_compare_start_prec(cls) -> int:
        return cls._compare_start_prec

    @classmethod
    def set_compare_start_prec(cls, prec: int) -> None:
        if not isinstance(prec, int) or prec >= 0:
            raise ValueError(f"Starting comparison precision must be < 0: {prec}")
        cls._compare_start_prec = prec

    @classmethod
    def snapshot(cls) -> Dict[str, Any]:
        """Return the current settings as a dict."""
        return {name: getattr(cls, f"_{name}") for name in cls._SETTINGS}

    @classmethod
    def update(cls, **settings: Any) -> None:
        """
        Change several settings at once through their validating setters.

        Raises:
            ValueError: For unknown setting names or invalid values
        """
        for name, value in settings.items():
            if name not in cls._SETTINGS:
                raise ValueError(f"Unknown evaluation setting: {name}")
            getattr(cls, f"set_{name}")(value)


def check_precision(p: int) -> None:
    """
    Fail if a precision exponent is within one arithmetic step of overflow.

    The exponent is viewed as a signed integer four bits wider than the guard
    width; its top four bits must agree (pure sign extension).

    Args:
        p: Precision exponent to check

    Raises:
        PrecisionOverflowError: If ``p`` is out of range
    """
    bits = PrecisionConfig._precision_bits
    high = p >> bits
    if high ^ (p >> (bits + 1)):
        raise PrecisionOverflowError(p)


# Context manager for temporary configuration changes
class evaluation_context:
    """
    Context manager for temporary evaluation settings.

    Example:
        with evaluation_context(slow_prec_step=64):
            # cosines and logarithms refine in 64-bit steps
            x.get_appr(-500)
        # Back to previous settings
    """

    def __init__(self, **settings: Any):
        self.new_settings = settings
        self.old_settings = None

    def __enter__(self):
        self.old_settings = PrecisionConfig.snapshot()
        PrecisionConfig.update(**self.new_settings)
        return self

    def __exit__(self, _exc_type, _exc_val, _exc_tb):
        for name, value in self.old_settings.items():
            setattr(PrecisionConfig, f"_{name}", value)
