"""Bridges between constructive reals and native numeric types."""

from .ieee_cr import from_ieee, to_ieee, to_ieee32, to_int
from .numpy_bridge import from_numpy, to_numpy

__all__ = [
    "from_ieee",
    "to_ieee",
    "to_ieee32",
    "to_int",
    "from_numpy",
    "to_numpy",
]
