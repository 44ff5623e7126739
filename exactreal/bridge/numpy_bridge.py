"""
NumPy bridge for constructive reals.

Arrays of constructive reals are plain NumPy object arrays; this module
converts between them and numeric arrays elementwise.
"""

from typing import Optional, Union, overload

import numpy as np

from ..core import CReal, CancellationToken, DomainError
from .ieee_cr import from_ieee, to_ieee


@overload
def from_numpy(arr: np.ndarray) -> np.ndarray: ...

@overload
def from_numpy(arr: float) -> CReal: ...


def from_numpy(arr: Union[np.ndarray, float]) -> Union[np.ndarray, CReal]:
    """
    Convert a NumPy array or scalar to constructive reals.

    Args:
        arr: Integer or floating point array, or a scalar

    Returns:
        Object array of CReal with the same shape, or a CReal for scalars

    Raises:
        DomainError: If any element is NaN or infinite
        TypeError: For non-numeric dtypes
    """
    if np.isscalar(arr):
        return from_ieee(arr.item() if isinstance(arr, np.generic) else arr)

    arr = np.asarray(arr)
    if arr.dtype.kind not in "iuf":
        raise TypeError(f"Unsupported dtype for from_numpy: {arr.dtype}")
    if arr.dtype.kind == "f" and not np.all(np.isfinite(arr)):
        raise DomainError("array contains NaN or infinite values")

    out = np.empty(arr.shape, dtype=object)
    for index, value in np.ndenumerate(arr):
        out[index] = from_ieee(value.item())
    return out


def to_numpy(values: Union[np.ndarray, CReal], dtype=np.float64,
             token: Optional[CancellationToken] = None) -> Union[np.ndarray, float]:
    """
    Approximate constructive reals as a floating point array.

    Each element is evaluated independently to within one ulp of double
    precision, then cast to ``dtype``.

    Args:
        values: Object array of CReal, or a single CReal
        dtype: Floating point dtype of the result
        token: Cancellation token shared by all element evaluations
    """
    if isinstance(values, CReal):
        return to_ieee(values, token)

    values = np.asarray(values, dtype=object)
    out = np.empty(values.shape, dtype=np.float64)
    for index, value in np.ndenumerate(values):
        if not isinstance(value, CReal):
            raise TypeError(f"Element {index} is not a constructive real: {type(value).__name__}")
        out[index] = to_ieee(value, token)
    with np.errstate(over="ignore"):
        return out.astype(dtype)
