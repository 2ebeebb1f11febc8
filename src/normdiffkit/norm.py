"""Evaluates the squared norm ``f(x) = sum_i x_i**2`` in a chosen precision.

One generic implementation serves every floating-point dtype, so precision
(not algorithm) is the only thing that changes between a ``float32`` and a
``float64`` evaluation. The default ``"forward"`` order accumulates strictly
left to right without pairwise or compensated summation.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

from normdiffkit.utils.types import Summation
from normdiffkit.utils.validate import (
    resolve_float_dtype,
    validate_count,
    validate_gamma,
    validate_summation,
)

__all__ = [
    "squared_norm",
    "scaled_squared_norm",
    "exact_gradient_component",
]


def squared_norm(
    x: ArrayLike,
    n: int,
    dtype: DTypeLike | None = None,
    summation: Summation = "forward",
) -> np.floating:
    """Returns the sum of squares of the first ``n`` components of ``x``.

    Args:
        x: One-dimensional array-like of values. It is never modified.
        n: Number of leading components to include.
        dtype: Working precision. Defaults to the dtype of ``x`` when it is
            a floating-point array, otherwise ``float64``.
        summation: Accumulation order:

            * ``"forward"``: sequential, first component to last.
            * ``"reverse"``: sequential, last component to first.
            * ``"pairwise"``: NumPy's pairwise reduction.

    Returns:
        The squared norm as a NumPy scalar of the working dtype.

    Raises:
        ValueError: If ``n`` is out of range or ``summation`` is unknown.
        TypeError: If ``dtype`` is not a floating-point type.
    """
    validate_summation(summation)
    arr = np.asarray(x)
    if dtype is None:
        dtype = arr.dtype if np.issubdtype(arr.dtype, np.floating) else np.float64
    dt = resolve_float_dtype(dtype)
    n = validate_count(n, arr.size)

    if n == 0:
        return dt.type(0.0)

    xs = arr.reshape(-1)[:n].astype(dt, copy=False)
    squares = xs * xs

    if summation == "pairwise":
        return dt.type(np.sum(squares, dtype=dt))
    if summation == "reverse":
        squares = squares[::-1]
    # cumsum is a plain running sum; its last entry is the sequential total
    return dt.type(np.cumsum(squares, dtype=dt)[-1])


def scaled_squared_norm(
    x: ArrayLike,
    n: int,
    gamma: float,
    dtype: DTypeLike | None = None,
    summation: Summation = "forward",
) -> np.floating:
    """Returns ``gamma**2 * f(x / gamma)`` over the first ``n`` components.

    Prescaling keeps the squared terms in a convenient range; up to rounding
    the result equals :func:`squared_norm` of the unscaled input.

    Raises:
        ValueError: If ``gamma`` is zero or not finite, or on the same
            conditions as :func:`squared_norm`.
    """
    gamma = validate_gamma(gamma)
    arr = np.asarray(x)
    if dtype is None:
        dtype = arr.dtype if np.issubdtype(arr.dtype, np.floating) else np.float64
    dt = resolve_float_dtype(dtype)
    n = validate_count(n, arr.size)

    g = dt.type(gamma)
    scaled = arr.reshape(-1)[:n].astype(dt) / g
    return dt.type(squared_norm(scaled, n, dt, summation) * g * g)


def exact_gradient_component(x: ArrayLike) -> float:
    """Returns the analytic partial derivative ``2 * x_1`` of the squared norm."""
    arr = np.asarray(x, dtype=float).reshape(-1)
    if arr.size == 0:
        raise ValueError("x must have at least one component.")
    return 2.0 * float(arr[0])
