"""Validation utilities for NormDiffKit."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import DTypeLike

__all__ = [
    "SUMMATION_ORDERS",
    "resolve_float_dtype",
    "validate_buffer",
    "validate_count",
    "validate_summation",
    "validate_gamma",
]

SUMMATION_ORDERS = ("forward", "reverse", "pairwise")


def resolve_float_dtype(dtype: DTypeLike) -> np.dtype:
    """Returns ``dtype`` as a NumPy dtype after checking it is a float type.

    Args:
        dtype: Anything ``numpy.dtype`` accepts, e.g. ``np.float32`` or ``"float64"``.

    Returns:
        The resolved ``numpy.dtype``.

    Raises:
        TypeError: If ``dtype`` is not a real floating-point type.
    """
    resolved = np.dtype(dtype)
    if not np.issubdtype(resolved, np.floating):
        raise TypeError(
            f"dtype must be a real floating-point type; got {resolved}."
        )
    return resolved


def validate_buffer(data: np.ndarray) -> np.ndarray:
    """Checks that ``data`` is a one-dimensional floating-point ndarray.

    Raises:
        TypeError: If ``data`` is not an ndarray or does not hold floats.
        ValueError: If ``data`` is not one-dimensional.
    """
    if not isinstance(data, np.ndarray):
        raise TypeError(
            f"data must be a numpy.ndarray; got {type(data).__name__}."
        )
    if not np.issubdtype(data.dtype, np.floating):
        raise TypeError(
            f"data must hold floating-point values; got dtype {data.dtype}."
        )
    if data.ndim != 1:
        raise ValueError(f"data must be 1D; got shape {data.shape}.")
    return data


def validate_count(n: int, size: int, name: str = "n") -> int:
    """Checks that ``0 <= n <= size`` and returns ``n`` as a Python int.

    Raises:
        TypeError: If ``n`` is not an integer.
        ValueError: If ``n`` is negative or larger than ``size``.
    """
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        raise TypeError(f"{name} must be an integer; got {type(n).__name__}.")
    n = int(n)
    if n < 0 or n > size:
        raise ValueError(
            f"{name}={n} out of range for a buffer of size {size}."
        )
    return n


def validate_summation(summation: str) -> str:
    """Checks that ``summation`` names a supported accumulation order."""
    if summation not in SUMMATION_ORDERS:
        raise ValueError(
            f"Unknown summation order {summation!r}; "
            f"expected one of {SUMMATION_ORDERS}."
        )
    return summation


def validate_gamma(gamma: float) -> float:
    """Checks that the scale factor is finite and non-zero."""
    gamma = float(gamma)
    if not math.isfinite(gamma) or gamma == 0.0:
        raise ValueError(f"gamma must be finite and non-zero; got {gamma}.")
    return gamma
