"""Random initialisation of sample vectors.

The generator is never global: :func:`get_rng` hands a fresh
``numpy.random.Generator`` to the caller, who owns it and passes it
explicitly to :func:`init_data_uniform`.

Examples:
---------
>>> import numpy as np
>>> from normdiffkit.sampling import get_rng, init_data_uniform
>>> rng = get_rng(seed=7)
>>> x = np.zeros(8, dtype=np.float32)
>>> init_data_uniform(x, rng, x.size, 1.0)
>>> bool(np.all(np.abs(x) <= 1.0))
True
"""

from __future__ import annotations

import math
import time

import numpy as np

from normdiffkit.logger import normdiffkit_logger
from normdiffkit.utils.validate import validate_buffer, validate_count

__all__ = [
    "seed_from_time_of_day",
    "get_rng",
    "init_data_uniform",
]


def seed_from_time_of_day() -> int:
    """Returns the microsecond part of the current wall-clock time."""
    return (time.time_ns() // 1_000) % 1_000_000


def get_rng(seed: int | None = None) -> np.random.Generator:
    """Creates a random generator owned by the caller.

    Args:
        seed: Seed for the generator. If ``None``, the microsecond part of the
            time of day is used, so consecutive runs draw different samples.

    Returns:
        A new ``numpy.random.Generator``.
    """
    if seed is None:
        seed = seed_from_time_of_day()
    rng = np.random.default_rng(seed)
    normdiffkit_logger.debug("Allocated random generator with seed %d.", seed)
    return rng


def init_data_uniform(
    data: np.ndarray,
    rng: np.random.Generator,
    nelem: int,
    a: float,
) -> None:
    """Fills ``data[:nelem]`` in place with uniform draws on ``[-a, a]``.

    Draws are made in double precision and cast to the dtype of ``data``.
    Elements beyond ``nelem`` are left untouched.

    Args:
        data: One-dimensional floating-point buffer to initialise.
        rng: Generator used to draw the samples. Its state advances.
        nelem: Number of leading elements of ``data`` to fill.
        a: Half-width of the uniform distribution.

    Raises:
        TypeError: If ``data`` is not a floating-point ndarray.
        ValueError: If ``data`` is not 1D, ``nelem`` exceeds its size, or
            ``a`` is negative or not finite.
    """
    validate_buffer(data)
    nelem = validate_count(nelem, data.size, name="nelem")
    a = float(a)
    if not math.isfinite(a) or a < 0.0:
        raise ValueError(f"a must be finite and non-negative; got {a}.")

    data[:nelem] = rng.uniform(-a, a, size=nelem)
