"""Scans forward-difference errors of the prescaled squared norm.

The buffer holds ``x_i = (i + 1) / gamma``, so the unscaled first component
is ``1`` and the exact first gradient component is ``2``. For every step
``h = 10**-k`` and every problem size ``n = 1, 10, 100, ...`` up to the
buffer capacity, the scan measures

    delta = gamma**2 * [f(x + h * e_1 / gamma) - f(x)]

and reports ``delta / h - 2``. The scan is an exhaustive trace: every
evaluated ``(k, n)`` pair produces one :class:`ScanRecord`.

Termination:
    * ``h`` itself rounds to zero: a ``"step_underflow"`` record ends the scan.
    * ``delta == 0`` ends the sweep over ``n`` for the current ``k`` with a
      ``"difference_underflow"`` record. When this happens at ``n == 1`` the
      whole scan ends, since no smaller problem exists. For larger ``n`` the
      scan moves on to the next ``k``.

Examples:
---------
>>> from normdiffkit.scan import format_record, scan_difference_quotients
>>> first = next(scan_difference_quotients())
>>> format_record(first)
'k: 0 n: 1 err 1.000000'
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import DTypeLike

from normdiffkit.logger import normdiffkit_logger
from normdiffkit.norm import squared_norm
from normdiffkit.utils.types import Array, Summation
from normdiffkit.utils.validate import (
    resolve_float_dtype,
    validate_gamma,
    validate_summation,
)

__all__ = [
    "ScanConfig",
    "ScanRecord",
    "make_scaled_buffer",
    "step_sizes",
    "problem_sizes",
    "scaled_difference",
    "scan_difference_quotients",
    "format_record",
    "best_approximations",
]

ERROR = "error"
DIFFERENCE_UNDERFLOW = "difference_underflow"
STEP_UNDERFLOW = "step_underflow"


class ScanConfig:
    """Configuration for :func:`scan_difference_quotients`."""

    def __init__(
        self,
        dtype: DTypeLike = np.float64,
        gamma: float = 100.0,
        capacity: int = 1024,
        exact: float = 2.0,
        summation: Summation = "forward",
    ):
        """Initialize configuration.

        Args:
            dtype:
                Working precision of the buffer and of every evaluation.
            gamma:
                Prescaling factor. The buffer holds ``(i + 1) / gamma`` and
                differences are multiplied by ``gamma**2``. Use ``1.0`` to
                switch prescaling off.
            capacity:
                Size of the preallocated buffer. Problem sizes run over the
                powers of ten not exceeding it.
            exact:
                Analytic first gradient component the quotient is compared to.
            summation:
                Accumulation order passed to
                :func:`normdiffkit.norm.squared_norm`.
        """
        self.dtype = resolve_float_dtype(dtype)
        self.gamma = validate_gamma(gamma)
        if int(capacity) < 1:
            raise ValueError(f"capacity must be at least 1; got {capacity}.")
        self.capacity = int(capacity)
        self.exact = float(exact)
        self.summation = validate_summation(summation)

        if self.capacity < 10:
            normdiffkit_logger.warning(
                "capacity=%d restricts the scan to n=1.", self.capacity
            )


@dataclass(frozen=True)
class ScanRecord:
    """One line of the scan trace.

    ``kind`` is ``"error"``, ``"difference_underflow"`` or ``"step_underflow"``.
    ``n`` is ``None`` for a step underflow and ``err`` is set only for errors.
    """

    kind: str
    k: int
    n: Optional[int] = None
    err: Optional[float] = None


def make_scaled_buffer(
    capacity: int,
    gamma: float,
    dtype: DTypeLike = np.float64,
) -> Array:
    """Returns a buffer of ``capacity`` values ``x_i = (i + 1) / gamma``."""
    dt = resolve_float_dtype(dtype)
    g = dt.type(validate_gamma(gamma))
    return np.arange(1, capacity + 1, dtype=dt) / g


def step_sizes(dtype: DTypeLike = np.float64) -> Iterator[tuple[int, np.floating]]:
    """Yields ``(k, 10**-k)`` in ``dtype`` up to and including the first zero step."""
    dt = resolve_float_dtype(dtype)
    k = 0
    while True:
        h = dt.type(10.0 ** -k)
        yield k, h
        if h == 0.0:
            return
        k += 1


def problem_sizes(capacity: int) -> Iterator[int]:
    """Yields ``1, 10, 100, ...`` while not exceeding ``capacity``."""
    n = 1
    while n <= capacity:
        yield n
        n *= 10


def scaled_difference(
    x: Array,
    n: int,
    h: np.floating,
    gamma: float,
    summation: Summation = "forward",
) -> np.floating:
    """Returns ``gamma**2 * [f(x + h * e_1 / gamma) - f(x)]`` in the dtype of ``x``.

    ``x[0]`` is set to ``(1 + h) / gamma`` for the perturbed evaluation and
    then reset to ``1 / gamma``, which is where it is left afterwards.
    """
    dt = x.dtype
    g = dt.type(gamma)
    one = dt.type(1.0)

    x[0] = (one + dt.type(h)) / g
    f_plus = squared_norm(x, n, dt, summation)
    x[0] = one / g
    f_base = squared_norm(x, n, dt, summation)

    return dt.type((f_plus - f_base) * g * g)


def scan_difference_quotients(config: ScanConfig | None = None) -> Iterator[ScanRecord]:
    """Runs the finite-difference error scan and yields one record per step.

    Args:
        config: Scan settings. Defaults to ``ScanConfig()`` (double precision,
            ``gamma = 100``, capacity 1024).

    Yields:
        :class:`ScanRecord` entries in the order they are evaluated.
    """
    if config is None:
        config = ScanConfig()

    x = make_scaled_buffer(config.capacity, config.gamma, config.dtype)
    exact = config.dtype.type(config.exact)

    for k, h in step_sizes(config.dtype):
        if h == 0.0:
            normdiffkit_logger.info("Step 10^-%d underflows in %s.", k, config.dtype)
            yield ScanRecord(STEP_UNDERFLOW, k)
            return

        for n in problem_sizes(config.capacity):
            delta = scaled_difference(x, n, h, config.gamma, config.summation)
            if delta == 0.0:
                yield ScanRecord(DIFFERENCE_UNDERFLOW, k, n)
                if n == 1:
                    normdiffkit_logger.info(
                        "Difference underflows at k=%d for n=1; stopping scan.", k
                    )
                    return
                break
            yield ScanRecord(ERROR, k, n, float(delta / h - exact))


def format_record(record: ScanRecord) -> str:
    """Returns the printed line for a scan record."""
    if record.kind == ERROR:
        return f"k: {record.k} n: {record.n} err {record.err:.6f}"
    if record.kind == DIFFERENCE_UNDERFLOW:
        return f"difference underflown for k: {record.k} n: {record.n}"
    if record.kind == STEP_UNDERFLOW:
        return f"underflow for 10^-{record.k}"
    raise ValueError(f"Unknown record kind {record.kind!r}.")


def best_approximations(records: Iterable[ScanRecord]) -> dict[int, ScanRecord]:
    """Returns, per problem size, the error record with the smallest ``|err|``.

    Earlier steps win ties. Underflow records are ignored.
    """
    best: dict[int, ScanRecord] = {}
    for record in records:
        if record.kind != ERROR:
            continue
        current = best.get(record.n)
        if current is None or abs(record.err) < abs(current.err):
            best[record.n] = record
    return best
