"""Squared norm of uniformly sampled data in single and double precision.

Run with:
    normdiffkit-sampling

or:
    python -m normdiffkit.experiments.norm_sampling

Prints two lines: the ``float32`` and the ``float64`` squared norm of the
first ``N_SUMMED`` components of vectors drawn uniformly from ``[-1, 1]``.
"""

from __future__ import annotations

import numpy as np

from normdiffkit.norm import squared_norm
from normdiffkit.sampling import get_rng, init_data_uniform

CAPACITY = 2048
N_SUMMED = 12
HALF_WIDTH = 1.0


def main() -> None:
    """Samples both buffers from one generator and prints their norms."""
    x_f = np.empty(CAPACITY, dtype=np.float32)
    x = np.empty(CAPACITY, dtype=np.float64)

    rng = get_rng()

    init_data_uniform(x_f, rng, x_f.size, HALF_WIDTH)
    init_data_uniform(x, rng, x.size, HALF_WIDTH)

    print(f"{squared_norm(x_f, N_SUMMED):.5f}")
    print(f"{squared_norm(x, N_SUMMED):.5f}")


if __name__ == "__main__":
    main()
