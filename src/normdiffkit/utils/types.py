"""Shared typing aliases for NormDiffKit."""

from __future__ import annotations

from typing import Literal, TypeAlias

import numpy as np
from numpy.typing import NDArray

Array: TypeAlias = NDArray[np.floating]
Summation: TypeAlias = Literal["forward", "reverse", "pairwise"]
