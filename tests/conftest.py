"""Pytest configuration file with shared fixtures for NormDiffKit tests."""

import numpy as np
import pytest

from normdiffkit.sampling import get_rng

__all__ = ["rng", "float_dtype"]


@pytest.fixture
def rng() -> np.random.Generator:
    """Returns a deterministically seeded generator owned by the test."""
    return get_rng(seed=12345)


@pytest.fixture(params=[np.float32, np.float64], ids=["float32", "float64"])
def float_dtype(request):
    """Parametrizes a test over single and double precision."""
    return request.param
