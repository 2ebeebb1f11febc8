"""Provides the NormDiffKit experiment building blocks."""

from importlib.metadata import PackageNotFoundError, version

from normdiffkit.norm import (
    exact_gradient_component,
    scaled_squared_norm,
    squared_norm,
)
from normdiffkit.sampling import get_rng, init_data_uniform
from normdiffkit.scan import (
    ScanConfig,
    ScanRecord,
    best_approximations,
    format_record,
    scan_difference_quotients,
)

try:
    __version__ = version("normdiffkit")
except PackageNotFoundError:
    pass

__all__ = [
    "ScanConfig",
    "ScanRecord",
    "best_approximations",
    "exact_gradient_component",
    "format_record",
    "get_rng",
    "init_data_uniform",
    "scaled_squared_norm",
    "scan_difference_quotients",
    "squared_norm",
]
