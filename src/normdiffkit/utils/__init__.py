"""Utility functions for NormDiffKit package."""

from .validate import (
    resolve_float_dtype,
    validate_buffer,
    validate_count,
    validate_gamma,
    validate_summation,
)

__all__ = [
    "resolve_float_dtype",
    "validate_buffer",
    "validate_count",
    "validate_gamma",
    "validate_summation",
]
