"""
Constants for dataviews.

Re-exports the package defaults from ``defaults``.
"""

from dataviews.constants.defaults import (
    OBS_AXIS,
    DEFAULT_BATCHSIZE,
    DEFAULT_PARTIAL,
    DEFAULT_SHUFFLE,
    DEFAULT_PARALLEL,
    DEFAULT_PREFETCH,
    DEFAULT_SPLIT_AT,
    DEFAULT_KFOLDS,
    SPLIT_SUM_TOLERANCE,
)

__all__ = [
    "OBS_AXIS",
    "DEFAULT_BATCHSIZE",
    "DEFAULT_PARTIAL",
    "DEFAULT_SHUFFLE",
    "DEFAULT_PARALLEL",
    "DEFAULT_PREFETCH",
    "DEFAULT_SPLIT_AT",
    "DEFAULT_KFOLDS",
    "SPLIT_SUM_TOLERANCE",
]
