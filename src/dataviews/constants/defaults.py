"""
Default Settings for Views, Splits and Batch Iteration.

This module defines the defaults shared by the splitting utilities and the
DataLoader. Keeping them in one place means the keyword defaults of
``splitobs``, ``kfolds`` and ``DataLoader`` cannot drift apart.

Observation Layout:
    | Container          | Observation axis           |
    |--------------------|----------------------------|
    | numpy.ndarray      | last axis (OBS_AXIS = -1)  |
    | pandas.DataFrame   | rows                       |
    | pandas.Series      | rows                       |
    | Sequence           | positional                 |
"""

from typing import Final

# =============================================================================
# Observation Layout
# =============================================================================

OBS_AXIS: Final[int] = -1
"""Axis of a numpy array that indexes observations."""

# =============================================================================
# DataLoader Defaults
# =============================================================================

DEFAULT_BATCHSIZE: Final[int] = 1
"""Observations per mini-batch."""

DEFAULT_PARTIAL: Final[bool] = True
"""Keep a final batch that is shorter than the batch size."""

DEFAULT_SHUFFLE: Final[bool] = False
"""Draw a fresh permutation at the start of every pass."""

DEFAULT_PARALLEL: Final[bool] = True
"""Fetch upcoming batches on a worker pool while the current one is consumed."""

DEFAULT_PREFETCH: Final[int] = 2
"""
Maximum number of batches fetched ahead of the consumer.

Bounds memory: at most this many collated batches exist beyond the one
currently held by the caller.
"""

# =============================================================================
# Splitting Defaults
# =============================================================================

DEFAULT_SPLIT_AT: Final[float] = 0.8
"""Fraction of observations in the first split of ``splitobs``."""

DEFAULT_KFOLDS: Final[int] = 5
"""Number of folds produced by ``kfolds``."""

SPLIT_SUM_TOLERANCE: Final[float] = 1e-9
"""Slack allowed when checking that split fractions sum to at most 1."""
