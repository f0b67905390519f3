"""
DataLoader configuration.

A plain dataclass validated on construction so an invalid setting fails
before the first batch is fetched rather than in the middle of training.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from dataviews.constants import (
    DEFAULT_BATCHSIZE,
    DEFAULT_PARALLEL,
    DEFAULT_PARTIAL,
    DEFAULT_PREFETCH,
    DEFAULT_SHUFFLE,
)


def _check_positive(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class LoaderConfig:
    """
    Settings for mini-batch iteration.

    Attributes:
        batchsize: Observations per batch
        partial: Keep a final batch shorter than ``batchsize``
        shuffle: Draw a fresh permutation at the start of every pass
        parallel: Fetch upcoming batches on a thread pool
        prefetch: Maximum number of batches fetched ahead of the consumer
        num_workers: Thread pool size (None: same as ``prefetch``)
    """
    batchsize: int = DEFAULT_BATCHSIZE
    partial: bool = DEFAULT_PARTIAL
    shuffle: bool = DEFAULT_SHUFFLE
    parallel: bool = DEFAULT_PARALLEL
    prefetch: int = DEFAULT_PREFETCH
    num_workers: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        _check_positive("batchsize", self.batchsize)
        _check_positive("prefetch", self.prefetch)
        if self.num_workers is not None:
            _check_positive("num_workers", self.num_workers)

    @property
    def workers(self) -> int:
        """Effective thread pool size."""
        return self.num_workers if self.num_workers is not None else self.prefetch
