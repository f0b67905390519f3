"""
Mini-batch loading for training loops.

Usage:
    >>> from dataviews.loading import DataLoader
    >>> loader = DataLoader(zipobs(x, y), batchsize=32, shuffle=True, rng=0)
    >>> for epoch in range(10):
    ...     for xb, yb in loader:
    ...         train_step(xb, yb)
"""

from dataviews.loading.config import LoaderConfig

from dataviews.loading.loader import (
    DataLoader,
    iter_batches,
)

from dataviews.loading.prefetch import prefetch_ordered

__all__ = [
    "LoaderConfig",
    "DataLoader",
    "iter_batches",
    "prefetch_ordered",
]
