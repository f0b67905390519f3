"""
Mini-batch iteration over any observation container.

Each pass:
    1. Compute the working order: identity, or a fresh permutation drawn
       from the loader's generator when shuffling
    2. Cut the order into consecutive chunks of ``batchsize``; drop a short
       final chunk unless ``partial``
    3. Yield ``getobs(data, chunk)`` for each chunk, in chunk order

With ``parallel`` the next chunks are fetched on a thread pool while the
caller works on the current batch. Batches still arrive in chunk order,
so parallel and sequential loaders with the same seed yield identical
sequences.
"""

import warnings
from typing import Any, Iterator, List, Optional

import numpy as np

from dataviews.constants import (
    DEFAULT_BATCHSIZE,
    DEFAULT_PARALLEL,
    DEFAULT_PARTIAL,
    DEFAULT_PREFETCH,
    DEFAULT_SHUFFLE,
)
from dataviews.loading.config import LoaderConfig
from dataviews.loading.prefetch import prefetch_ordered
from dataviews.observation import getobs, is_container, numobs
from dataviews.splitting import RandomSource, resolve_rng, shuffleobs


class DataLoader:
    """
    An iterable over mini-batches of ``data``.

    Each mini-batch holds ``batchsize`` observations, except possibly the
    last one. For arrays the last axis is the observation axis, so a batch
    of an ``(features, n)`` array has shape ``(features, batchsize)``.

    Args:
        data: Any observation container (array, DataFrame, sequence, view)
        batchsize: Observations per batch
        partial: Keep a final batch shorter than ``batchsize``
        shuffle: Reshuffle at the start of every pass
        parallel: Fetch upcoming batches on a thread pool
        rng: Generator or seed used for shuffling
        prefetch: Maximum number of batches fetched ahead (parallel only)
        num_workers: Thread pool size (default: ``prefetch``)

    Raises:
        TypeError: If ``data`` is not an observation container
        ValueError: If a numeric setting is not a positive integer

    Example:
        >>> loader = DataLoader(np.zeros((3, 10)), batchsize=4)
        >>> [b.shape for b in loader]
        [(3, 4), (3, 4), (3, 2)]
        >>> len(DataLoader(np.zeros((3, 10)), batchsize=4, partial=False))
        2
    """

    def __init__(
        self,
        data: Any,
        batchsize: int = DEFAULT_BATCHSIZE,
        partial: bool = DEFAULT_PARTIAL,
        shuffle: bool = DEFAULT_SHUFFLE,
        parallel: bool = DEFAULT_PARALLEL,
        rng: RandomSource = None,
        prefetch: int = DEFAULT_PREFETCH,
        num_workers: Optional[int] = None,
    ):
        if not is_container(data):
            raise TypeError(
                f"DataLoader requires an observation container, got {type(data).__name__}"
            )
        self.data = data
        self.config = LoaderConfig(
            batchsize=batchsize,
            partial=partial,
            shuffle=shuffle,
            parallel=parallel,
            prefetch=prefetch,
            num_workers=num_workers,
        )
        self.rng = resolve_rng(rng)

    @property
    def batchsize(self) -> int:
        return self.config.batchsize

    @property
    def partial(self) -> bool:
        return self.config.partial

    @property
    def shuffle(self) -> bool:
        return self.config.shuffle

    @property
    def parallel(self) -> bool:
        return self.config.parallel

    def __len__(self) -> int:
        """Number of batches in one pass."""
        n_full, rest = divmod(numobs(self.data), int(self.batchsize))
        return n_full + (1 if self.partial and rest else 0)

    def chunk_indices(self) -> List[np.ndarray]:
        """
        Compute the index chunks for one pass.

        Draws a new permutation on every call when shuffling.

        Returns:
            List of index arrays, one per batch, in delivery order
        """
        n = numobs(self.data)
        if self.shuffle:
            order = shuffleobs(range(n), rng=self.rng).indices
        else:
            order = np.arange(n, dtype=np.intp)

        b = self.batchsize
        chunks = [order[start:start + b] for start in range(0, n, b)]
        if chunks and len(chunks[-1]) < b and not self.partial:
            chunks.pop()
        return chunks

    def _fetch(self, chunk: np.ndarray) -> Any:
        return getobs(self.data, chunk)

    def __iter__(self) -> Iterator[Any]:
        chunks = self.chunk_indices()
        if not chunks and numobs(self.data) > 0:
            warnings.warn(
                f"DataLoader yields no batches: {numobs(self.data)} observations "
                f"with batchsize={self.batchsize} and partial=False"
            )

        if self.parallel and len(chunks) > 1:
            return prefetch_ordered(
                self._fetch,
                chunks,
                prefetch=self.config.prefetch,
                num_workers=self.config.workers,
            )
        return (self._fetch(chunk) for chunk in chunks)

    def __repr__(self) -> str:
        return (
            f"DataLoader({numobs(self.data)} observations, batchsize={self.batchsize}, "
            f"partial={self.partial}, shuffle={self.shuffle}, parallel={self.parallel})"
        )


def iter_batches(data: Any, **kwargs: Any) -> Iterator[Any]:
    """
    Iterate once over mini-batches of ``data``.

    Shorthand for ``iter(DataLoader(data, **kwargs))``.

    Example:
        >>> for x, y in iter_batches(zipobs(features, labels), batchsize=32):
        ...     train_step(x, y)
    """
    return iter(DataLoader(data, **kwargs))
