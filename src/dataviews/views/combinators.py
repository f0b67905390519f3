"""
Lazy view combinators.

Each combinator wraps one or more parent containers and stores only the
minimal state needed to answer ``numobs``/``getobs``:

    | View        | State                      | numobs              |
    |-------------|----------------------------|---------------------|
    | ObsView     | index mapping              | len(indices)        |
    | MappedView  | function reference         | numobs(parent)      |
    | JoinedView  | prefix-sum boundary table  | sum of numobs       |
    | ZippedView  | child list                 | common numobs       |
    | CachedView  | index -> value table       | numobs(parent)      |

Views never copy parent data. All of them are immutable after
construction except CachedView, whose table only grows.
"""

from typing import Any, Callable, Dict, Tuple

import numpy as np

from dataviews.observation import getobs, is_scalar_index, normalize_index, numobs
from dataviews.views.base import AbstractView


class ObsView(AbstractView):
    """
    View over the observations of ``data`` at ``indices``, in that order.

    An ObsView built over another ObsView composes the two index mappings
    and points at the original parent, so nesting never adds indirection.

    Args:
        data: Parent container
        indices: Vector index (or slice) into ``data``; positions must be
                 in range and distinct

    Raises:
        TypeError: If ``indices`` is a scalar or ``data`` is not a container
        IndexError: If any index is out of range
        ValueError: If ``indices`` contains duplicates

    Example:
        >>> v = ObsView(np.arange(10), [7, 2, 5])
        >>> v[0], len(v)
        (7, 3)
    """

    def __init__(self, data: Any, indices: Any):
        if is_scalar_index(indices):
            raise TypeError("ObsView requires a vector of indices, got a scalar")

        index = normalize_index(indices, numobs(data))

        if isinstance(data, ObsView):
            index = data.indices[index]
            data = data.data

        index = np.array(index, dtype=np.intp)
        index.flags.writeable = False

        self.data = data
        self._indices = index

    @property
    def indices(self) -> np.ndarray:
        """Read-only index mapping into ``data``."""
        return self._indices

    def __numobs__(self) -> int:
        return len(self._indices)

    def _getobs_one(self, i: int) -> Any:
        return getobs(self.data, int(self._indices[i]))

    def _getobs_many(self, idx: np.ndarray) -> Any:
        return getobs(self.data, self._indices[idx])


class MappedView(AbstractView):
    """
    View that applies ``f`` to each observation of ``data`` when requested.

    ``f`` runs on every retrieval; results are not cached (wrap in
    CachedView for that).

    Args:
        f: Function of one observation
        data: Parent container
    """

    def __init__(self, f: Callable[[Any], Any], data: Any):
        if not callable(f):
            raise TypeError(f"MappedView requires a callable, got {type(f).__name__}")
        numobs(data)
        self.f = f
        self.data = data

    def __numobs__(self) -> int:
        return numobs(self.data)

    def _getobs_one(self, i: int) -> Any:
        return self.f(getobs(self.data, i))


class JoinedView(AbstractView):
    """
    View over several containers as if they were concatenated.

    Global index i is resolved to its owning container through a table of
    cumulative observation counts. Containers are not checked for
    compatibility; batches mixing incompatible observations fail in
    ``stackobs``.

    Args:
        *data: Containers to join, in order. Zero containers is an empty view.

    Example:
        >>> j = JoinedView([1, 2, 3], [4, 5])
        >>> len(j), j[3]
        (5, 4)
    """

    def __init__(self, *data: Any):
        counts = [numobs(d) for d in data]
        self.data: Tuple[Any, ...] = tuple(data)
        self._ends = np.cumsum(np.asarray(counts, dtype=np.intp))

    def __numobs__(self) -> int:
        return int(self._ends[-1]) if len(self._ends) else 0

    def locate(self, i: int) -> Tuple[int, int]:
        """
        Map a global index to ``(container position, local index)``.

        Args:
            i: Validated global index

        Returns:
            Tuple of the owning container's position in ``data`` and the
            index within that container
        """
        k = int(np.searchsorted(self._ends, i, side='right'))
        start = int(self._ends[k - 1]) if k > 0 else 0
        return k, i - start

    def _getobs_one(self, i: int) -> Any:
        k, local = self.locate(i)
        return getobs(self.data[k], local)


class ZippedView(AbstractView):
    """
    View that zips observations of several equally sized containers.

    Scalar retrieval returns a tuple with one observation per container.
    Vector retrieval returns the unzipped form: a tuple holding one batch
    per container.

    Args:
        *data: Containers with identical ``numobs``

    Raises:
        ValueError: If no containers are given or their sizes differ

    Example:
        >>> z = ZippedView(range(1, 6), range(41, 46))
        >>> z[0]
        (1, 41)
        >>> z[[0, 2, 4]]
        ([1, 3, 5], [41, 43, 45])
    """

    def __init__(self, *data: Any):
        if not data:
            raise ValueError("ZippedView requires at least one container")

        counts = [numobs(d) for d in data]
        if len(set(counts)) > 1:
            raise ValueError(
                f"ZippedView containers must have the same number of observations, "
                f"got {counts}"
            )

        self.data: Tuple[Any, ...] = tuple(data)
        self._n = counts[0]

    def __numobs__(self) -> int:
        return self._n

    def _getobs_one(self, i: int) -> Tuple[Any, ...]:
        return tuple(getobs(d, i) for d in self.data)

    def _getobs_many(self, idx: np.ndarray) -> Tuple[Any, ...]:
        return tuple(getobs(d, idx) for d in self.data)


class CachedView(AbstractView):
    """
    View that stores each observation the first time it is retrieved.

    Later retrievals of the same index return the stored object without
    touching the parent. Useful when producing an observation is expensive
    (decoding, augmentation with a fixed seed, ...).

    Note:
        The table is not locked. Concurrent retrievals of *different*
        indices are safe under the GIL; concurrent first retrievals of the
        same index may compute it twice. Stored objects are returned by
        reference, so mutating a result mutates the cache.

    Args:
        data: Parent container
    """

    def __init__(self, data: Any):
        numobs(data)
        self.data = data
        self._cache: Dict[int, Any] = {}

    @property
    def cached_count(self) -> int:
        """Number of observations currently stored."""
        return len(self._cache)

    def is_cached(self, i: int) -> bool:
        """True if observation ``i`` has been stored."""
        return int(i) in self._cache

    def __numobs__(self) -> int:
        return numobs(self.data)

    def _getobs_one(self, i: int) -> Any:
        if i in self._cache:
            return self._cache[i]
        value = getobs(self.data, i)
        self._cache[i] = value
        return value
