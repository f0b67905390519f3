"""
Functional constructors for views.

Thin wrappers over the view classes plus the derived views that are
expressed in terms of them (repeat, filter, take, drop).
"""

from typing import Any, Callable

import numpy as np

from dataviews.observation import getobs, normalize_index, numobs
from dataviews.views.combinators import (
    CachedView,
    JoinedView,
    MappedView,
    ObsView,
    ZippedView,
)


def obsview(data: Any, indices: Any) -> ObsView:
    """Construct a lazy view of ``data`` at the specified indices."""
    return ObsView(data, indices)


def mapobs(f: Callable[[Any], Any], data: Any) -> MappedView:
    """Lazily apply ``f`` to each observation in ``data``."""
    return MappedView(f, data)


def joinobs(*data: Any) -> JoinedView:
    """Concatenate containers lazily."""
    return JoinedView(*data)


def zipobs(*data: Any) -> ZippedView:
    """
    Zip containers so each observation is a tuple.

    Example:
        >>> z = zipobs(range(1, 6), range(41, 46), list('abcde'))
        >>> list(z)[:2]
        [(1, 41, 'a'), (2, 42, 'b')]
    """
    return ZippedView(*data)


def cacheobs(data: Any) -> CachedView:
    """Cache each observation of ``data`` on first retrieval."""
    return CachedView(data)


def repeatobs(data: Any, n: int) -> JoinedView:
    """
    Create a view which iterates over every observation in ``data`` n times.

    Args:
        data: Observation container
        n: Number of repetitions (>= 1)

    Raises:
        ValueError: If n < 1
    """
    if n < 1:
        raise ValueError(f"repeatobs requires n >= 1, got {n}")
    return JoinedView(*([data] * n))


def filterobs(f: Callable[[Any], bool], data: Any) -> ObsView:
    """
    Remove all observations from ``data`` for which ``f`` returns False.

    The predicate is evaluated once per observation when the view is built.
    """
    keep = [i for i in range(numobs(data)) if f(getobs(data, i))]
    return ObsView(data, np.asarray(keep, dtype=np.intp))


def takeobs(data: Any, obs: Any) -> ObsView:
    """
    Keep only the observations of ``data`` listed in ``obs``.

    Observations keep their original relative order.
    """
    index = normalize_index(obs, numobs(data))
    return ObsView(data, np.sort(np.atleast_1d(index)))


def dropobs(data: Any, obs: Any) -> ObsView:
    """Remove the observations of ``data`` listed in ``obs``."""
    n = numobs(data)
    keep = np.ones(n, dtype=bool)
    keep[normalize_index(obs, n)] = False
    return ObsView(data, np.flatnonzero(keep))
