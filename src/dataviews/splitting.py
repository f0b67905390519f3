"""
Index utilities for shuffling, sampling and partitioning observations.

Implements:
    - shuffleobs: random permutation as an ObsView
    - sampleobs: sampling without replacement as an ObsView
    - splitobs: fractional train/validation/test style splits
    - kfolds: k contiguous folds, one (train, validation) pair per fold

Input Forms (splitobs, kfolds):
    | data                         | returned splits                   |
    |------------------------------|-----------------------------------|
    | int n                        | index arrays over 0..n-1          |
    | range, list, tuple or 1-d    | arrays of the vector's values     |
    | integer ndarray of distinct  |                                   |
    | non-negative values          |                                   |
    | any other container          | ObsViews over the container       |

Randomness:
    Every randomized function takes ``rng``: a numpy Generator, an integer
    seed, or None for a fresh generator. Global random state is never used,
    so passing the same seed reproduces the same result.
"""

import warnings
from typing import Any, List, Optional, Sequence, Tuple, Union

import numpy as np

from dataviews.constants import DEFAULT_KFOLDS, DEFAULT_SPLIT_AT, SPLIT_SUM_TOLERANCE
from dataviews.observation import is_scalar_index, numobs
from dataviews.views.combinators import ObsView


RandomSource = Optional[Union[np.random.Generator, int]]


def resolve_rng(rng: RandomSource = None) -> np.random.Generator:
    """
    Turn a seed, a Generator or None into a numpy Generator.

    A Generator is returned as-is so callers share its stream.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def _index_source(data: Any) -> Tuple[np.ndarray, Optional[Any]]:
    """
    Resolve the three accepted input forms.

    Returns:
        (values, container): the index values to partition and the
        container to wrap results in, or None when plain arrays are wanted
    """
    if is_scalar_index(data):
        if data < 0:
            raise ValueError(f"Observation count must be non-negative, got {data}")
        return np.arange(int(data), dtype=np.intp), None

    values = _as_index_vector(data)
    if values is not None:
        if values.size and values.min() < 0:
            raise ValueError(
                f"Index vector contains negative values: {values[values < 0][:5].tolist()}"
            )
        unique, counts = np.unique(values, return_counts=True)
        duplicates = unique[counts > 1]
        if duplicates.size:
            raise ValueError(
                f"Index vector contains duplicate values: {duplicates[:5].tolist()}"
            )
        return values, None

    return np.arange(numobs(data), dtype=np.intp), data


def _as_index_vector(data: Any) -> Optional[np.ndarray]:
    """Return ``data`` as an intp array if it is a 1-d vector of integers."""
    if isinstance(data, (list, tuple)):
        if not data or not all(is_scalar_index(v) for v in data):
            return None
    elif not isinstance(data, (range, np.ndarray)):
        return None

    arr = np.asarray(data)
    if arr.ndim != 1 or not np.issubdtype(arr.dtype, np.integer):
        return None
    return arr.astype(np.intp, copy=False)


def _select(positions: np.ndarray, values: np.ndarray, container: Optional[Any]) -> Any:
    if container is None:
        return values[positions]
    return ObsView(container, positions)


def _check_fractions(at: Union[float, Sequence[float]]) -> List[float]:
    fractions = [float(at)] if np.isscalar(at) else [float(f) for f in at]
    if not fractions:
        raise ValueError("splitobs requires at least one split fraction")

    for f in fractions:
        if not 0.0 < f <= 1.0:
            raise ValueError(f"Split fractions must be in (0, 1], got {f}")

    total = sum(fractions)
    if total > 1.0 + SPLIT_SUM_TOLERANCE:
        raise ValueError(f"Split fractions must sum to at most 1, got {total}")

    return fractions


def shuffleobs(data: Any, rng: RandomSource = None) -> ObsView:
    """
    Randomly shuffle the observations of ``data``.

    Args:
        data: Observation container
        rng: Generator or seed for reproducible results

    Returns:
        ObsView over a uniformly random permutation of ``data``
    """
    rng = resolve_rng(rng)
    return ObsView(data, rng.permutation(numobs(data)))


def sampleobs(data: Any, n: int, rng: RandomSource = None) -> ObsView:
    """
    Randomly sample ``n`` observations from ``data`` without replacement.

    Args:
        data: Observation container
        n: Number of observations to draw
        rng: Generator or seed for reproducible results

    Returns:
        ObsView over the sampled observations

    Raises:
        ValueError: If n is negative or larger than numobs(data)
    """
    total = numobs(data)
    if n < 0 or n > total:
        raise ValueError(
            f"Cannot sample {n} observations without replacement from {total}"
        )
    rng = resolve_rng(rng)
    return ObsView(data, rng.choice(total, size=n, replace=False))


def splitobs(
    data: Any,
    at: Union[float, Sequence[float]] = DEFAULT_SPLIT_AT,
    shuffle: bool = True,
    rng: RandomSource = None,
) -> List[Any]:
    """
    Split observations according to the given fractions.

    Split k holds ``round(at[k] * n)`` observations. If the fractions sum
    to less than 1 the remaining observations form one more, final split.

    Args:
        data: Observation count, index vector, or container
        at: Fraction or sequence of fractions, each in (0, 1], summing to <= 1
        shuffle: If True, shuffle before cutting the contiguous blocks
        rng: Generator or seed used when shuffling

    Returns:
        List of splits in the order of ``at`` (see module docstring for
        the type of each split)

    Raises:
        ValueError: If the fractions are invalid

    Example:
        >>> a, b, c = splitobs(range(1, 101), at=(0.7, 0.2), shuffle=False)
        >>> a[[0, -1]], b[[0, -1]], c[[0, -1]]
        (array([ 1, 70]), array([71, 90]), array([ 91, 100]))
    """
    fractions = _check_fractions(at)
    values, container = _index_source(data)
    n = len(values)

    order = resolve_rng(rng).permutation(n) if shuffle else np.arange(n, dtype=np.intp)

    bounds = np.minimum(np.cumsum([round(f * n) for f in fractions]), n)
    has_remainder = sum(fractions) < 1.0 - SPLIT_SUM_TOLERANCE
    if not has_remainder:
        bounds[-1] = n

    starts = np.concatenate([[0], bounds])
    blocks = [order[s:e] for s, e in zip(starts[:-1], bounds)]
    if has_remainder:
        blocks.append(order[bounds[-1]:])

    for k, block in enumerate(blocks):
        if len(block) == 0:
            warnings.warn(f"splitobs: split {k} is empty for {n} observations")

    return [_select(block, values, container) for block in blocks]


def kfolds(data: Any, k: int = DEFAULT_KFOLDS) -> List[Tuple[Any, Any]]:
    """
    Compute train/validation pairs for k-fold cross-validation.

    Observations are cut into k contiguous folds of ``n // k``; the last
    fold absorbs the remainder. Pair i validates on fold i and trains on
    the other folds concatenated in fold order.

    Args:
        data: Observation count, index vector, or container
        k: Number of folds, 2 <= k <= n

    Returns:
        List of k ``(train, validation)`` tuples

    Raises:
        ValueError: If k is out of range

    Example:
        >>> folds = kfolds(10, 5)
        >>> train, val = folds[0]
        >>> val
        array([0, 1])
    """
    values, container = _index_source(data)
    n = len(values)
    if k < 2 or k > n:
        raise ValueError(f"kfolds requires 2 <= k <= {n}, got k={k}")

    size = n // k
    bounds = [i * size for i in range(k)] + [n]
    folds = [np.arange(bounds[i], bounds[i + 1], dtype=np.intp) for i in range(k)]

    pairs = []
    for i in range(k):
        train = np.concatenate([folds[j] for j in range(k) if j != i])
        pairs.append((_select(train, values, container), _select(folds[i], values, container)))

    return pairs
