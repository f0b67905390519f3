"""
The observation protocol: ``numobs`` and ``getobs``.

Every container this package works with, raw or lazy, is accessed through
two functions:

    numobs(data)        -> number of observations
    getobs(data, idx)   -> one observation (scalar idx) or a batch (vector idx)

Dispatch Order:
    1. Objects implementing ``__numobs__`` / ``__getobs__`` (ObsContainer)
    2. numpy arrays: observations on the LAST axis
    3. pandas DataFrame / Series: observations are rows (positional .iloc)
    4. Any Sequence (list, tuple, range, ...): len() and positional indexing
    Anything else is rejected with TypeError rather than guessed at.

Index Contract:
    - Scalar: int or numpy integer (not bool), 0 <= i < numobs(data)
    - Vector: 1-d ordered collection of distinct scalars (list, tuple,
      range, integer ndarray) or a slice
    - Negative indices are out of range, there is no wrap-around
    - Order of a vector index is preserved in the result

Consistency:
    The axis removed by a scalar retrieval is the axis a vector retrieval
    indexes. For arrays ``getobs(a, [i])`` has the shape of
    ``getobs(a, i)`` plus a trailing axis of size 1.
"""

from collections.abc import Sequence
from typing import Any, Protocol, Union, runtime_checkable

import numpy as np
import pandas as pd

from dataviews.collate import stackobs
from dataviews.constants import OBS_AXIS


Index = Union[int, np.ndarray]


@runtime_checkable
class ObsContainer(Protocol):
    """
    Override hooks for custom containers.

    A class that defines both hooks takes precedence over every default
    rule. ``__getobs__`` always receives an index that has already been
    validated by ``getobs``: a Python ``int`` in range, or a 1-d
    ``numpy.intp`` array of distinct in-range positions.
    """

    def __numobs__(self) -> int:
        """Return the number of observations."""
        ...

    def __getobs__(self, idx: Index) -> Any:
        """Return the observation(s) at a validated index."""
        ...


def is_scalar_index(idx: Any) -> bool:
    """True if ``idx`` is a single integer position (bools excluded)."""
    return isinstance(idx, (int, np.integer)) and not isinstance(idx, (bool, np.bool_))


def is_container(data: Any) -> bool:
    """
    Check whether ``data`` satisfies the observation protocol.

    Args:
        data: Any object

    Returns:
        True if ``numobs`` and ``getobs`` accept ``data``
    """
    if isinstance(data, ObsContainer):
        return True
    if isinstance(data, np.ndarray):
        return data.ndim >= 1
    return isinstance(data, (pd.DataFrame, pd.Series, Sequence))


def numobs(data: Any) -> int:
    """
    Return the number of observations in ``data``.

    Args:
        data: Observation container

    Returns:
        Observation count (size of the last axis for arrays)

    Raises:
        TypeError: If ``data`` is not a supported container

    Example:
        >>> numobs(np.zeros((3, 10)))
        10
        >>> numobs([1, 2, 3])
        3
    """
    if isinstance(data, ObsContainer):
        return int(data.__numobs__())
    if not is_container(data):
        raise TypeError(
            f"{type(data).__name__} does not support the observation protocol; "
            f"implement __numobs__ and __getobs__ or pass an array, DataFrame or sequence"
        )
    if isinstance(data, np.ndarray):
        return data.shape[OBS_AXIS]
    return len(data)


def normalize_index(idx: Any, n: int) -> Index:
    """
    Validate an observation index against a container of ``n`` observations.

    Args:
        idx: Scalar, vector or slice index
        n: Number of observations in the container

    Returns:
        A Python int for scalar indices, otherwise a 1-d ``numpy.intp`` array

    Raises:
        IndexError: If any position is negative or >= n
        ValueError: If a vector index is not 1-d or contains duplicates
        TypeError: If the index is not made of integers
    """
    if is_scalar_index(idx):
        i = int(idx)
        if i < 0 or i >= n:
            raise IndexError(f"Index {i} out of range for {n} observations")
        return i

    if isinstance(idx, slice):
        return np.arange(n, dtype=np.intp)[idx]

    if isinstance(idx, (str, bytes)) or not hasattr(idx, '__len__'):
        raise TypeError(f"Invalid observation index of type {type(idx).__name__}")

    arr = np.asarray(idx)
    if arr.ndim != 1:
        raise ValueError(f"Vector index must be 1-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        return np.empty(0, dtype=np.intp)
    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        raise TypeError(f"Vector index must contain integers, got dtype {arr.dtype}")

    bad = arr[(arr < 0) | (arr >= n)]
    if bad.size:
        raise IndexError(
            f"Indices {bad[:5].tolist()} out of range for {n} observations"
        )

    values, counts = np.unique(arr, return_counts=True)
    duplicates = values[counts > 1]
    if duplicates.size:
        raise ValueError(f"Duplicate indices in vector index: {duplicates[:5].tolist()}")

    return arr.astype(np.intp, copy=False)


def getobs(data: Any, idx: Any = None) -> Any:
    """
    Retrieve observations from ``data``.

    Args:
        data: Observation container
        idx: None (materialize all observations), a scalar position, or a
             vector of distinct positions

    Returns:
        A single observation for a scalar index, otherwise a batch whose
        layout matches how single observations are shaped: arrays keep the
        observation axis, frames return sub-frames, sequences are
        collated with ``stackobs``.

    Raises:
        TypeError: If ``data`` is not a supported container
        IndexError: If any index is out of range

    Example:
        >>> x = np.arange(12).reshape(3, 4)
        >>> getobs(x, 1)
        array([1, 5, 9])
        >>> getobs(x, [3, 0]).shape
        (3, 2)
        >>> getobs([(1, 'a'), (2, 'b')], [0, 1])
        ([1, 2], ['a', 'b'])
    """
    n = numobs(data)

    if idx is None:
        if isinstance(data, (np.ndarray, pd.DataFrame, pd.Series)):
            return data.copy()
        idx = np.arange(n, dtype=np.intp)

    index = normalize_index(idx, n)

    if isinstance(data, ObsContainer):
        return data.__getobs__(index)

    if isinstance(data, np.ndarray):
        return np.take(data, index, axis=OBS_AXIS)

    if isinstance(data, (pd.DataFrame, pd.Series)):
        return data.iloc[index]

    if isinstance(index, int):
        return data[index]
    return stackobs(*[data[int(i)] for i in index])
