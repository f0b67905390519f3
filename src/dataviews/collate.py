"""
Collation of individual observations into batches.

A batch is the element-wise stack of several observations. How the stack
is built depends on what an observation looks like:

    | Observation kind          | Batch                                  |
    |---------------------------|----------------------------------------|
    | numpy array / scalar      | one array with a new trailing axis     |
    | pandas.Series (a row)     | pandas.DataFrame, one row per series   |
    | tuple (e.g. x/y pair)     | tuple of batches, one per position     |
    | anything else             | list, elements unmodified              |

Functions:
    stackobs: Merge observations into one batch
    unzip: Inverse of zip for a sequence of tuples
"""

from typing import Any, List, Sequence, Tuple

import numpy as np
import pandas as pd


def _kind(x: Any) -> str:
    """Classify an observation for collation."""
    if isinstance(x, tuple):
        return 'tuple'
    if isinstance(x, (np.ndarray, np.generic)):
        return 'array'
    if isinstance(x, pd.Series):
        return 'series'
    return 'other'


def unzip(xs: Sequence[Sequence[Any]]) -> Tuple[List[Any], ...]:
    """
    Inverse of ``zip``: split a sequence of tuples into one list per position.

    Args:
        xs: Sequence of equal-length tuples

    Returns:
        Tuple of lists, the k-th list holding the k-th element of every
        tuple in the original order. Empty input returns ``()``.

    Raises:
        ValueError: If the tuples do not all have the same length

    Example:
        >>> unzip(list(zip([1, 2, 3], ['a', 'b', 'c'])))
        ([1, 2, 3], ['a', 'b', 'c'])
    """
    xs = list(xs)
    if not xs:
        return ()

    lengths = sorted({len(x) for x in xs})
    if len(lengths) > 1:
        raise ValueError(f"Cannot unzip tuples of different lengths: {lengths}")

    return tuple(list(group) for group in zip(*xs))


def _stack_arrays(xs: Sequence[Any]) -> np.ndarray:
    shapes = sorted({np.shape(x) for x in xs})
    if len(shapes) > 1:
        raise ValueError(
            f"Cannot stack observations with different shapes: {shapes}"
        )
    return np.stack(xs, axis=-1)


def stackobs(*xs: Any) -> Any:
    """
    Stack observations as if they formed one batch.

    Arrays are stacked along a new trailing (observation) axis, so a batch
    of ``k`` arrays of shape ``s`` has shape ``s + (k,)``. Tuples are
    unzipped first and each position is stacked on its own. Values that
    are neither arrays nor tuples are collected into a list.

    Args:
        *xs: Individual observations, all of the same kind

    Returns:
        The collated batch (see module docstring)

    Raises:
        ValueError: If observations mix kinds, arrays differ in shape, or
                    tuples differ in length

    Example:
        >>> stackobs(1, 2, 3, 4, 5)
        [1, 2, 3, 4, 5]
        >>> stackobs((1, 'a'), (2, 'b'))
        ([1, 2], ['a', 'b'])
        >>> stackobs(*[np.zeros((28, 28)) for _ in range(10)]).shape
        (28, 28, 10)
    """
    if not xs:
        return []

    kinds = {_kind(x) for x in xs}
    if len(kinds) > 1:
        types = sorted({type(x).__name__ for x in xs})
        raise ValueError(f"Cannot stack observations of mixed types: {types}")

    kind = kinds.pop()

    if kind == 'array':
        return _stack_arrays(xs)

    if kind == 'series':
        return pd.DataFrame(list(xs))

    if kind == 'tuple':
        stacked = tuple(stackobs(*group) for group in unzip(xs))
        # Preserve namedtuple observations
        first = xs[0]
        if hasattr(first, '_fields') and all(type(x) is type(first) for x in xs):
            return type(first)(*stacked)
        return stacked

    return list(xs)
