"""
Stateless array helpers that follow the observation layout.

Arrays carry observations on their LAST axis. These helpers never touch
that convention except ``putobs``/``rmobs``, whose whole job is adding or
removing the observation axis.

Functions:
    normalize / denormalize: Per-index standardization along one dimension
    onehot: Boolean one-hot encoding
    ones_like / zeros_like: Constant arrays matching shape and dtype
    putobs / rmobs: Add / remove a trailing observation axis of size 1
"""

from typing import Sequence

import numpy as np


def _along(values: Sequence[float], x: np.ndarray, dim: int, name: str) -> np.ndarray:
    """Reshape per-index statistics so they broadcast along ``dim``."""
    values = np.asarray(values)
    if values.ndim != 1 or len(values) != x.shape[dim]:
        raise ValueError(
            f"{name} must have length {x.shape[dim]} (size of dim {dim}), "
            f"got shape {values.shape}"
        )
    shape = [1] * x.ndim
    shape[dim] = -1
    return values.reshape(shape)


def normalize(
    x: np.ndarray,
    mean: Sequence[float],
    std: Sequence[float],
    dim: int = 0,
) -> np.ndarray:
    """
    Normalize ``x`` to zero mean and unit standard deviation along ``dim``.

    Args:
        x: Input array
        mean: One mean per index of ``dim``
        std: One standard deviation per index of ``dim``
        dim: Dimension the statistics are indexed by

    Returns:
        Float array of the same shape as ``x``

    Raises:
        ValueError: If ``mean``/``std`` do not match ``x.shape[dim]``

    Example:
        >>> x = np.array([[1.0, 3.0], [10.0, 30.0]])
        >>> normalize(x, [2.0, 20.0], [1.0, 10.0])
        array([[-1.,  1.],
               [-1.,  1.]])
    """
    x = np.asarray(x)
    return (x - _along(mean, x, dim, "mean")) / _along(std, x, dim, "std")


def denormalize(
    x: np.ndarray,
    mean: Sequence[float],
    std: Sequence[float],
    dim: int = 0,
) -> np.ndarray:
    """Reverse ``normalize`` with the same statistics and dimension."""
    x = np.asarray(x)
    return x * _along(std, x, dim, "std") + _along(mean, x, dim, "mean")


def onehot(x: np.ndarray, labels: Sequence, dim: int = 0) -> np.ndarray:
    """
    One-hot encode ``x`` against ``labels``.

    The encoding occupies ``dim``: if ``x`` already has a size-1 axis there
    it is replaced, otherwise a new axis is inserted.

    Args:
        x: Array of categorical values
        labels: All possible values, in encoding order
        dim: Position of the encoding axis

    Returns:
        Boolean array with ``len(labels)`` entries along ``dim``

    Raises:
        ValueError: If ``x`` contains a value not in ``labels``

    Example:
        >>> onehot(np.array([1, 2, 3, 3, 1]), [1, 2, 3]).astype(int)
        array([[1, 0, 0, 0, 1],
               [0, 1, 0, 0, 0],
               [0, 0, 1, 1, 0]])
        >>> onehot(np.zeros((28, 28, 1, 4)), [0, 1], dim=2).shape
        (28, 28, 2, 4)
    """
    x = np.asarray(x)
    labels = np.asarray(labels)

    unknown = np.setdiff1d(np.unique(x), labels)
    if unknown.size:
        raise ValueError(f"Values not in labels: {unknown[:5].tolist()}")

    if not (x.ndim > dim and x.shape[dim] == 1):
        x = np.expand_dims(x, dim)

    shape = [1] * x.ndim
    shape[dim] = -1
    return x == labels.reshape(shape)


def ones_like(x: np.ndarray) -> np.ndarray:
    """Array of ones with the same shape and dtype as ``x``."""
    return np.ones_like(x)


def zeros_like(x: np.ndarray) -> np.ndarray:
    """Array of zeros with the same shape and dtype as ``x``."""
    return np.zeros_like(x)


def putobs(x: np.ndarray) -> np.ndarray:
    """Add a trailing observation axis of size 1 to ``x``."""
    return np.asarray(x)[..., np.newaxis]


def rmobs(x: np.ndarray) -> np.ndarray:
    """
    Remove the trailing observation axis from ``x``.

    Raises:
        ValueError: If the last axis does not have size 1
    """
    x = np.asarray(x)
    if x.ndim == 0 or x.shape[-1] != 1:
        raise ValueError(f"Observation axis must have size 1, got shape {x.shape}")
    return x[..., 0]
