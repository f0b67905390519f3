"""
dataviews - Lazy observation views and mini-batch loading.

A small library for accessing, transforming, partitioning and batching
collections of observations (columns of an array, rows of a DataFrame,
elements of a sequence) without copying them.

Modules:
    observation: numobs/getobs protocol and container defaults
    views: Lazy combinators (ObsView, MappedView, JoinedView, ZippedView, CachedView)
    splitting: shuffleobs, sampleobs, splitobs, kfolds
    collate: stackobs, unzip
    loading: DataLoader with ordered parallel prefetch
    transforms: Array helpers (normalize, onehot, putobs, ...)
    constants: Package defaults

Quick Start:
    >>> import numpy as np
    >>> from dataviews import DataLoader, zipobs, mapobs, splitobs
    >>>
    >>> x = np.random.randn(8, 1000)          # 1000 observations of 8 features
    >>> y = np.random.randint(0, 2, 1000)
    >>> train, val = splitobs(zipobs(x, y), at=0.8, rng=0)
    >>>
    >>> for xb, yb in DataLoader(train, batchsize=32, shuffle=True, rng=0):
    ...     print(xb.shape, yb.shape)         # (8, 32) (32,)

Conventions:
    - Indices are 0-based; negative indices are out of range
    - Arrays store observations on the LAST axis
    - Randomized functions take an explicit ``rng`` (Generator or seed)
"""

__version__ = "0.1.0"

from dataviews.observation import (
    ObsContainer,
    numobs,
    getobs,
    is_container,
)

from dataviews.collate import (
    stackobs,
    unzip,
)

from dataviews.views import (
    AbstractView,
    ObsView,
    MappedView,
    JoinedView,
    ZippedView,
    CachedView,
    obsview,
    mapobs,
    joinobs,
    zipobs,
    cacheobs,
    repeatobs,
    filterobs,
    takeobs,
    dropobs,
)

from dataviews.splitting import (
    shuffleobs,
    sampleobs,
    splitobs,
    kfolds,
)

from dataviews.loading import (
    DataLoader,
    LoaderConfig,
    iter_batches,
)

from dataviews.transforms import (
    normalize,
    denormalize,
    onehot,
    ones_like,
    zeros_like,
    putobs,
    rmobs,
)

__all__ = [
    # Version
    "__version__",
    # Observation protocol
    "ObsContainer",
    "numobs",
    "getobs",
    "is_container",
    # Collation
    "stackobs",
    "unzip",
    # Views
    "AbstractView",
    "ObsView",
    "MappedView",
    "JoinedView",
    "ZippedView",
    "CachedView",
    "obsview",
    "mapobs",
    "joinobs",
    "zipobs",
    "cacheobs",
    "repeatobs",
    "filterobs",
    "takeobs",
    "dropobs",
    # Index utilities
    "shuffleobs",
    "sampleobs",
    "splitobs",
    "kfolds",
    # Loading
    "DataLoader",
    "LoaderConfig",
    "iter_batches",
    # Array helpers
    "normalize",
    "denormalize",
    "onehot",
    "ones_like",
    "zeros_like",
    "putobs",
    "rmobs",
]
