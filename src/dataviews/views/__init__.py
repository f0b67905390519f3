"""
Lazy, composable views over observation containers.

Every view satisfies the observation protocol, so views wrap views:

    >>> from dataviews.views import mapobs, zipobs, cacheobs
    >>> images = cacheobs(mapobs(decode, files))
    >>> pairs = zipobs(images, labels)
    >>> x, y = pairs[[0, 1, 2]]

Views hold references, not copies, and evaluate on retrieval.
"""

from dataviews.views.base import AbstractView

from dataviews.views.combinators import (
    ObsView,
    MappedView,
    JoinedView,
    ZippedView,
    CachedView,
)

from dataviews.views.constructors import (
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

__all__ = [
    # Base class
    "AbstractView",
    # Combinators
    "ObsView",
    "MappedView",
    "JoinedView",
    "ZippedView",
    "CachedView",
    # Constructors
    "obsview",
    "mapobs",
    "joinobs",
    "zipobs",
    "cacheobs",
    "repeatobs",
    "filterobs",
    "takeobs",
    "dropobs",
]
