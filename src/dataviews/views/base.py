"""
Base class shared by all lazy views.

A view presents a transformed or combined perspective over one or more
parent containers without copying them. Every view satisfies the
observation protocol itself, so views compose freely.

Subclass Contract:
    __numobs__()         -> int
    _getobs_one(i)       -> observation at validated position i
    _getobs_many(idx)    -> batch for a validated 1-d index array
                            (default: stackobs of single retrievals)

Indexing goes through ``getobs`` so every view validates indices the same
way. On top of the protocol, views behave like read-only Python
sequences: ``len(view)``, ``view[i]``, ``view[[i, j]]``, ``view[a:b]``
and iteration all work.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterator

import numpy as np

from dataviews.collate import stackobs
from dataviews.observation import Index, getobs


class AbstractView(ABC):
    """Super type of all views."""

    @abstractmethod
    def __numobs__(self) -> int:
        pass

    @abstractmethod
    def _getobs_one(self, i: int) -> Any:
        pass

    def _getobs_many(self, idx: np.ndarray) -> Any:
        return stackobs(*[self._getobs_one(int(i)) for i in idx])

    def __getobs__(self, idx: Index) -> Any:
        if isinstance(idx, int):
            return self._getobs_one(idx)
        return self._getobs_many(idx)

    def __len__(self) -> int:
        return self.__numobs__()

    def __getitem__(self, idx: Any) -> Any:
        if isinstance(idx, slice):
            from dataviews.views.combinators import ObsView
            return ObsView(self, idx)
        return getobs(self, idx)

    def __iter__(self) -> Iterator[Any]:
        for i in range(self.__numobs__()):
            yield self._getobs_one(i)

    def __repr__(self) -> str:
        return f"{self.__numobs__()}-element {type(self).__name__}"
