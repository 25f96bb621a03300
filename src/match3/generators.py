"""Ready-made tile generators.

The board only ever calls ``next()`` on a generator; these cover the common
cases of random play and scripted boards for tests.
"""
from __future__ import annotations

import itertools
import random
from typing import Generic, Iterable, Iterator, List, Sequence, TypeVar

T = TypeVar("T")

_UNSET = object()


class RandomTileGenerator(Generic[T]):
    """Draws each tile uniformly from a fixed set of choices."""

    def __init__(self, choices: Sequence[T], rng: random.Random | None = None):
        self.choices: List[T] = list(choices)
        if not self.choices:
            raise ValueError("RandomTileGenerator needs at least one choice")
        self.rng = rng or random.Random()

    def next(self) -> T:
        return self.rng.choice(self.choices)


class SequenceTileGenerator(Generic[T]):
    """Yields a scripted sequence of tiles.

    Once the script runs out it repeats the sequence, unless a fallback is
    given, in which case the fallback is returned forever.
    """

    def __init__(self, values: Iterable[T], fallback=_UNSET):
        self.values: List[T] = list(values)
        if not self.values and fallback is _UNSET:
            raise ValueError("SequenceTileGenerator needs values or a fallback")
        self.fallback = fallback
        self._source: Iterator[T] = (
            iter(self.values) if fallback is not _UNSET else itertools.cycle(self.values)
        )

    def next(self) -> T:
        for value in self._source:
            return value
        return self.fallback


class ConstantTileGenerator(Generic[T]):
    def __init__(self, value: T):
        self.value = value

    def next(self) -> T:
        return self.value
