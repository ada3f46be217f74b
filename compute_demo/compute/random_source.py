"""Sources of uniformly distributed integers for the aggregator.

The aggregator never touches a global generator. It is handed a
``RandomSource`` so tests can replay a fixed sequence.
"""

import itertools
import threading
from abc import ABC, abstractmethod
from typing import Iterable

import numpy as np


def _check_range(low: int, high: int) -> None:
    if high <= low:
        raise ValueError(f"empty range [{low}, {high})")


class RandomSource(ABC):
    """Produces integers uniformly distributed over a half-open range."""

    @abstractmethod
    def next_in_range(self, low: int, high: int) -> int:
        """Return one value ``v`` with ``low <= v < high``.

        Raises:
            ValueError: If the range is empty.
        """

    def draw(self, size: int, low: int, high: int) -> np.ndarray:
        """Draw ``size`` values into a ``uint32`` array.

        Subclasses with a vectorized generator should override this.

        Args:
            size: Number of values to draw.
            low: Inclusive lower bound.
            high: Exclusive upper bound.

        Returns:
            One-dimensional ``uint32`` array of length ``size``.
        """
        _check_range(low, high)
        values = np.empty(size, dtype=np.uint32)
        for index in range(size):
            values[index] = self.next_in_range(low, high)
        return values


class NumpyRandomSource(RandomSource):
    """Thread-local numpy generators spawned from one seed sequence.

    Every thread that draws gets its own ``numpy.random.Generator``, so
    concurrent callers need no lock and receive independent streams.

    Attributes:
        seed: Root entropy, or None for fresh OS entropy.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._seed_sequence = np.random.SeedSequence(seed)
        self._spawn_lock = threading.Lock()
        self._local = threading.local()

    def _generator(self) -> np.random.Generator:
        generator = getattr(self._local, "generator", None)
        if generator is None:
            # SeedSequence.spawn mutates the parent's child counter
            with self._spawn_lock:
                (child,) = self._seed_sequence.spawn(1)
            generator = np.random.default_rng(child)
            self._local.generator = generator
        return generator

    def next_in_range(self, low: int, high: int) -> int:
        _check_range(low, high)
        return int(self._generator().integers(low, high))

    def draw(self, size: int, low: int, high: int) -> np.ndarray:
        _check_range(low, high)
        return self._generator().integers(low, high, size=size, dtype=np.uint32)


class SequenceRandomSource(RandomSource):
    """Replays a fixed sequence of values, cycling when exhausted.

    Values are returned as given; the caller is responsible for keeping
    them inside the requested range. Out-of-range values raise so a bad
    fixture fails loudly instead of skewing a sum.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self.values = list(values)
        if not self.values:
            raise ValueError("sequence must not be empty")
        self._cycle = itertools.cycle(self.values)
        self._lock = threading.Lock()

    def next_in_range(self, low: int, high: int) -> int:
        _check_range(low, high)
        with self._lock:
            value = next(self._cycle)
        if not low <= value < high:
            raise ValueError(f"replayed value {value} outside [{low}, {high})")
        return value
