"""Parallel filter-even, square, sum over a generated value array."""

import os
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import NamedTuple, Sequence

import numpy as np
from structlog import get_logger

from compute_demo.exceptions import AggregationError

from .random_source import NumpyRandomSource, RandomSource

logger = get_logger("aggregator")

VALUE_LOW = 0
VALUE_HIGH = 10_000


class AggregateOutcome(NamedTuple):
    """Result of one aggregation.

    Attributes:
        sum: Sum of squares of the even values.
        count_generated: Number of values drawn.
    """

    sum: int
    count_generated: int


def partial_sum(chunk: np.ndarray) -> int:
    """Sum ``x*x`` over the even values of one partition.

    Squares are taken in ``uint64``; 9998**2 summed 10**9 times stays
    below 2**64.
    """
    evens = chunk[chunk % 2 == 0].astype(np.uint64, copy=False)
    return int(np.sum(evens * evens, dtype=np.uint64))


def partition(values: np.ndarray, parts: int) -> list[np.ndarray]:
    """Split ``values`` into at most ``parts`` contiguous non-empty slices.

    Args:
        values: One-dimensional array.
        parts: Desired number of slices (at least 1).

    Returns:
        Views into ``values``; empty when ``values`` is empty.
    """
    if parts < 1:
        raise ValueError("parts must be at least 1")
    if len(values) == 0:
        return []
    return list(np.array_split(values, min(parts, len(values))))


def sequential_sum(values: Sequence[int]) -> int:
    """Reference sum computed one Python int at a time."""
    return sum(int(x) * int(x) for x in values if int(x) % 2 == 0)


def aggregate_values(
    values: np.ndarray,
    workers: int | None = None,
    executor: Executor | None = None,
) -> int:
    """Sum squares of even values, spreading partitions over workers.

    Partial sums are combined by addition, so the result does not depend
    on how the array is split or in which order partitions finish.

    Args:
        values: Array of non-negative integers.
        workers: Number of partitions; defaults to the CPU count.
        executor: Pool to run partitions on. When omitted, partitions are
            reduced in the calling thread.

    Returns:
        The sum as a Python int.

    Raises:
        AggregationError: If a partition fails to reduce.
    """
    values = np.asarray(values)
    chunks = partition(values, workers or os.cpu_count() or 1)
    if not chunks:
        return 0

    try:
        if executor is None or len(chunks) == 1:
            partials = [partial_sum(chunk) for chunk in chunks]
        else:
            partials = list(executor.map(partial_sum, chunks))
    except (TypeError, ValueError, FloatingPointError) as exc:
        raise AggregationError(len(chunks), str(exc)) from exc

    return sum(partials)


class Aggregator:
    """Generates value arrays and reduces them on a bounded thread pool.

    numpy releases the GIL inside its vectorized kernels, so threads
    reduce partitions in parallel without copying the array between
    processes. One instance is shared by all requests; arrays are not.

    Attributes:
        workers: Size of the reduction pool.
        random_source: Where generated values come from.
    """

    def __init__(
        self,
        workers: int | None = None,
        random_source: RandomSource | None = None,
    ) -> None:
        """Initialize the aggregator.

        Args:
            workers: Pool size; defaults to the CPU count.
            random_source: Injected randomness; defaults to thread-local
                numpy generators.
        """
        self.workers = workers or os.cpu_count() or 1
        self.random_source = random_source or NumpyRandomSource()
        self._executor = ThreadPoolExecutor(
            max_workers=self.workers,
            thread_name_prefix="aggregate",
        )

    def generate(self, n: int) -> np.ndarray:
        """Draw ``n`` values in ``[0, 10000)``."""
        if n < 0:
            raise ValueError(f"size must be non-negative, got {n}")
        return self.random_source.draw(n, VALUE_LOW, VALUE_HIGH)

    def reduce(self, values: np.ndarray) -> int:
        """Run the parallel filter-square-sum over ``values``."""
        return aggregate_values(values, workers=self.workers, executor=self._executor)

    def aggregate(self, n: int) -> AggregateOutcome:
        """Generate ``n`` values and reduce them."""
        values = self.generate(n)
        return AggregateOutcome(sum=self.reduce(values), count_generated=n)

    def close(self) -> None:
        """Shut the reduction pool down, waiting for running partitions."""
        self._executor.shutdown(wait=True)
        logger.debug("aggregator_closed", workers=self.workers)
