"""Compute module - random generation and parallel aggregation."""

from .random_source import RandomSource, NumpyRandomSource, SequenceRandomSource
from .aggregator import (
    AggregateOutcome,
    Aggregator,
    aggregate_values,
    partial_sum,
    partition,
    sequential_sum,
)
from .schemas import AggregateResult
from .service import (
    DEFAULT_SIZE,
    resolve_size,
    format_duration,
    run_compute,
    render_report,
)
from .router import router


__all__ = [
    # Randomness
    "RandomSource",
    "NumpyRandomSource",
    "SequenceRandomSource",
    # Aggregation
    "AggregateOutcome",
    "Aggregator",
    "aggregate_values",
    "partial_sum",
    "partition",
    "sequential_sum",
    # Schemas
    "AggregateResult",
    # Service
    "DEFAULT_SIZE",
    "resolve_size",
    "format_duration",
    "run_compute",
    "render_report",
    # Router
    "router",
]
