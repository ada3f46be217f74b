"""Service layer for the compute endpoint."""

import re
import time

from structlog import get_logger

from .aggregator import Aggregator
from .schemas import AggregateResult

logger = get_logger("compute")

DEFAULT_SIZE = 10_000_000
MAX_SIZE = 2**64 - 1

SIZE_RE = re.compile(r"\+?[0-9]+")

# (threshold in seconds, divisor, suffix), largest first
_DURATION_UNITS = (
    (1.0, 1.0, "s"),
    (1e-3, 1e-3, "ms"),
    (1e-6, 1e-6, "µs"),
)


def resolve_size(raw: str | None) -> int:
    """Normalize the raw ``size`` query value into a concrete count.
    
    Accepts an optional ``+`` followed by ASCII digits that fit an
    unsigned 64-bit integer. Anything else, including an absent value,
    resolves to ``DEFAULT_SIZE``.
    
    Args:
        raw: Query parameter value, or None when absent.
        
    Returns:
        Non-negative size.
    """
    if raw is None:
        return DEFAULT_SIZE
    if not SIZE_RE.fullmatch(raw):
        logger.debug("size_defaulted", raw=raw, reason="unparsable")
        return DEFAULT_SIZE
    size = int(raw)
    if size > MAX_SIZE:
        logger.debug("size_defaulted", raw=raw, reason="overflow")
        return DEFAULT_SIZE
    return size


def format_duration(seconds: float) -> str:
    """Render a duration with two decimals in the largest fitting unit.
    
    Examples: ``1.50s``, ``12.35ms``, ``3.00µs``, ``250.00ns``.
    """
    for threshold, divisor, suffix in _DURATION_UNITS:
        if seconds >= threshold:
            return f"{seconds / divisor:.2f}{suffix}"
    return f"{seconds * 1e9:.2f}ns"


def run_compute(aggregator: Aggregator, size: int) -> AggregateResult:
    """Generate ``size`` values and time their reduction.
    
    Only the filter-square-sum is inside the timed window; generating
    the array is not.
    
    Args:
        aggregator: Shared aggregator.
        size: Resolved number of values.
        
    Returns:
        AggregateResult with sum and elapsed time.
    """
    values = aggregator.generate(size)
    
    start = time.perf_counter()
    total = aggregator.reduce(values)
    elapsed = time.perf_counter() - start
    
    result = AggregateResult(size=size, sum=total, elapsed_seconds=elapsed)
    logger.info(
        "compute_completed",
        size=size,
        sum=total,
        elapsed_ms=round(elapsed * 1000, 3),
        workers=aggregator.workers,
    )
    return result


def render_report(result: AggregateResult) -> str:
    """Format a result as the three-line plain-text response body."""
    return (
        f"Processed {result.size} numbers\n"
        f"Result: {result.sum}\n"
        f"Time: {format_duration(result.elapsed_seconds)}"
    )
