"""FastAPI router for the compute endpoint."""

from typing import Annotated

from anyio.to_thread import run_sync
from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from compute_demo.dependencies import get_aggregator

from .aggregator import Aggregator
from .service import render_report, resolve_size, run_compute


router = APIRouter(tags=["compute"])


@router.get("/compute", response_class=PlainTextResponse)
async def compute_endpoint(
    aggregator: Annotated[Aggregator, Depends(get_aggregator)],
    size: Annotated[str | None, Query()] = None,
) -> PlainTextResponse:
    """Run the random filter-square-sum and report it as text.
    
    ``size`` is taken as a raw string so that malformed values resolve
    to the default instead of producing a validation error.
    
    Args:
        aggregator: Shared aggregator from app state.
        size: Raw size query parameter.
        
    Returns:
        Plain-text report with count, sum and reduction time.
    """
    resolved = resolve_size(size)
    # CPU-bound; keep the event loop free for other requests
    result = await run_sync(run_compute, aggregator, resolved)
    return PlainTextResponse(render_report(result))
