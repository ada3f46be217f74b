"""Global dependencies for the application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Request

if TYPE_CHECKING:
    from compute_demo.compute.aggregator import Aggregator


async def get_aggregator(request: Request) -> Aggregator:
    """Dependency to get the shared aggregator.
    
    The aggregator and its reduction pool are created in the main.py
    lifespan and shared across requests.
    
    Args:
        request: The FastAPI request object.
        
    Returns:
        The process-wide Aggregator instance.
    """
    return request.app.state.aggregator
