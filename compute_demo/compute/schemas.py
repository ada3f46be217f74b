"""Pydantic schemas for compute results."""

from pydantic import BaseModel, Field


class AggregateResult(BaseModel):
    """Outcome of one ``/compute`` request.
    
    Attributes:
        size: Number of values requested and generated.
        sum: Sum of squares of the even values.
        elapsed_seconds: Wall-clock time spent in the reduction.
    """
    
    size: int = Field(ge=0)
    sum: int = Field(ge=0)
    elapsed_seconds: float = Field(ge=0)
