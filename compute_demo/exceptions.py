"""Custom exceptions for the compute demo service."""


class ComputeDemoError(Exception):
    """Base exception for all compute demo errors."""
    
    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ConfigurationError(ComputeDemoError):
    """Raised when process settings cannot be loaded from the environment.
    
    Attributes:
        errors: Field-level problems reported by the settings loader.
    """
    
    def __init__(self, errors: list[str]):
        super().__init__(
            message="Invalid configuration: " + "; ".join(errors),
            code="INVALID_CONFIGURATION"
        )
        self.errors = errors


class AggregationError(ComputeDemoError):
    """Raised when a reduction worker fails while summing a partition.
    
    Attributes:
        partitions: Number of partitions the array was split into.
    """
    
    def __init__(self, partitions: int, reason: str):
        super().__init__(
            message=f"Aggregation over {partitions} partitions failed: {reason}",
            code="AGGREGATION_FAILED"
        )
        self.partitions = partitions
