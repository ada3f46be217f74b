"""Demo web service that times a parallel random filter-square-sum."""

__version__ = "0.1.0"
