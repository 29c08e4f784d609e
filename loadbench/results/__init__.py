"""Result aggregation, reporting and charts."""

from .aggregator import ResultAggregator

__all__ = ["ResultAggregator"]
