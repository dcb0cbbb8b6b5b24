"""Exceptions raised by the aggregation pipeline."""

from __future__ import annotations


class AggregationError(ValueError):
    """Raised when an aggregation directive is missing or misconfigured."""


class PaginationInvariantError(RuntimeError):
    """Raised when grouped pages violate a structural invariant."""


__all__ = ["AggregationError", "PaginationInvariantError"]
