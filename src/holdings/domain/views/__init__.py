"""View models for service outputs."""

from holdings.domain.views.holdings import (
    AggregateState,
    Holding,
    HoldingsResult,
)

__all__ = [
    "AggregateState",
    "Holding",
    "HoldingsResult",
]
