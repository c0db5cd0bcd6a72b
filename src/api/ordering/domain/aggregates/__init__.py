"""Aggregates for the ordering context."""

from ordering.domain.aggregates.order import Order, OrderLineItem

__all__ = ["Order", "OrderLineItem"]
