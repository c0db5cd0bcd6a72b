"""Ordering application layer: cart validation and order fulfillment."""
