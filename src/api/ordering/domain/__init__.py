"""Ordering domain: carts, orders and their money arithmetic."""
