"""Ordering presentation layer."""
