"""Audit application layer."""
