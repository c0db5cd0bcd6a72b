"""Catalog infrastructure: ORM models and gate-backed repositories."""
