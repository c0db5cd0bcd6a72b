"""Ordering infrastructure: ORM models, repositories and pricing defaults."""
