"""Audit presentation layer."""
