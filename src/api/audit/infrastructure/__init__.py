"""Audit infrastructure: ORM model, database sink, dispatcher and listing."""
