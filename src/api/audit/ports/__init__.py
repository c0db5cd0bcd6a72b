"""Ports (interfaces) for the audit bounded context."""

from audit.ports.sinks import AuditDispatcher, AuditSink

__all__ = ["AuditDispatcher", "AuditSink"]
