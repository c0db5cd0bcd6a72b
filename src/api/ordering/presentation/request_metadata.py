"""Caller metadata extracted from incoming requests."""

from __future__ import annotations

from fastapi import Request

from ordering.domain.value_objects import RequestMetadata

UNKNOWN = "unknown"


def extract_request_metadata(request: Request) -> RequestMetadata:
    """Read the caller IP and user agent.

    The IP is the first hop of X-Forwarded-For, else X-Real-IP, else
    ``"unknown"``. Only the proxy in front of this service sets these
    headers, so they are trusted as given.
    """
    ip_address = UNKNOWN
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            ip_address = first_hop
    if ip_address == UNKNOWN:
        ip_address = request.headers.get("x-real-ip") or UNKNOWN

    user_agent = request.headers.get("user-agent") or UNKNOWN
    return RequestMetadata(ip_address=ip_address, user_agent=user_agent)
