"""Exposition helpers: content negotiation and registry rendering.

Both are thin pass-throughs to prometheus_client's codec so the text and
OpenMetrics formats stay exactly what the client library emits.
"""
from __future__ import annotations

from prometheus_client import CollectorRegistry
from prometheus_client.exposition import choose_encoder

__all__ = ["resolve_content_type", "render_registry"]


def resolve_content_type(accept_header: str | None) -> str:
    """Return the content type the codec would answer ``accept_header`` with."""
    _encoder, content_type = choose_encoder(accept_header or "")
    return content_type


def render_registry(registry: CollectorRegistry, content_type: str | None = None) -> str:
    """Serialize ``registry`` in the format named by ``content_type``.

    A content type previously returned by :func:`resolve_content_type` selects
    the same encoder again; ``None`` selects the plain text format.
    """
    encoder, _content_type = choose_encoder(content_type or "")
    return encoder(registry).decode("utf-8")
