from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""


class PostShapeError(RuntimeError):
    """Raised when a raw post matches neither the standard nor the article shape."""


class QuoteDepthError(RuntimeError):
    """Raised when a quoted-post chain nests deeper than the configured bound."""
