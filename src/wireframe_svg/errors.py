from __future__ import annotations


class WireframeSvgError(Exception):
    """Base class for errors raised while converting wireframes."""


class FontLoadError(WireframeSvgError):
    """Raised when a configured font cannot be fetched or registered."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Failed to load font from {source}: {reason}")
        self.source = source
        self.reason = reason


class WireframeNotFoundError(WireframeSvgError, FileNotFoundError):
    """Raised by repositories when a wireframe document does not exist."""


__all__ = ["FontLoadError", "WireframeNotFoundError", "WireframeSvgError"]
