"""Engine error taxonomy."""

from __future__ import annotations


class MalformedEncoding(ValueError):
    """Text does not decode to a structurally valid position."""


class IllegalAction(ValueError):
    """Submitted move text does not match any currently legal move."""
