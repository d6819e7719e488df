"""Shared notation-layer data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PgnMove:
    """A single mainline move for PGN movetext."""

    san: str
    comment: str = ""
