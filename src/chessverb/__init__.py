"""chessverb — a pure-Python chess rules engine with an agent-facing session layer."""

__version__ = "0.1.0"
