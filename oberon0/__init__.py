"""Scanner, tokens, source positions and a diagnostics logger for Oberon-0."""

__version__ = "0.0.1"
__all__ = ["position", "logger", "tokens", "scanner"]