"""chorddrill: chord and chord-progression exercise generation and answer checking."""

__version__ = "0.1.0"
