"""Building blocks for a Redis-compatible server: RESP parsing and encoding, command dispatch, key locks and configuration."""

__version__ = "0.1.0"