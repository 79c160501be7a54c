"""REST backend for recording animal training sessions."""

__version__ = "0.1.0"
