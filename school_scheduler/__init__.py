"""School class calendar and parent interview booking service."""

__version__ = "0.3.0"
