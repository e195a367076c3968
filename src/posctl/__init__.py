"""posctl — restaurant point-of-sale control CLI."""

__version__ = "0.1.0"
