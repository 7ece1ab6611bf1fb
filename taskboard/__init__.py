"""Task tracking API with a Python dashboard client."""

__version__ = "0.1.0"
