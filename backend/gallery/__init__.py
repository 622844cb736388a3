"""Gallery media listing service."""

__version__ = "0.1.0"
