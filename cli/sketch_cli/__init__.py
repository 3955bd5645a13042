"""Command line editor and API client for the p5 sketch embedder."""

__version__ = "0.1.0"
