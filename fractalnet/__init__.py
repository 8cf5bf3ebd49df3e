"""Distributed fractal computation over TCP: shared protocol, worker and server."""

__version__ = "0.1.0"