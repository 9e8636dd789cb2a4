"""In-memory song library and visit counter served over HTTP."""

__version__ = "1.0.0"
