"""Serve license texts as plain text, HTML or JSON, chosen by the Accept header."""

__version__ = "1.0.0"
