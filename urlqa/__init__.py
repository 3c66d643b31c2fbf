"""URL Context Q&A: answer questions grounded in a set of web pages."""

__version__ = "0.1.0"
