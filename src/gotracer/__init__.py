"""
gotracer: automatic call/return tracing for Go sources.

Injects entry and deferred exit log statements into every function body of a
Go file and makes sure the logging package is imported exactly once.
"""

__version__ = "0.1.0"
