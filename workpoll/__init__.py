"""
Asynchronous work polling over HTTP.

A work registry served over HTTP that answers long-running submissions with
303 See Other plus Retry-After, and a client that follows those hints until
the final result is ready.
"""

__version__ = "1.0.0"
