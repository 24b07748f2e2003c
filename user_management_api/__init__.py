"""
Top-level package for the User Management API.

The service itself lives in ``app``; ``client`` holds a small
``requests`` wrapper for talking to a running instance.
"""

__all__ = []
