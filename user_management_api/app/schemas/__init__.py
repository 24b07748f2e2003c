"""
Pydantic schema definitions for API payloads.

Schemas are separated from the storage layer to decouple the API
representation from the ``users`` table layout.
"""
