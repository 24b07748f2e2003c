"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives its
repository at construction time, so the storage can be swapped (or
mocked in tests) without changing API handlers.
"""
