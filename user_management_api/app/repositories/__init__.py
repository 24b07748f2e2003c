"""
Persistence layer.

Repositories wrap the SQLite tables created by ``core.db`` and hand
back schema objects, so services never touch SQL directly.
"""
