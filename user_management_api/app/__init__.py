"""
Application package initializer.

The project is organised into layers: ``schemas`` (wire models),
``repositories`` (SQLite access), ``services`` (business rules) and
``api`` (HTTP handlers), with shared configuration, logging, database
and error definitions in ``core``.
"""

from .main import app  # noqa: F401
