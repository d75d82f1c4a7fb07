"""
Core utilities shared across the Playlister backend.

This package hosts:
- configuration helpers (env vars, store selection, connection parameters)
- cross-cutting concerns such as logging and the data-access error taxonomy.

Repositories and services should depend on these primitives instead of
reading os.environ or configuring loggers themselves.
"""
