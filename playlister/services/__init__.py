"""
High-level use cases for the Playlister backend.

Services orchestrate a DatabaseManager to implement business rules
(ownership checks, defaults, canonical output). Controllers call these
services instead of touching an adapter directly.
"""
