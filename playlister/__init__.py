"""Playlister backend: playlist CRUD over interchangeable document/relational stores."""
