"""Error taxonomy of the data-access layer.

A read that finds nothing is not an error: adapters return ``None`` (or
``False`` for deletes). Only write-side constraint violations and store
outages are raised.
"""

from __future__ import annotations


class DataAccessError(Exception):
    """Base class for failures surfaced by a DatabaseManager."""


class StoreUnavailableError(DataAccessError):
    """The backing store could not be reached while initializing."""


class DuplicateEmailError(DataAccessError):
    """A user with the same e-mail already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists")
        self.email = email


class OwnerNotFoundError(DataAccessError):
    """No user row matches the playlist's owner e-mail."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Owner with email {email} not found")
        self.email = email
