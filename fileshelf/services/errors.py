"""Errors raised by the storage layer."""
from __future__ import annotations


class StorageError(Exception):
    """Base class for expected storage failures.

    ``status_code`` is the HTTP status the API reports for the error.
    """

    status_code = 500


class InvalidPath(StorageError):
    """Path escapes the storage root or a parameter is malformed."""

    status_code = 400


class MissingParameters(InvalidPath):
    """A required parameter was omitted or empty."""


class NotFound(StorageError):
    status_code = 404
