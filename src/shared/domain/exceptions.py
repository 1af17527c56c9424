"""Cross-module domain exceptions.

Raised by the Service and Repository layers.  The API layer (Views)
catches these and translates them into HTTP responses:

- ``InvalidInput``        -> 400
- ``StorageUnavailable``  -> 503
- ``PersistenceFailure``  -> 500
"""

from __future__ import annotations


class InvalidInput(ValueError):
    """A required field is missing or malformed.  Never retried."""


class StorageUnavailable(Exception):
    """The backing database could not be reached.

    Callers surface this distinctly from validation failures; retrying
    is left to a higher layer.
    """


class PersistenceFailure(Exception):
    """A write was rejected by the store after validation passed."""
