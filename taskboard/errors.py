"""Error taxonomy shared by the aggregates and the HTTP layer.

Aggregates raise these after querying authoritative state; ``main.py`` maps
them onto the failure envelope using ``status_code``.
"""

from typing import List, Optional


class TaskboardError(Exception):
    status_code = 500

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors


class ValidationError(TaskboardError):
    """Malformed or semantically invalid input."""
    status_code = 400


class Unauthorized(TaskboardError):
    status_code = 401


class Forbidden(TaskboardError):
    """Authenticated subject lacks the required relationship to the target."""
    status_code = 403


class NotFound(TaskboardError):
    status_code = 404


class Conflict(TaskboardError):
    """Uniqueness violation (duplicate collaborator, duplicate email)."""
    status_code = 409
