"""Error taxonomy shared by the grading engine, the staff directory and the score ledger.

Domain code raises these; ``main.py`` renders them as JSON with the matching
HTTP status. Nothing here is retried automatically.
"""

from __future__ import annotations


class StaffRankError(Exception):
    kind = "Error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StaffRankError):
    """Bad or missing input, e.g. a blank action name or a rank the role does not allow."""

    kind = "ValidationError"
    status_code = 400


class Unauthorized(StaffRankError):
    kind = "Unauthorized"
    status_code = 401


class UnknownAction(StaffRankError):
    kind = "UnknownAction"
    status_code = 400

    def __init__(self, action: str):
        super().__init__(f"Unknown action: {action}")
        self.action = action


class NotFound(StaffRankError):
    kind = "NotFound"
    status_code = 404


class StorageFailure(StaffRankError):
    kind = "StorageFailure"
    status_code = 500
