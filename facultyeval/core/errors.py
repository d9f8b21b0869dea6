# facultyeval/core/errors.py
"""
Error taxonomy for the evaluation service.

Every error is terminal for the current request; nothing here is retried.
The HTTP layer maps ``status_code``/``code`` onto the JSON error body.
"""
from __future__ import annotations

from typing import Any, Dict


class EvaluationError(Exception):
    status_code = 500
    code = "error"
    default_message = "Evaluation service error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": False, "error": self.code, "detail": self.message}


class Unauthenticated(EvaluationError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Unauthorized"


class PermissionDenied(EvaluationError):
    status_code = 403
    code = "permission_denied"
    default_message = "Assignment not found or you don't have permission"


class PeriodClosed(EvaluationError):
    status_code = 403
    code = "period_closed"
    default_message = "Evaluation period is not open"


class IncompleteSubmission(EvaluationError):
    status_code = 400
    code = "incomplete_submission"

    def __init__(self, missing: int, total: int):
        self.missing = missing
        self.total = total
        super().__init__(
            f"Please score all {total} items ({total - missing} completed, {missing} missing)"
        )

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["missing"] = self.missing
        return out


class InvalidScore(EvaluationError):
    status_code = 400
    code = "invalid_score"
    default_message = "Score out of range"


class InvalidRequest(EvaluationError):
    status_code = 400
    code = "invalid_request"
    default_message = "Missing required fields"


class NotFound(EvaluationError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class StoreFailure(EvaluationError):
    """Wraps any error raised by the persistent store."""

    status_code = 500
    code = "store_failure"
    default_message = "Store operation failed"
