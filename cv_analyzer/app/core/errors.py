# cv_analyzer/app/core/errors.py
from __future__ import annotations
from typing import Optional


class CVAnalyzerError(Exception):
    """Base error for everything outside the pure parsing/ranking core."""


class WebhookError(CVAnalyzerError):
    """The analysis/scoring webhook failed (non-2xx reply or transport error)."""

    def __init__(self, message: str, *, operation: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.operation = operation
        self.status_code = status_code
