"""Triage error taxonomy."""

from enum import Enum


class ErrorKind(str, Enum):
    """Classification of triage failures."""

    INVALID_INPUT = "invalid_input"  # Caller must correct and resubmit
    ANALYSIS_FAILED = "analysis_failed"  # Fatal for this request


class TriageError(Exception):
    """Base error for the triage core."""

    kind: ErrorKind = ErrorKind.ANALYSIS_FAILED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(TriageError):
    """Required field missing, type unrecognized, or session misuse."""

    kind = ErrorKind.INVALID_INPUT


class AnalysisFailed(TriageError):
    """Unexpected failure inside a modality analyzer."""

    kind = ErrorKind.ANALYSIS_FAILED
