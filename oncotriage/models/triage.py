"""Triage classification enums."""

from enum import Enum


class SeverityTier(str, Enum):
    """Severity tiers, totally ordered by escalation priority."""

    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, SeverityTier):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {
    SeverityTier.LOW: 1,
    SeverityTier.MODERATE: 2,
    SeverityTier.HIGH: 3,
    SeverityTier.CRITICAL: 4,
}


class Modality(str, Enum):
    """Input channel of a triage submission."""

    TEXT = "text"
    VOICE = "voice"
    IMAGE = "image"


class QuestionTag(str, Enum):
    """Escalation tags carried by quick-triage questions."""

    EMERGENCY = "emergency"
    URGENT = "urgent"
    MODERATE = "moderate"


class QuickUrgency(str, Enum):
    """Quick-triage outcomes."""

    EMERGENCY = "emergency"  # Call emergency services now
    URGENT = "urgent"  # Emergency department within 2-4 hours
    MODERATE = "moderate"  # See a doctor within 24 hours
    LOW = "low"  # Observe at home


class SessionStatus(str, Enum):
    """Quick-triage session status."""

    ACTIVE = "active"
    COMPLETED = "completed"
