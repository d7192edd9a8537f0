"""Quick-triage questionnaire schemas."""

from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime
from oncotriage.models.triage import QuestionTag, QuickUrgency, SessionStatus
import uuid


class QuickQuestion(BaseModel):
    """A yes/no screening question."""

    id: str
    question: str
    tags: List[QuestionTag] = Field(default_factory=list)

    class Config:
        frozen = True

    def has_tag(self, tag: QuestionTag) -> bool:
        return tag in self.tags


class QuickAssessmentResult(BaseModel):
    """Terminal outcome of the questionnaire."""

    urgency: QuickUrgency
    message: str
    actions: List[str] = Field(default_factory=list)

    class Config:
        frozen = True


class QuickTriageSession(BaseModel):
    """Per-caller questionnaire state."""

    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    status: SessionStatus = SessionStatus.ACTIVE
    current_question_index: int = 0
    answers: Dict[str, bool] = Field(default_factory=dict)
    result: Optional[QuickAssessmentResult] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "session_id": "123e4567-e89b-12d3-a456-426614174000",
                "status": "active",
                "current_question_index": 2,
                "answers": {"breathing": False, "chest_pain": False},
            }
        }
