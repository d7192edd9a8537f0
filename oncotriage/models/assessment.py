"""Assessment schema produced by the triage core."""

from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import datetime
from oncotriage.models.triage import SeverityTier
from oncotriage.models.finding import Finding
import uuid


class PatientContext(BaseModel):
    """Optional patient context accompanying an assessment request."""

    patient_id: Optional[int] = None
    medical_history: List[Any] = Field(default_factory=list)
    current_medications: List[Any] = Field(default_factory=list)
    allergies: List[Any] = Field(default_factory=list)


class Recommendation(BaseModel):
    """Recommendation engine output."""

    urgency: int = Field(..., ge=1, le=4)
    recommendations: List[str] = Field(default_factory=list)
    specialty_recommended: Optional[str] = None
    follow_up_required: bool

    class Config:
        frozen = True


class Assessment(BaseModel):
    """Completed multimodal triage assessment."""

    assessment_id: str = Field(
        default_factory=lambda: f"analysis_{uuid.uuid4().hex[:12]}"
    )
    created_at: datetime = Field(default_factory=datetime.utcnow)

    # Triage decision
    severity: SeverityTier
    confidence: float = Field(..., ge=0.0, le=1.0)
    symptoms: List[str] = Field(default_factory=list)
    urgency: int = Field(..., ge=1, le=4)

    # Recommendations
    recommendations: List[str] = Field(default_factory=list)
    specialty_recommended: Optional[str] = None
    follow_up_required: bool

    # Analyzer output
    modality_detail: Finding

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "assessment_id": "analysis_3f2a9c1b7d4e",
                "severity": "moderate",
                "confidence": 0.85,
                "symptoms": ["头痛", "发热"],
                "urgency": 2,
                "specialty_recommended": "神经内科",
                "follow_up_required": True,
            }
        }
