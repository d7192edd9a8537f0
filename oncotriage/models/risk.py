"""Structured triage form and risk score schemas."""

from pydantic import BaseModel, Field
from typing import List, Optional
from oncotriage.models.triage import QuickUrgency


class TriageForm(BaseModel):
    """Structured symptom report filled in by the patient."""

    main_symptom: Optional[str] = None
    symptom_description: str = ""
    severity: int = Field(..., ge=1, le=10)
    duration: Optional[str] = None  # sudden, worsening, stable, ...
    onset: Optional[str] = None
    pain_level: Optional[int] = Field(default=None, ge=0, le=10)
    associated_symptoms: List[str] = Field(default_factory=list)
    temperature: Optional[float] = None  # Celsius
    heart_rate: Optional[int] = None  # bpm
    blood_pressure: Optional[str] = None  # "120/80"
    activity_level: Optional[str] = None  # normal, reduced, limited, unable
    current_medications: List[str] = Field(default_factory=list)
    recent_treatments: List[str] = Field(default_factory=list)


class RiskAssessment(BaseModel):
    """Result of scoring a TriageForm."""

    urgency_level: QuickUrgency
    risk_score: int = Field(..., ge=0, le=100)
    recommendations: List[str] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)
    requires_emergency_action: bool = False
    estimated_wait_time: str
    follow_up_recommendations: List[str] = Field(default_factory=list)
