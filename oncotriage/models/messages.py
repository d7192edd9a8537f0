"""API request and response models."""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime
from oncotriage.models.assessment import Assessment, PatientContext
from oncotriage.models.session import QuickAssessmentResult, QuickQuestion
from oncotriage.models.triage import SessionStatus


class VoiceInput(BaseModel):
    """Voice submission: recognised transcript plus recogniser confidence."""

    transcript: Optional[str] = None
    confidence: Optional[float] = None
    audio_data: Optional[str] = Field(None, description="base64 encoded audio")


class ImageInput(BaseModel):
    """Image submission."""

    data: Optional[str] = Field(None, description="base64 encoded image")
    metadata: Optional[Dict[str, Any]] = None


class AnalysisData(BaseModel):
    """Raw payload; exactly the field matching the request type is required."""

    text: Optional[str] = None
    voice: Optional[VoiceInput] = None
    image: Optional[ImageInput] = None


class AnalysisRequest(BaseModel):
    """Request to assess symptoms from one modality."""

    type: str = Field(..., description="text, voice or image")
    data: AnalysisData = Field(default_factory=AnalysisData)
    context: Optional[PatientContext] = None


class AnalysisResponse(BaseModel):
    """Response wrapping a completed assessment."""

    success: bool = True
    result: Assessment
    timestamp: datetime
    analysis_id: str


class QuickAnswerRequest(BaseModel):
    """Answer to the current quick-triage question."""

    session_id: str = Field(..., description="Session ID")
    answer: bool


class QuickTriageResponse(BaseModel):
    """Current questionnaire state: the next question or the terminal result."""

    session_id: str
    status: SessionStatus
    question_index: int
    total_questions: int
    question: Optional[QuickQuestion] = None
    answers: Dict[str, bool] = Field(default_factory=dict)
    result: Optional[QuickAssessmentResult] = None


class CapabilityResponse(BaseModel):
    """Supported modalities, languages and formats."""

    success: bool = True
    capabilities: Dict[str, Dict[str, Any]]
