"""Modality findings: normalized analyzer output."""

from pydantic import BaseModel, Field
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from oncotriage.models.triage import SeverityTier


class VoiceFeatures(BaseModel):
    """Acoustic feature vector for a voice submission."""

    speech_rate: str = "normal"
    pause_pattern: str = "regular"
    voice_quality: str = "clear"
    emotional_state: str = "concerned"
    distress_level: float = Field(default=0.3, ge=0.0, le=1.0)


class ImageFinding(BaseModel):
    """A single condition located in an image."""

    condition: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    location: str
    severity: str


class TechnicalMetrics(BaseModel):
    """Capture quality of a submitted image."""

    resolution: str
    lighting: str
    focus: str


class TextDetail(BaseModel):
    """Text modality detail."""

    modality: Literal["text"] = "text"
    key_phrases: List[str] = Field(default_factory=list)
    medical_terms: List[str] = Field(default_factory=list)
    extensions: Dict[str, Any] = Field(default_factory=dict)


class VoiceDetail(BaseModel):
    """Voice modality detail: transcript analysis plus acoustic features."""

    modality: Literal["voice"] = "voice"
    key_phrases: List[str] = Field(default_factory=list)
    medical_terms: List[str] = Field(default_factory=list)
    voice_features: VoiceFeatures = Field(default_factory=VoiceFeatures)
    original_confidence: Optional[float] = None  # As reported by the recogniser
    extensions: Dict[str, Any] = Field(default_factory=dict)


class ImageDetail(BaseModel):
    """Image modality detail."""

    modality: Literal["image"] = "image"
    image_type: str
    findings: List[ImageFinding] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    quality_score: float = Field(..., ge=0.0, le=1.0)
    technical_metrics: TechnicalMetrics
    extensions: Dict[str, Any] = Field(default_factory=dict)


ModalityDetail = Annotated[
    Union[TextDetail, VoiceDetail, ImageDetail], Field(discriminator="modality")
]


class Finding(BaseModel):
    """Output of one modality analyzer."""

    modality: Literal["text", "voice", "image"]
    detected_symptoms: List[str] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=1.0)
    severity: SeverityTier
    detail: ModalityDetail

    class Config:
        frozen = True
