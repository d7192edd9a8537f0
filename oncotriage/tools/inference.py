"""Modality inference providers.

Acoustic voice features and image findings come from an inference provider.
The bundled ``MockInferenceProvider`` returns fixed outputs; a real model
service implements ``ModalityInferenceProvider`` and is returned from
``get_inference_provider()`` without touching the classifier or recommender.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from oncotriage.config.settings import settings
from oncotriage.models.finding import (
    ImageDetail,
    ImageFinding,
    TechnicalMetrics,
    VoiceFeatures,
)
import asyncio
import logging

logger = logging.getLogger(__name__)


class ModalityInferenceProvider(ABC):
    """
    Abstract base for voice and image inference.

    Implementations must keep every confidence and score in [0, 1].
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Name of this provider."""
        pass

    @abstractmethod
    async def voice_features(
        self, transcript: str, audio_data: Optional[str] = None
    ) -> VoiceFeatures:
        """
        Extract acoustic features for a voice submission.

        Args:
            transcript: Recognised speech
            audio_data: base64 encoded audio, when the client sent it

        Returns:
            VoiceFeatures
        """
        pass

    @abstractmethod
    async def analyze_image(
        self, data: str, metadata: Optional[Dict[str, Any]] = None
    ) -> ImageDetail:
        """
        Locate conditions in an image.

        Args:
            data: base64 encoded image
            metadata: Client supplied image metadata

        Returns:
            ImageDetail with findings, advice and quality metrics
        """
        pass


class MockInferenceProvider(ModalityInferenceProvider):
    """Fixed-output provider standing in for acoustic and imaging models."""

    def __init__(self, image_delay_seconds: Optional[float] = None):
        if image_delay_seconds is None:
            image_delay_seconds = settings.image_processing_delay_seconds
        self.image_delay_seconds = image_delay_seconds

    @property
    def provider_name(self) -> str:
        return "mock"

    async def voice_features(
        self, transcript: str, audio_data: Optional[str] = None
    ) -> VoiceFeatures:
        return VoiceFeatures(
            speech_rate="normal",
            pause_pattern="regular",
            voice_quality="clear",
            emotional_state="concerned",
            distress_level=0.3,
        )

    async def analyze_image(
        self, data: str, metadata: Optional[Dict[str, Any]] = None
    ) -> ImageDetail:
        if self.image_delay_seconds > 0:
            # Stands in for a remote model inference call
            await asyncio.sleep(self.image_delay_seconds)

        return ImageDetail(
            image_type="skin_condition",
            findings=[
                ImageFinding(
                    condition="皮肤红斑",
                    confidence=0.88,
                    location="detected_region_1",
                    severity="mild",
                ),
                ImageFinding(
                    condition="轻微肿胀",
                    confidence=0.72,
                    location="detected_region_2",
                    severity="mild",
                ),
            ],
            recommendations=["建议皮肤科医生检查", "避免抓挠患处", "保持患处清洁干燥"],
            quality_score=0.9,
            technical_metrics=TechnicalMetrics(
                resolution="adequate", lighting="good", focus="sharp"
            ),
        )


_PROVIDERS = {
    "mock": MockInferenceProvider,
}

# Global provider instance
_inference_provider: Optional[ModalityInferenceProvider] = None


def get_inference_provider() -> ModalityInferenceProvider:
    """Get or create the configured inference provider."""
    global _inference_provider
    if _inference_provider is None:
        provider_cls = _PROVIDERS.get(settings.inference_provider)
        if provider_cls is None:
            raise RuntimeError(
                f"Unknown inference provider: {settings.inference_provider}"
            )
        _inference_provider = provider_cls()
        logger.info(f"Using inference provider: {_inference_provider.provider_name}")
    return _inference_provider
