"""Multimodal assessment service."""

from typing import Any, Optional, Tuple
from oncotriage.agents.analyzers import get_analyzer
from oncotriage.config.vocabulary import TriageVocabulary, get_vocabulary
from oncotriage.errors import AnalysisFailed, InvalidInput
from oncotriage.models.assessment import Assessment
from oncotriage.models.messages import AnalysisRequest
from oncotriage.models.triage import Modality
from oncotriage.tools.inference import ModalityInferenceProvider
from oncotriage.utils.recommendations import recommend
import logging

logger = logging.getLogger(__name__)


CAPABILITIES = {
    "text_analysis": {
        "supported": True,
        "languages": ["zh-CN", "en-US"],
        "features": [
            "symptom_extraction",
            "severity_assessment",
            "medical_term_recognition",
        ],
    },
    "voice_analysis": {
        "supported": True,
        "languages": ["zh-CN", "en-US"],
        "features": [
            "speech_to_text",
            "voice_quality_analysis",
            "emotional_state_detection",
        ],
    },
    "image_analysis": {
        "supported": True,
        "formats": ["jpeg", "png", "webp"],
        "max_size": "10MB",
        "features": [
            "skin_condition_detection",
            "wound_assessment",
            "document_ocr",
        ],
    },
}


class AssessmentService:
    """Runs a modality analyzer and composes the final assessment."""

    def __init__(
        self,
        vocabulary: Optional[TriageVocabulary] = None,
        provider: Optional[ModalityInferenceProvider] = None,
    ):
        self.vocabulary = vocabulary or get_vocabulary()
        self.provider = provider

    def validate_request(self, request: AnalysisRequest) -> Tuple[Modality, Any]:
        """
        Check that the payload for the requested modality is present.

        Args:
            request: Incoming analysis request

        Returns:
            Tuple of (modality, raw analyzer input)

        Raises:
            InvalidInput: unknown type or missing payload
        """
        try:
            modality = Modality(request.type)
        except ValueError:
            raise InvalidInput("Invalid analysis type")

        data = request.data
        if modality == Modality.TEXT:
            if not data.text:
                raise InvalidInput("Text data required")
            return modality, data.text

        if modality == Modality.VOICE:
            if data.voice is None or not data.voice.transcript:
                raise InvalidInput("Voice transcript required")
            return modality, data.voice

        if data.image is None or not data.image.data:
            raise InvalidInput("Image data required")
        return modality, data.image

    async def assess(self, request: AnalysisRequest) -> Assessment:
        """
        Assess one symptom submission.

        Patient context is accepted but does not influence the result.

        Args:
            request: Analysis request

        Returns:
            Assessment

        Raises:
            InvalidInput: request failed validation, analyzer never ran
            AnalysisFailed: the analyzer raised; no partial result is returned
        """
        modality, raw_input = self.validate_request(request)
        analyzer = get_analyzer(modality, self.vocabulary, self.provider)

        try:
            finding = await analyzer.analyze(raw_input)
        except Exception as e:
            logger.error(f"{modality.value} analysis failed: {e}", exc_info=True)
            raise AnalysisFailed("Analysis failed") from e

        recommendation = recommend(
            finding.severity, finding.detected_symptoms, self.vocabulary
        )

        assessment = Assessment(
            severity=finding.severity,
            confidence=finding.confidence,
            symptoms=finding.detected_symptoms,
            urgency=recommendation.urgency,
            recommendations=recommendation.recommendations,
            specialty_recommended=recommendation.specialty_recommended,
            follow_up_required=recommendation.follow_up_required,
            modality_detail=finding,
        )

        logger.info(
            f"Assessment {assessment.assessment_id}: type={modality.value}, "
            f"severity={assessment.severity.value}, symptoms={assessment.symptoms}"
        )
        return assessment

    def get_capabilities(self) -> dict:
        """Static descriptor of supported modalities and formats."""
        return CAPABILITIES


# Global service instance
_assessment_service: Optional[AssessmentService] = None


def get_assessment_service() -> AssessmentService:
    """Get or create AssessmentService instance."""
    global _assessment_service
    if _assessment_service is None:
        _assessment_service = AssessmentService()
    return _assessment_service
