"""Modality analyzers.

Each analyzer turns one kind of raw input into a ``Finding``. Input is
validated by the caller before an analyzer runs, so analyzers assume
well-formed payloads and have no internal fallible step of their own.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
from oncotriage.config.settings import settings
from oncotriage.config.vocabulary import TriageVocabulary, get_vocabulary
from oncotriage.models.finding import Finding, TextDetail, VoiceDetail
from oncotriage.models.messages import ImageInput, VoiceInput
from oncotriage.models.triage import Modality
from oncotriage.tools.inference import ModalityInferenceProvider, get_inference_provider
from oncotriage.utils.lexicon import (
    extract_key_phrases,
    extract_medical_terms,
    extract_symptoms,
)
from oncotriage.utils.severity import classify_severity
import logging

logger = logging.getLogger(__name__)


class ModalityAnalyzer(ABC):
    """Common capability of the text, voice and image analyzers."""

    modality: Modality

    def __init__(
        self,
        vocabulary: Optional[TriageVocabulary] = None,
        provider: Optional[ModalityInferenceProvider] = None,
    ):
        self.vocabulary = vocabulary or get_vocabulary()
        self._provider = provider

    @property
    def provider(self) -> ModalityInferenceProvider:
        if self._provider is None:
            self._provider = get_inference_provider()
        return self._provider

    @abstractmethod
    async def analyze(self, raw_input: Any) -> Finding:
        """Produce a Finding from the modality's raw input."""
        pass


class TextAnalyzer(ModalityAnalyzer):
    """Keyword analysis of free text."""

    modality = Modality.TEXT

    def __init__(
        self,
        vocabulary: Optional[TriageVocabulary] = None,
        provider: Optional[ModalityInferenceProvider] = None,
        confidence: Optional[float] = None,
    ):
        super().__init__(vocabulary, provider)
        if confidence is None:
            confidence = settings.text_analysis_confidence
        self.confidence = confidence

    async def analyze(self, raw_input: str) -> Finding:
        symptoms = extract_symptoms(raw_input, self.vocabulary)
        severity = classify_severity(symptoms, self.vocabulary)

        return Finding(
            modality=self.modality.value,
            detected_symptoms=symptoms,
            confidence=self.confidence,
            severity=severity,
            detail=TextDetail(
                key_phrases=extract_key_phrases(raw_input, self.vocabulary),
                medical_terms=extract_medical_terms(raw_input, self.vocabulary),
            ),
        )


class VoiceAnalyzer(ModalityAnalyzer):
    """Transcript analysis overlaid with acoustic features."""

    modality = Modality.VOICE

    def __init__(
        self,
        vocabulary: Optional[TriageVocabulary] = None,
        provider: Optional[ModalityInferenceProvider] = None,
    ):
        super().__init__(vocabulary, provider)
        self.text_analyzer = TextAnalyzer(self.vocabulary, provider)

    async def analyze(self, raw_input: VoiceInput) -> Finding:
        text_finding = await self.text_analyzer.analyze(raw_input.transcript)
        features = await self.provider.voice_features(
            raw_input.transcript, raw_input.audio_data
        )

        return Finding(
            modality=self.modality.value,
            detected_symptoms=text_finding.detected_symptoms,
            confidence=text_finding.confidence,
            severity=text_finding.severity,
            detail=VoiceDetail(
                key_phrases=text_finding.detail.key_phrases,
                medical_terms=text_finding.detail.medical_terms,
                voice_features=features,
                original_confidence=raw_input.confidence,
            ),
        )


class ImageAnalyzer(ModalityAnalyzer):
    """Image findings from the inference provider."""

    modality = Modality.IMAGE

    def __init__(
        self,
        vocabulary: Optional[TriageVocabulary] = None,
        provider: Optional[ModalityInferenceProvider] = None,
        confidence: Optional[float] = None,
    ):
        super().__init__(vocabulary, provider)
        if confidence is None:
            confidence = settings.default_analysis_confidence
        self.confidence = confidence

    async def analyze(self, raw_input: ImageInput) -> Finding:
        detail = await self.provider.analyze_image(raw_input.data, raw_input.metadata)

        # Condition labels are the symptoms used for tiering
        symptoms = []
        for finding in detail.findings:
            if finding.condition not in symptoms:
                symptoms.append(finding.condition)

        logger.info(
            f"Image analysis ({self.provider.provider_name}): "
            f"{len(detail.findings)} findings, quality {detail.quality_score}"
        )

        return Finding(
            modality=self.modality.value,
            detected_symptoms=symptoms,
            confidence=self.confidence,
            severity=classify_severity(symptoms, self.vocabulary),
            detail=detail,
        )


_ANALYZERS = {
    Modality.TEXT: TextAnalyzer,
    Modality.VOICE: VoiceAnalyzer,
    Modality.IMAGE: ImageAnalyzer,
}


def get_analyzer(
    modality: Modality,
    vocabulary: Optional[TriageVocabulary] = None,
    provider: Optional[ModalityInferenceProvider] = None,
) -> ModalityAnalyzer:
    """Build the analyzer for a modality."""
    return _ANALYZERS[modality](vocabulary=vocabulary, provider=provider)
