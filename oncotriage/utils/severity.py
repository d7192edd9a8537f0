"""Severity classification over detected symptom tokens."""

from typing import Iterable, Optional
from oncotriage.config.vocabulary import TriageVocabulary, get_vocabulary
from oncotriage.models.triage import SeverityTier


def classify_severity(
    symptoms: Iterable[str], vocabulary: Optional[TriageVocabulary] = None
) -> SeverityTier:
    """
    Assign a severity tier to a set of symptom tokens.

    Tiers are checked critical, high, moderate in that order and the first
    tier sharing any token with the input wins. Only membership matters:
    one critical token outranks any number of moderate ones.

    Args:
        symptoms: Detected symptom tokens
        vocabulary: Tier vocabularies (shared one by default)

    Returns:
        SeverityTier, LOW when no tier matches
    """
    vocabulary = vocabulary or get_vocabulary()
    detected = set(symptoms)

    tiers = (
        (SeverityTier.CRITICAL, vocabulary.critical_symptoms),
        (SeverityTier.HIGH, vocabulary.high_symptoms),
        (SeverityTier.MODERATE, vocabulary.moderate_symptoms),
    )
    for tier, tier_symptoms in tiers:
        if detected.intersection(tier_symptoms):
            return tier

    return SeverityTier.LOW
