"""Symptom lexicon: keyword extraction from free text."""

import re
from typing import List, Optional
from oncotriage.config.vocabulary import TriageVocabulary, get_vocabulary


def extract_symptoms(
    text: str, vocabulary: Optional[TriageVocabulary] = None
) -> List[str]:
    """
    Detect symptom keywords in user input.

    Matching is case-sensitive whole-text containment, so a keyword embedded
    inside a longer word still matches.

    Args:
        text: Free text or voice transcript
        vocabulary: Vocabulary to match against (shared one by default)

    Returns:
        Matching symptom tokens in vocabulary order, without duplicates
    """
    vocabulary = vocabulary or get_vocabulary()
    return _filter_contained(text, vocabulary.symptom_keywords)


def extract_medical_terms(
    text: str, vocabulary: Optional[TriageVocabulary] = None
) -> List[str]:
    """Detect treatment, lab and imaging terms mentioned in the text."""
    vocabulary = vocabulary or get_vocabulary()
    return _filter_contained(text, vocabulary.medical_terms)


def extract_key_phrases(
    text: str, vocabulary: Optional[TriageVocabulary] = None
) -> List[str]:
    """
    Split text into sentences and keep the first few non-empty ones.

    Args:
        text: Free text or voice transcript
        vocabulary: Supplies the terminator characters and phrase limit

    Returns:
        Trimmed sentences in original order, at most ``max_key_phrases``
    """
    vocabulary = vocabulary or get_vocabulary()
    pattern = "[" + re.escape(vocabulary.sentence_terminators) + "]"

    phrases = [phrase.strip() for phrase in re.split(pattern, text)]
    return [phrase for phrase in phrases if phrase][: vocabulary.max_key_phrases]


def _filter_contained(text: str, keywords) -> List[str]:
    matched = []
    for keyword in keywords:
        if keyword in text and keyword not in matched:
            matched.append(keyword)
    return matched
