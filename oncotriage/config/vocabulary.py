"""Fixed triage vocabularies.

Symptom keywords, medical terms, severity tiers and specialty routing rules
are read-only configuration. They are built once by ``get_vocabulary()`` and
shared across requests; callers that need a different vocabulary build their
own ``TriageVocabulary`` and pass it explicitly.
"""

from pydantic import BaseModel
from typing import Dict, List, Optional, Tuple
from oncotriage.config.settings import settings
import logging

logger = logging.getLogger(__name__)


# Symptom keywords recognised in free text, in reporting order
SYMPTOM_KEYWORDS: Tuple[str, ...] = (
    "疼痛", "头痛", "腹痛", "胸痛", "关节痛",
    "发热", "发烧", "高烧", "低烧",
    "恶心", "呕吐", "头晕", "乏力",
    "腹泻", "便秘", "皮疹", "瘙痒",
    "咳嗽", "呼吸困难", "胸闷",
    "失眠", "焦虑", "抑郁",
    "食欲不振", "体重下降", "肿胀",
)

# Treatment, lab and imaging terms common in oncology notes
MEDICAL_TERMS: Tuple[str, ...] = (
    "化疗", "放疗", "手术", "免疫治疗",
    "血常规", "CT", "MRI", "PET-CT",
    "肿瘤标志物", "CEA", "CA199", "AFP",
    "白细胞", "血小板", "血红蛋白",
    "肝功能", "肾功能", "心电图",
)

CRITICAL_SYMPTOMS: Tuple[str, ...] = ("呼吸困难", "胸痛", "昏迷", "大出血", "严重疼痛")
HIGH_SYMPTOMS: Tuple[str, ...] = ("高烧", "剧烈疼痛", "呕吐不止", "心律不齐")
MODERATE_SYMPTOMS: Tuple[str, ...] = ("发热", "疼痛", "恶心", "头晕")

SENTENCE_TERMINATORS = "。！？.!?"


class SpecialtyRule(BaseModel):
    """Routes a symptom set to a specialty."""

    specialty: str
    symptoms: Tuple[str, ...]

    class Config:
        frozen = True


# Evaluated in declaration order, first match wins
SPECIALTY_RULES: Tuple[SpecialtyRule, ...] = (
    SpecialtyRule(specialty="皮肤科", symptoms=("皮疹", "瘙痒", "红斑")),  # dermatology
    SpecialtyRule(specialty="心内科", symptoms=("胸痛", "呼吸困难", "心律不齐")),  # cardiology
    SpecialtyRule(specialty="消化内科", symptoms=("腹痛", "恶心", "呕吐", "腹泻")),  # gastroenterology
    SpecialtyRule(specialty="神经内科", symptoms=("头痛", "头晕", "昏迷")),  # neurology
    SpecialtyRule(specialty="内科", symptoms=("发热", "乏力")),  # internal medicine
)


class TriageVocabulary(BaseModel):
    """Immutable bundle of every vocabulary the rule engine consults."""

    symptom_keywords: Tuple[str, ...] = SYMPTOM_KEYWORDS
    medical_terms: Tuple[str, ...] = MEDICAL_TERMS
    critical_symptoms: Tuple[str, ...] = CRITICAL_SYMPTOMS
    high_symptoms: Tuple[str, ...] = HIGH_SYMPTOMS
    moderate_symptoms: Tuple[str, ...] = MODERATE_SYMPTOMS
    specialty_rules: Tuple[SpecialtyRule, ...] = SPECIALTY_RULES
    sentence_terminators: str = SENTENCE_TERMINATORS
    max_key_phrases: int = 5

    class Config:
        frozen = True


def find_specialty_collisions(vocabulary: TriageVocabulary) -> Dict[str, List[str]]:
    """
    Find symptom tokens claimed by more than one specialty rule.

    Args:
        vocabulary: Vocabulary to inspect

    Returns:
        Mapping of token -> specialties claiming it (only tokens with 2+)
    """
    claims: Dict[str, List[str]] = {}
    for rule in vocabulary.specialty_rules:
        for symptom in rule.symptoms:
            claims.setdefault(symptom, []).append(rule.specialty)

    return {token: owners for token, owners in claims.items() if len(owners) > 1}


# Global vocabulary instance
_vocabulary: Optional[TriageVocabulary] = None


def get_vocabulary() -> TriageVocabulary:
    """Get or create the shared TriageVocabulary instance."""
    global _vocabulary
    if _vocabulary is None:
        _vocabulary = TriageVocabulary(max_key_phrases=settings.max_key_phrases)

        collisions = find_specialty_collisions(_vocabulary)
        for token, owners in collisions.items():
            # First match still wins; surfaced so overlap is a visible decision
            logger.warning(
                f"Symptom '{token}' is routed by several specialty rules: {owners}"
            )
    return _vocabulary
