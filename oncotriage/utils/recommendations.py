"""Recommendation engine: urgency, next actions and specialty routing."""

from typing import Dict, Iterable, List, Optional
from oncotriage.config.vocabulary import TriageVocabulary, get_vocabulary
from oncotriage.models.assessment import Recommendation
from oncotriage.models.triage import SeverityTier


URGENCY_BY_SEVERITY: Dict[SeverityTier, int] = {
    SeverityTier.CRITICAL: 4,
    SeverityTier.HIGH: 3,
    SeverityTier.MODERATE: 2,
    SeverityTier.LOW: 1,
}

RECOMMENDATIONS_BY_SEVERITY: Dict[SeverityTier, List[str]] = {
    SeverityTier.CRITICAL: [
        "立即前往急诊科就医",
        "拨打120急救电话",
        "准备医疗卡片和用药清单",
        "通知紧急联系人",
    ],
    SeverityTier.HIGH: [
        "尽快就医，建议24小时内",
        "准备详细症状记录",
        "携带既往病历和检查报告",
        "如症状加重立即急诊",
    ],
    SeverityTier.MODERATE: [
        "建议48小时内门诊就医",
        "密切观察症状变化",
        "记录症状日记",
        "保持充分休息",
    ],
    SeverityTier.LOW: [
        "继续观察，注意症状变化",
        "保持良好作息",
        "如症状持续或加重及时就医",
        "可先咨询在线医生",
    ],
}

FOLLOW_UP_URGENCY = 2


def urgency_for(severity: SeverityTier) -> int:
    """Map a severity tier to its 1-4 urgency score."""
    return URGENCY_BY_SEVERITY[severity]


def recommendations_for(severity: SeverityTier) -> List[str]:
    """Return the fixed action list for a severity tier."""
    return list(RECOMMENDATIONS_BY_SEVERITY[severity])


def determine_specialty(
    symptoms: Iterable[str], vocabulary: Optional[TriageVocabulary] = None
) -> Optional[str]:
    """
    Route a symptom set to a specialty.

    Rules are tested in declaration order and the first rule sharing a token
    with the input wins.

    Returns:
        Specialty name, or None when no rule matches
    """
    vocabulary = vocabulary or get_vocabulary()
    detected = set(symptoms)

    for rule in vocabulary.specialty_rules:
        if detected.intersection(rule.symptoms):
            return rule.specialty
    return None


def recommend(
    severity: SeverityTier,
    symptoms: Iterable[str],
    vocabulary: Optional[TriageVocabulary] = None,
) -> Recommendation:
    """
    Compose urgency, action list, specialty and follow-up flag.

    Args:
        severity: Classified severity tier
        symptoms: Detected symptom tokens
        vocabulary: Specialty rules (shared one by default)

    Returns:
        Recommendation
    """
    urgency = urgency_for(severity)
    return Recommendation(
        urgency=urgency,
        recommendations=recommendations_for(severity),
        specialty_recommended=determine_specialty(symptoms, vocabulary),
        follow_up_required=urgency >= FOLLOW_UP_URGENCY,
    )
