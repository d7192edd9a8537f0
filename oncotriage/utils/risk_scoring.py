"""Additive risk scoring for the structured triage form."""

from typing import List
from oncotriage.models.risk import RiskAssessment, TriageForm
from oncotriage.models.triage import QuickUrgency
import logging

logger = logging.getLogger(__name__)


# Phrases in the free-text description that force an emergency score
EMERGENCY_PHRASES = (
    "严重胸痛",
    "呼吸极度困难",
    "意识丧失",
    "大量出血",
    "严重头痛伴呕吐",
    "突然言语不清",
    "面部下垂",
    "肢体无力",
    "严重腹痛",
    "高热不退",
)

MAX_RISK_SCORE = 100

_LEVEL_GUIDANCE = {
    QuickUrgency.EMERGENCY: {
        "recommendations": ["立即拨打120急救电话", "前往最近的急诊科", "准备病历和身份证件"],
        "next_steps": ["立即行动，不要拖延", "如有家人陪同更好"],
        "wait": "立即",
    },
    QuickUrgency.URGENT: {
        "recommendations": ["尽快前往医院急诊科", "联系主治医生", "监测症状变化"],
        "next_steps": ["2-4小时内就医", "准备详细症状描述"],
        "wait": "30分钟",
    },
    QuickUrgency.MODERATE: {
        "recommendations": ["24小时内就医", "可预约门诊或急诊", "密切观察症状"],
        "next_steps": ["联系家庭医生或专科医生", "记录症状发展"],
        "wait": "2-4小时",
    },
    QuickUrgency.LOW: {
        "recommendations": ["居家观察", "如症状加重及时就医", "保持休息和充足饮水"],
        "next_steps": ["可预约常规门诊", "继续监测症状"],
        "wait": "预约时间",
    },
}

_FOLLOW_UP = {
    QuickUrgency.EMERGENCY: [
        "立即拨打120急救电话",
        "前往最近的急诊科",
        "准备身份证件和病历",
        "如有家人陪同更好",
    ],
    QuickUrgency.URGENT: [
        "2-4小时内前往急诊科",
        "联系主治医生",
        "密切监测症状变化",
        "准备详细症状描述",
    ],
    QuickUrgency.MODERATE: [
        "24小时内就医",
        "可预约门诊或急诊",
        "继续观察症状",
        "如症状加重立即就医",
    ],
    QuickUrgency.LOW: [
        "居家观察",
        "充分休息",
        "多喝水",
        "如症状持续或加重请就医",
    ],
}

ONCOLOGY_REFERRAL_THRESHOLD = 60
ONCOLOGY_REFERRAL = ["考虑联系肿瘤科专家", "携带最新的检查报告"]


def calculate_risk_score(form: TriageForm) -> int:
    """Sum the risk contributions of a form, uncapped."""
    score = 0

    if any(phrase in form.symptom_description for phrase in EMERGENCY_PHRASES):
        score += 100

    if form.severity >= 8:
        score += 40
    elif form.severity >= 6:
        score += 25
    elif form.severity >= 4:
        score += 15
    else:
        score += 5

    if form.temperature is not None:
        if form.temperature >= 39:
            score += 20
        elif form.temperature >= 38:
            score += 10
        elif form.temperature <= 35:
            score += 15

    if form.heart_rate is not None:
        if form.heart_rate > 120 or form.heart_rate < 50:
            score += 20
        elif form.heart_rate > 100 or form.heart_rate < 60:
            score += 10

    if form.duration in ("sudden", "worsening"):
        score += 20

    if form.activity_level == "unable":
        score += 25
    elif form.activity_level == "limited":
        score += 15
    elif form.activity_level == "reduced":
        score += 10

    pain = form.pain_level or 0
    if pain >= 8:
        score += 20
    elif pain >= 6:
        score += 10

    if len(form.associated_symptoms) >= 3:
        score += 15
    elif len(form.associated_symptoms) >= 2:
        score += 10

    return score


def urgency_for_score(score: int) -> QuickUrgency:
    """Map an uncapped risk score to an urgency level."""
    if score >= 80:
        return QuickUrgency.EMERGENCY
    if score >= 60:
        return QuickUrgency.URGENT
    if score >= 30:
        return QuickUrgency.MODERATE
    return QuickUrgency.LOW


def follow_up_recommendations(urgency_level: str, risk_score: int) -> List[str]:
    """
    Follow-up advice stored alongside a scored form.

    Args:
        urgency_level: emergency, urgent, moderate or low
        risk_score: 0-100 risk score

    Returns:
        Fixed advice for the level, plus oncology referral for high scores
    """
    try:
        recommendations = list(_FOLLOW_UP[QuickUrgency(urgency_level)])
    except ValueError:
        recommendations = ["建议咨询医疗专业人士"]

    if risk_score > ONCOLOGY_REFERRAL_THRESHOLD:
        recommendations.extend(ONCOLOGY_REFERRAL)

    return recommendations


def score_triage_form(form: TriageForm) -> RiskAssessment:
    """
    Score a structured triage form.

    The urgency level is taken from the uncapped score; the reported score
    is capped at 100.
    """
    raw_score = calculate_risk_score(form)
    level = urgency_for_score(raw_score)
    risk_score = min(raw_score, MAX_RISK_SCORE)
    guidance = _LEVEL_GUIDANCE[level]

    logger.info(f"Scored triage form: raw={raw_score}, level={level.value}")

    return RiskAssessment(
        urgency_level=level,
        risk_score=risk_score,
        recommendations=list(guidance["recommendations"]),
        next_steps=list(guidance["next_steps"]),
        requires_emergency_action=level == QuickUrgency.EMERGENCY,
        estimated_wait_time=guidance["wait"],
        follow_up_recommendations=follow_up_recommendations(level.value, risk_score),
    )
