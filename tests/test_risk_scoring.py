from oncotriage.models.risk import TriageForm
from oncotriage.models.triage import QuickUrgency
from oncotriage.utils.risk_scoring import (
    ONCOLOGY_REFERRAL,
    calculate_risk_score,
    follow_up_recommendations,
    score_triage_form,
)


def test_mild_form_is_low():
    assessment = score_triage_form(TriageForm(severity=3))
    assert assessment.risk_score == 5
    assert assessment.urgency_level == QuickUrgency.LOW
    assert assessment.estimated_wait_time == "预约时间"
    assert assessment.requires_emergency_action is False


def test_emergency_phrase_caps_score():
    form = TriageForm(severity=9, symptom_description="昨晚开始严重胸痛，出冷汗")
    assert calculate_risk_score(form) == 140

    assessment = score_triage_form(form)
    assert assessment.risk_score == 100
    assert assessment.urgency_level == QuickUrgency.EMERGENCY
    assert assessment.requires_emergency_action is True
    assert assessment.estimated_wait_time == "立即"
    assert assessment.follow_up_recommendations[-2:] == ONCOLOGY_REFERRAL


def test_vitals_push_to_urgent():
    form = TriageForm(severity=8, temperature=38.5, heart_rate=110)
    assessment = score_triage_form(form)
    assert assessment.risk_score == 60
    assert assessment.urgency_level == QuickUrgency.URGENT
    # referral only above 60
    assert ONCOLOGY_REFERRAL[0] not in assessment.follow_up_recommendations


def test_pain_and_activity_contribute():
    form = TriageForm(
        severity=6,
        pain_level=6,
        activity_level="reduced",
        duration="worsening",
        associated_symptoms=["恶心", "乏力", "头晕"],
    )
    # 25 + 10 + 10 + 20 + 15
    assert calculate_risk_score(form) == 80


def test_low_temperature_and_slow_heart_rate():
    form = TriageForm(severity=4, temperature=34.8, heart_rate=45)
    assert calculate_risk_score(form) == 15 + 15 + 20
    assert score_triage_form(form).urgency_level == QuickUrgency.MODERATE


def test_follow_up_for_unknown_level():
    assert follow_up_recommendations("unknown", 10) == ["建议咨询医疗专业人士"]
    assert follow_up_recommendations("unknown", 61) == ["建议咨询医疗专业人士"] + ONCOLOGY_REFERRAL


def test_zero_readings_are_scored():
    assert calculate_risk_score(TriageForm(severity=1, heart_rate=0)) == 5 + 20
    assert calculate_risk_score(TriageForm(severity=1, temperature=0)) == 5 + 15
