import pytest

from oncotriage.agents.analyzers import ImageAnalyzer, TextAnalyzer, VoiceAnalyzer
from oncotriage.errors import AnalysisFailed, ErrorKind, InvalidInput
from oncotriage.models.messages import AnalysisData, AnalysisRequest, ImageInput, VoiceInput
from oncotriage.models.triage import SeverityTier
from oncotriage.services.assessment_service import AssessmentService
from oncotriage.tools.inference import MockInferenceProvider
from oncotriage.utils.recommendations import RECOMMENDATIONS_BY_SEVERITY


class FailingProvider(MockInferenceProvider):
    async def analyze_image(self, data, metadata=None):
        raise RuntimeError("model endpoint unavailable")


@pytest.fixture
def service(provider):
    return AssessmentService(provider=provider)


@pytest.mark.asyncio
async def test_text_analyzer_finding():
    finding = await TextAnalyzer().analyze("化疗后第三天。我头痛发热！")
    assert finding.modality == "text"
    assert finding.detected_symptoms == ["头痛", "发热"]
    assert finding.severity == SeverityTier.MODERATE
    assert finding.confidence == 0.85
    assert finding.detail.key_phrases == ["化疗后第三天", "我头痛发热"]
    assert finding.detail.medical_terms == ["化疗"]


@pytest.mark.asyncio
async def test_text_analyzer_is_idempotent():
    analyzer = TextAnalyzer()
    first = await analyzer.analyze("胸闷，咳嗽，失眠")
    second = await analyzer.analyze("胸闷，咳嗽，失眠")
    assert first == second


@pytest.mark.asyncio
async def test_voice_analyzer_keeps_original_confidence(provider):
    finding = await VoiceAnalyzer(provider=provider).analyze(
        VoiceInput(transcript="我一直恶心，还头晕", confidence=0.92)
    )
    assert finding.modality == "voice"
    assert finding.detected_symptoms == ["恶心", "头晕"]
    assert finding.severity == SeverityTier.MODERATE
    assert finding.confidence == 0.85
    assert finding.detail.original_confidence == 0.92
    assert finding.detail.voice_features.emotional_state == "concerned"
    assert finding.detail.voice_features.distress_level == 0.3


@pytest.mark.asyncio
async def test_image_analyzer_uses_condition_labels(provider):
    finding = await ImageAnalyzer(provider=provider).analyze(ImageInput(data="aGVsbG8="))
    assert finding.detected_symptoms == ["皮肤红斑", "轻微肿胀"]
    assert finding.severity == SeverityTier.LOW
    assert finding.confidence == 0.8
    assert finding.detail.image_type == "skin_condition"
    assert finding.detail.technical_metrics.focus == "sharp"


@pytest.mark.asyncio
async def test_headache_and_fever_scenario(service):
    assessment = await service.assess(
        AnalysisRequest(type="text", data=AnalysisData(text="我头痛发热"))
    )
    assert assessment.severity == SeverityTier.MODERATE
    assert assessment.urgency == 2
    assert assessment.follow_up_required is True
    assert assessment.specialty_recommended == "神经内科"
    assert assessment.recommendations == RECOMMENDATIONS_BY_SEVERITY[SeverityTier.MODERATE]


@pytest.mark.asyncio
async def test_breathing_difficulty_is_critical_regardless_of_other_tokens(service):
    assessment = await service.assess(
        AnalysisRequest(type="text", data=AnalysisData(text="有点咳嗽，失眠，今天呼吸困难"))
    )
    assert assessment.severity == SeverityTier.CRITICAL
    assert assessment.urgency == 4
    assert assessment.recommendations == RECOMMENDATIONS_BY_SEVERITY[SeverityTier.CRITICAL]
    assert assessment.specialty_recommended == "心内科"


@pytest.mark.asyncio
async def test_image_assessment_has_no_follow_up(service):
    assessment = await service.assess(
        AnalysisRequest(type="image", data=AnalysisData(image=ImageInput(data="aGVsbG8=")))
    )
    assert assessment.urgency == 1
    assert assessment.follow_up_required is False
    assert assessment.specialty_recommended is None
    assert assessment.modality_detail.detail.modality == "image"


@pytest.mark.asyncio
async def test_context_does_not_change_result(service):
    plain = await service.assess(AnalysisRequest(type="text", data=AnalysisData(text="恶心")))
    with_context = await service.assess(
        AnalysisRequest(
            type="text",
            data=AnalysisData(text="恶心"),
            context={"patient_id": 7, "allergies": ["青霉素"], "current_medications": ["顺铂"]},
        )
    )
    assert plain.severity == with_context.severity
    assert plain.recommendations == with_context.recommendations
    assert plain.specialty_recommended == with_context.specialty_recommended


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "request_body,message",
    [
        ({"type": "video", "data": {"text": "头痛"}}, "Invalid analysis type"),
        ({"type": "text", "data": {}}, "Text data required"),
        ({"type": "text", "data": {"text": ""}}, "Text data required"),
        ({"type": "voice", "data": {"voice": {"confidence": 0.9}}}, "Voice transcript required"),
        ({"type": "image", "data": {"image": {}}}, "Image data required"),
    ],
)
async def test_invalid_requests(service, request_body, message):
    with pytest.raises(InvalidInput) as exc_info:
        await service.assess(AnalysisRequest(**request_body))
    assert exc_info.value.kind == ErrorKind.INVALID_INPUT
    assert exc_info.value.message == message


@pytest.mark.asyncio
async def test_analyzer_failure_aborts_assessment():
    service = AssessmentService(provider=FailingProvider(image_delay_seconds=0))
    with pytest.raises(AnalysisFailed) as exc_info:
        await service.assess(
            AnalysisRequest(type="image", data=AnalysisData(image=ImageInput(data="aGVsbG8=")))
        )
    assert exc_info.value.message == "Analysis failed"
    assert exc_info.value.kind == ErrorKind.ANALYSIS_FAILED


def test_capabilities(service):
    capabilities = service.get_capabilities()
    assert set(capabilities) == {"text_analysis", "voice_analysis", "image_analysis"}
    assert capabilities["image_analysis"]["formats"] == ["jpeg", "png", "webp"]
