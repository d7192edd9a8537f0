"""Triage API endpoints.

- Multimodal assessment (text, voice transcript, image)
- Capability discovery
- Quick-triage questionnaire
- Structured triage form risk scoring

Authentication is handled upstream of this service.
"""

from fastapi import APIRouter, HTTPException, status
from oncotriage.agents.quick_triage import QUICK_QUESTIONS
from oncotriage.errors import InvalidInput, TriageError
from oncotriage.models.messages import (
    AnalysisRequest,
    AnalysisResponse,
    CapabilityResponse,
    QuickAnswerRequest,
    QuickTriageResponse,
)
from oncotriage.models.risk import RiskAssessment, TriageForm
from oncotriage.models.session import QuickTriageSession
from oncotriage.services.assessment_service import get_assessment_service
from oncotriage.services.session_service import current_question, get_session_service
from oncotriage.utils.risk_scoring import score_triage_form
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/triage", tags=["Triage"])


def _to_http_error(error: TriageError) -> HTTPException:
    """Translate a triage error; only InvalidInput messages reach the caller."""
    if isinstance(error, InvalidInput):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Analysis failed"
    )


def _session_response(session: QuickTriageSession) -> QuickTriageResponse:
    return QuickTriageResponse(
        session_id=session.session_id,
        status=session.status,
        question_index=session.current_question_index,
        total_questions=len(QUICK_QUESTIONS),
        question=current_question(session),
        answers=session.answers,
        result=session.result,
    )


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(request: AnalysisRequest):
    """
    Assess symptoms from one modality.

    Returns severity, urgency, recommended actions and specialty.
    """
    assessment_service = get_assessment_service()

    try:
        assessment = await assessment_service.assess(request)
    except TriageError as e:
        raise _to_http_error(e)
    except Exception as e:
        logger.error(f"Multimodal analysis error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Analysis failed",
        )

    return AnalysisResponse(
        result=assessment,
        timestamp=datetime.utcnow(),
        analysis_id=assessment.assessment_id,
    )


@router.get("/capabilities", response_model=CapabilityResponse)
async def get_capabilities():
    """Supported modalities, languages and formats."""
    return CapabilityResponse(capabilities=get_assessment_service().get_capabilities())


@router.post("/quick/start", response_model=QuickTriageResponse)
async def start_quick_triage():
    """Start a quick-triage questionnaire at the first question."""
    session = await get_session_service().create_session()
    return _session_response(session)


@router.post("/quick/answer", response_model=QuickTriageResponse)
async def answer_quick_triage(request: QuickAnswerRequest):
    """
    Answer the current question.

    Returns the next question, or the terminal result once the questionnaire
    ends. A "yes" to an emergency question ends it immediately.
    """
    try:
        session = await get_session_service().answer(request.session_id, request.answer)
    except TriageError as e:
        raise _to_http_error(e)
    return _session_response(session)


@router.get("/quick/{session_id}", response_model=QuickTriageResponse)
async def get_quick_triage(session_id: str):
    """Current state of a questionnaire."""
    session = await get_session_service().get_session(session_id)
    if not session:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )
    return _session_response(session)


@router.post("/quick/{session_id}/back", response_model=QuickTriageResponse)
async def go_back_quick_triage(session_id: str):
    """Return to the previous question."""
    try:
        session = await get_session_service().go_back(session_id)
    except TriageError as e:
        raise _to_http_error(e)
    return _session_response(session)


@router.post("/quick/{session_id}/reset", response_model=QuickTriageResponse)
async def reset_quick_triage(session_id: str):
    """Clear all answers and restart the questionnaire."""
    try:
        session = await get_session_service().reset(session_id)
    except TriageError as e:
        raise _to_http_error(e)
    return _session_response(session)


@router.delete("/quick/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def end_quick_triage(session_id: str):
    """Abandon a questionnaire and release its state."""
    if not await get_session_service().end_session(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Session not found"
        )


@router.post("/risk-score", response_model=RiskAssessment)
async def risk_score(form: TriageForm):
    """Score a structured triage form."""
    return score_triage_form(form)
