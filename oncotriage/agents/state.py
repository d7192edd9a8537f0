"""LangGraph state definition for the quick-triage questionnaire."""

from typing import TypedDict, Dict, Optional
from oncotriage.models.session import QuickAssessmentResult


class QuickTriageState(TypedDict):
    """State for one quick-triage answer step."""

    session_id: str
    current_question_index: int
    answers: Dict[str, bool]
    answer: bool  # Answer to the question at current_question_index

    # Terminal output
    result: Optional[QuickAssessmentResult]
    complete: bool
