"""Quick-triage decision tree.

A fixed sequence of yes/no screening questions. A "yes" to an
emergency-tagged question ends the questionnaire at once; otherwise the last
answer triggers a tally of urgent and moderate flags.

Each answer runs the compiled graph once:

    record_answer --(emergency yes)--> emergency --> END
                  --(more questions)--> advance  --> END
                  --(last question)---> tally    --> END
"""

from typing import Dict, Optional, Tuple
from langgraph.graph import StateGraph, END
from oncotriage.agents.state import QuickTriageState
from oncotriage.models.session import QuickAssessmentResult, QuickQuestion
from oncotriage.models.triage import QuestionTag, QuickUrgency
import logging

logger = logging.getLogger(__name__)


QUICK_QUESTIONS: Tuple[QuickQuestion, ...] = (
    QuickQuestion(
        id="breathing",
        question="您是否出现严重呼吸困难？",
        tags=[QuestionTag.EMERGENCY],
    ),
    QuickQuestion(
        id="chest_pain",
        question="您是否出现剧烈胸痛？",
        tags=[QuestionTag.EMERGENCY],
    ),
    QuickQuestion(
        id="consciousness",
        question="您是否感到意识模糊或头晕？",
        tags=[QuestionTag.URGENT],
    ),
    QuickQuestion(
        id="fever",
        question="您的体温是否超过38.5°C？",
        tags=[QuestionTag.URGENT],
    ),
    QuickQuestion(
        id="bleeding",
        question="您是否出现异常出血？",
        tags=[QuestionTag.URGENT],
    ),
    QuickQuestion(
        id="severe_pain",
        question="您的疼痛程度是否超过8分（满分10分）？",
        tags=[QuestionTag.MODERATE],
    ),
)

OUTCOMES: Dict[QuickUrgency, QuickAssessmentResult] = {
    QuickUrgency.EMERGENCY: QuickAssessmentResult(
        urgency=QuickUrgency.EMERGENCY,
        message="您的症状可能需要紧急医疗处理",
        actions=["立即拨打120急救电话", "前往最近的急诊科", "如有家人陪同更好"],
    ),
    QuickUrgency.URGENT: QuickAssessmentResult(
        urgency=QuickUrgency.URGENT,
        message="您需要尽快就医",
        actions=["2-4小时内前往急诊科", "联系您的主治医生", "密切监测症状变化"],
    ),
    QuickUrgency.MODERATE: QuickAssessmentResult(
        urgency=QuickUrgency.MODERATE,
        message="建议您在24小时内就医",
        actions=["预约门诊或急诊", "观察症状发展", "如症状加重立即就医"],
    ),
    QuickUrgency.LOW: QuickAssessmentResult(
        urgency=QuickUrgency.LOW,
        message="您的症状相对较轻",
        actions=["居家观察和休息", "充分饮水", "如症状持续或加重请就医"],
    ),
}


def tally_answers(
    answers: Dict[str, bool], questions: Tuple[QuickQuestion, ...] = QUICK_QUESTIONS
) -> QuickAssessmentResult:
    """
    Pick the outcome for a completed questionnaire.

    Args:
        answers: Question id -> answer
        questions: Question sequence the answers refer to

    Returns:
        urgent for 2+ urgent flags, moderate for 1+ urgent or 2+ moderate
        flags, low otherwise
    """
    urgent_count = 0
    moderate_count = 0

    for question in questions:
        if answers.get(question.id):
            if question.has_tag(QuestionTag.URGENT):
                urgent_count += 1
            if question.has_tag(QuestionTag.MODERATE):
                moderate_count += 1

    if urgent_count >= 2:
        return OUTCOMES[QuickUrgency.URGENT]
    if urgent_count >= 1 or moderate_count >= 2:
        return OUTCOMES[QuickUrgency.MODERATE]
    return OUTCOMES[QuickUrgency.LOW]


def record_answer_node(state: QuickTriageState) -> dict:
    """Store the answer to the current question."""
    question = QUICK_QUESTIONS[state["current_question_index"]]
    answers = dict(state.get("answers") or {})
    answers[question.id] = state["answer"]
    return {"answers": answers}


def emergency_node(state: QuickTriageState) -> dict:
    """Short-circuit to the emergency outcome."""
    question = QUICK_QUESTIONS[state["current_question_index"]]
    logger.warning(
        f"Quick triage {state.get('session_id')}: emergency answer to '{question.id}'"
    )
    return {"result": OUTCOMES[QuickUrgency.EMERGENCY], "complete": True}


def advance_node(state: QuickTriageState) -> dict:
    """Move to the next question."""
    return {"current_question_index": state["current_question_index"] + 1}


def tally_node(state: QuickTriageState) -> dict:
    """Score the completed questionnaire."""
    result = tally_answers(state["answers"])
    logger.info(
        f"Quick triage {state.get('session_id')} completed: {result.urgency.value}"
    )
    return {"result": result, "complete": True}


def route_after_answer(state: QuickTriageState) -> str:
    """Route based on the answer just recorded."""
    index = state["current_question_index"]
    question = QUICK_QUESTIONS[index]

    if state["answer"] and question.has_tag(QuestionTag.EMERGENCY):
        return "emergency"
    if index < len(QUICK_QUESTIONS) - 1:
        return "advance"
    return "tally"


def build_quick_triage_graph():
    """Build and compile the quick-triage answer workflow."""
    logger.info("Building quick-triage LangGraph workflow")

    workflow = StateGraph(QuickTriageState)

    workflow.add_node("record_answer", record_answer_node)
    workflow.add_node("emergency", emergency_node)
    workflow.add_node("advance", advance_node)
    workflow.add_node("tally", tally_node)

    workflow.set_entry_point("record_answer")

    workflow.add_conditional_edges(
        "record_answer",
        route_after_answer,
        {"emergency": "emergency", "advance": "advance", "tally": "tally"},
    )

    workflow.add_edge("emergency", END)
    workflow.add_edge("advance", END)
    workflow.add_edge("tally", END)

    return workflow.compile()


# Global graph instance
_quick_triage_graph = None


def get_quick_triage_graph():
    """Get or create the compiled quick-triage graph."""
    global _quick_triage_graph
    if _quick_triage_graph is None:
        _quick_triage_graph = build_quick_triage_graph()
    return _quick_triage_graph


def question_at(index: int) -> Optional[QuickQuestion]:
    """Return the question at index, or None past the end."""
    if 0 <= index < len(QUICK_QUESTIONS):
        return QUICK_QUESTIONS[index]
    return None
