import pytest

from oncotriage.agents.quick_triage import (
    OUTCOMES,
    QUICK_QUESTIONS,
    get_quick_triage_graph,
    tally_answers,
)
from oncotriage.errors import InvalidInput
from oncotriage.models.triage import QuickUrgency, SessionStatus


async def answer_all(service, session_id, answers):
    session = None
    for answer in answers:
        session = await service.answer(session_id, answer)
    return session


@pytest.mark.asyncio
async def test_emergency_answer_short_circuits(session_service):
    session = await session_service.create_session()
    session = await session_service.answer(session.session_id, True)

    assert session.status == SessionStatus.COMPLETED
    assert session.result == OUTCOMES[QuickUrgency.EMERGENCY]
    assert session.answers == {"breathing": True}
    assert session.current_question_index == 0


@pytest.mark.asyncio
async def test_chest_pain_yes_is_emergency(session_service):
    session = await session_service.create_session()
    session = await answer_all(session_service, session.session_id, [False, True])
    assert session.result.urgency == QuickUrgency.EMERGENCY
    assert "consciousness" not in session.answers


@pytest.mark.asyncio
async def test_two_urgent_answers_are_urgent(session_service):
    session = await session_service.create_session()
    # consciousness and fever yes, everything else no
    session = await answer_all(
        session_service, session.session_id, [False, False, True, True, False, False]
    )
    assert session.status == SessionStatus.COMPLETED
    assert session.result.urgency == QuickUrgency.URGENT
    assert session.result.message == "您需要尽快就医"


@pytest.mark.asyncio
async def test_one_urgent_answer_is_moderate(session_service):
    session = await session_service.create_session()
    session = await answer_all(
        session_service, session.session_id, [False, False, False, False, True, False]
    )
    assert session.result.urgency == QuickUrgency.MODERATE


@pytest.mark.asyncio
async def test_all_no_is_low(session_service):
    session = await session_service.create_session()
    session = await answer_all(session_service, session.session_id, [False] * 6)
    assert session.result == OUTCOMES[QuickUrgency.LOW]
    assert len(session.answers) == len(QUICK_QUESTIONS)


@pytest.mark.asyncio
async def test_answering_completed_session_is_rejected(session_service):
    session = await session_service.create_session()
    await session_service.answer(session.session_id, True)
    with pytest.raises(InvalidInput):
        await session_service.answer(session.session_id, False)


@pytest.mark.asyncio
async def test_answer_without_session_is_rejected(session_service):
    with pytest.raises(InvalidInput):
        await session_service.answer("missing", True)


@pytest.mark.asyncio
async def test_go_back_keeps_answers(session_service):
    session = await session_service.create_session()
    await answer_all(session_service, session.session_id, [False, False, True])

    session = await session_service.go_back(session.session_id)
    assert session.current_question_index == 2
    assert session.answers == {"breathing": False, "chest_pain": False, "consciousness": True}

    # Re-answering overwrites the earlier answer
    session = await session_service.go_back(session.session_id)
    session = await session_service.answer(session.session_id, False)
    assert session.answers["chest_pain"] is False
    assert session.current_question_index == 2


@pytest.mark.asyncio
async def test_go_back_stops_at_first_question(session_service):
    session = await session_service.create_session()
    session = await session_service.go_back(session.session_id)
    assert session.current_question_index == 0


@pytest.mark.asyncio
async def test_reset_clears_state(session_service):
    session = await session_service.create_session()
    await session_service.answer(session.session_id, True)

    session = await session_service.reset(session.session_id)
    assert session.status == SessionStatus.ACTIVE
    assert session.current_question_index == 0
    assert session.answers == {}
    assert session.result is None


@pytest.mark.asyncio
async def test_end_session_releases_state(session_service):
    session = await session_service.create_session()
    assert await session_service.end_session(session.session_id) is True
    assert await session_service.get_session(session.session_id) is None
    assert await session_service.end_session(session.session_id) is False


@pytest.mark.asyncio
async def test_oldest_session_is_evicted(session_service):
    first = await session_service.create_session()
    for _ in range(session_service.max_sessions):
        await session_service.create_session()
    assert await session_service.get_session(first.session_id) is None


@pytest.mark.asyncio
async def test_graph_advances_on_non_emergency_answer():
    result = await get_quick_triage_graph().ainvoke(
        {
            "session_id": "graph-test",
            "current_question_index": 0,
            "answers": {},
            "answer": False,
            "result": None,
            "complete": False,
        }
    )
    assert result["current_question_index"] == 1
    assert result["complete"] is False
    assert result["answers"] == {"breathing": False}


def test_tally_moderate_flags_alone():
    # a single moderate flag is not enough to escalate
    assert tally_answers({"severe_pain": True}).urgency == QuickUrgency.LOW
    assert tally_answers({"fever": True, "bleeding": True}).urgency == QuickUrgency.URGENT
