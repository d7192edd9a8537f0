"""Quick-triage session management service."""

from oncotriage.agents.quick_triage import get_quick_triage_graph, question_at
from oncotriage.agents.state import QuickTriageState
from oncotriage.config.settings import settings
from oncotriage.errors import InvalidInput
from oncotriage.models.session import QuickTriageSession
from oncotriage.models.triage import SessionStatus
from typing import Dict, Optional
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class SessionService:
    """
    In-memory store of quick-triage sessions.

    Sessions are per caller and never shared; a caller may abandon one at any
    time and ``end_session`` releases it.
    """

    def __init__(self, max_sessions: Optional[int] = None):
        self._sessions: Dict[str, QuickTriageSession] = {}
        self.max_sessions = max_sessions or settings.max_quick_sessions

    async def create_session(self) -> QuickTriageSession:
        """
        Start a new questionnaire at the first question.

        Returns:
            Created QuickTriageSession
        """
        if len(self._sessions) >= self.max_sessions:
            # Evict the oldest session; dicts keep insertion order
            oldest_id = next(iter(self._sessions))
            del self._sessions[oldest_id]
            logger.info(f"Evicted quick-triage session {oldest_id}")

        session = QuickTriageSession()
        self._sessions[session.session_id] = session

        logger.info(f"Created quick-triage session {session.session_id}")
        return session

    async def get_session(self, session_id: str) -> Optional[QuickTriageSession]:
        """
        Get a session by ID.

        Args:
            session_id: Session identifier

        Returns:
            QuickTriageSession or None if not found
        """
        return self._sessions.get(session_id)

    async def answer(self, session_id: str, answer: bool) -> QuickTriageSession:
        """
        Answer the current question and advance the questionnaire.

        Args:
            session_id: Session identifier
            answer: True for "yes"

        Returns:
            Updated session; ``result`` is set once the questionnaire ends

        Raises:
            InvalidInput: unknown session, or session already complete
        """
        session = await self._require_session(session_id)
        if session.status == SessionStatus.COMPLETED:
            raise InvalidInput("Session already complete; reset to start again")

        state: QuickTriageState = {
            "session_id": session.session_id,
            "current_question_index": session.current_question_index,
            "answers": dict(session.answers),
            "answer": answer,
            "result": None,
            "complete": False,
        }
        result = await get_quick_triage_graph().ainvoke(state)

        session.answers = result["answers"]
        session.current_question_index = result["current_question_index"]
        if result.get("complete"):
            session.result = result["result"]
            session.status = SessionStatus.COMPLETED
        session.updated_at = datetime.utcnow()

        return session

    async def go_back(self, session_id: str) -> QuickTriageSession:
        """
        Return to the previous question, keeping recorded answers.

        Raises:
            InvalidInput: unknown session, or session already complete
        """
        session = await self._require_session(session_id)
        if session.status == SessionStatus.COMPLETED:
            raise InvalidInput("Session already complete; reset to start again")

        session.current_question_index = max(0, session.current_question_index - 1)
        session.updated_at = datetime.utcnow()
        return session

    async def reset(self, session_id: str) -> QuickTriageSession:
        """
        Clear all answers and return to the first question.

        Raises:
            InvalidInput: unknown session
        """
        session = await self._require_session(session_id)

        session.current_question_index = 0
        session.answers = {}
        session.result = None
        session.status = SessionStatus.ACTIVE
        session.updated_at = datetime.utcnow()

        logger.info(f"Reset quick-triage session {session_id}")
        return session

    async def end_session(self, session_id: str) -> bool:
        """
        Release a session.

        Returns:
            True if the session existed
        """
        return self._sessions.pop(session_id, None) is not None

    async def _require_session(self, session_id: str) -> QuickTriageSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise InvalidInput(f"Quick-triage session not found: {session_id}")
        return session


def current_question(session: QuickTriageSession):
    """The question awaiting an answer, or None once complete."""
    if session.status == SessionStatus.COMPLETED:
        return None
    return question_at(session.current_question_index)


# Global service instance
_session_service: Optional[SessionService] = None


def get_session_service() -> SessionService:
    """Get or create SessionService instance."""
    global _session_service
    if _session_service is None:
        _session_service = SessionService()
    return _session_service
