"""
Service layer that wires the interview components together and runs the
answer-submission workflow.
"""
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from fastapi import Request

from ..interview import (
    AdvancementPolicy,
    AnswerEvaluator,
    InterviewSessionManager,
    QuestionGenerator,
    SessionNotActive,
    SessionStatus,
    SessionStore
)
from ..interview.events import MAX_CALLBACK_FOLLOW_UPS, SessionEventCallbacks
from ..interview.models import EvaluationResult
from ..interview.session_manager import REMEDIAL_SCORE
from ..llm.groq_service import initialize_optional_llm
from ..voice import STTService
from ..utils.logger import setup_logger

logger = setup_logger("api_service")


class InterviewService:
    """
    Service class that owns the interview components for one process.

    Constructed once at application startup and torn down at shutdown.
    """

    def __init__(
        self,
        llm=None,
        policy: Optional[AdvancementPolicy] = None,
        clock: Callable[[], datetime] = datetime.now,
        callbacks: Optional[SessionEventCallbacks] = None
    ):
        """
        Initialize the service.

        Args:
            llm: Optional chat model used as the scoring/generation oracle
            policy: Advancement policy. Default: AdvancementPolicy()
            clock: Returns the current time
            callbacks: Optional lifecycle event callbacks
        """
        self.llm = llm
        self.policy = policy or AdvancementPolicy()
        self.store = SessionStore()
        self.question_generator = QuestionGenerator(llm=llm)
        self.evaluator = AnswerEvaluator(llm=llm, pass_threshold=self.policy.pass_threshold)
        self.sessions = InterviewSessionManager(
            store=self.store,
            question_generator=self.question_generator,
            evaluator=self.evaluator,
            clock=clock,
            callbacks=callbacks
        )
        self.stt = STTService()
        logger.info(f"InterviewService ready (oracle={'on' if llm is not None else 'off'})")

    @classmethod
    def from_config(cls) -> "InterviewService":
        """Build the service from environment configuration."""
        return cls(llm=initialize_optional_llm())

    def is_llm_ready(self) -> bool:
        return self.llm is not None

    def submit_answer(self, session_id: str, text: str, question_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Record, evaluate and act on an answer to the current question.

        The answer is recorded with its attempt number, evaluated, and the
        advancement policy decides whether to move on. The evaluation that
        concludes a question (a pass, or the last allowed attempt) is recorded
        in the session history and counts toward the overall score; earlier
        failed attempts are returned to the caller only.

        Args:
            session_id: Interview session ID
            text: Answer text
            question_id: Question the client believes is current. Default: current question

        Returns:
            Dictionary with answer, evaluation, advanced, next_question and completed
        """
        with self.store.lock_for(session_id):
            current = self.sessions.current_question(session_id)
            if current is None:
                session = self.sessions.require_session(session_id)
                raise SessionNotActive(session_id, session.status.value)

            answer = self.sessions.add_answer(session_id, question_id or current.id, text)
            evaluation = self.sessions.evaluate_current_answer(session_id, text)

            self._fire_answer_event(session_id, answer.question_id, evaluation)
            advanced = self.policy.should_advance(evaluation, answer.attempt)
            if advanced:
                if not self.policy.is_passing(evaluation):
                    logger.info(
                        f"Session {session_id}: attempt limit reached for question "
                        f"{answer.question_id}, moving on"
                    )
                evaluation = self.sessions.record_evaluation(session_id, evaluation)
                session = self.sessions.advance(session_id)
            else:
                session = self.sessions.require_session(session_id)

            completed = session.status == SessionStatus.COMPLETED
            return {
                "answer": answer,
                "evaluation": evaluation,
                "advanced": advanced,
                "next_question": session.current_question if advanced else None,
                "completed": completed
            }

    def _fire_answer_event(self, session_id: str, question_id: str, evaluation: EvaluationResult) -> None:
        callbacks = self.sessions.callbacks
        follow_ups = list(evaluation.follow_ups)[:MAX_CALLBACK_FOLLOW_UPS]
        if self.policy.is_passing(evaluation):
            callbacks.fire("on_question_passed", session_id, question_id)
        elif evaluation.score >= REMEDIAL_SCORE:
            callbacks.fire("on_follow_up_needed", session_id, question_id, follow_ups)
        else:
            callbacks.fire("on_remedial_needed", session_id, question_id, follow_ups)

    def shutdown(self) -> None:
        """Drop all in-memory sessions."""
        count = len(self.store)
        self.store.clear()
        logger.info(f"InterviewService shut down, discarded {count} session(s)")


def get_service(request: Request) -> InterviewService:
    """FastAPI dependency returning the application's service instance."""
    return request.app.state.service
