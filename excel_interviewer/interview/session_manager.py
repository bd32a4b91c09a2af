"""
Interview Session Manager.

Manages interview sessions:
- Create sessions with generated questions
- Record answers (with attempt numbering) and evaluations
- Advance through questions and complete the session
- Produce reports, status and statistics
- Delete and expire sessions

Sessions live only in process memory, in a SessionStore that is constructed
once at application startup and injected here.
"""

import threading
import uuid
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from .answer_evaluator import AnswerEvaluator
from .events import SessionEventCallbacks
from .errors import (
    QuestionGenerationFailed,
    QuestionMismatch,
    SessionNotActive,
    SessionNotFound
)
from .models import (
    Answer,
    Difficulty,
    EvaluationContext,
    EvaluationResult,
    Question,
    Session,
    SessionStatus
)
from .question_generator import QuestionGenerator
from ..utils.logger import setup_logger
from ..utils.scoring import mean_score, round_half_up

logger = setup_logger("session_manager")

# Evaluations below this score mark a question as needing remedial work
REMEDIAL_SCORE = 50


class SessionStore:
    """
    In-memory session storage.

    Holds one re-entrant lock per session so that each read-modify-write in
    the session manager is serialized per session.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._locks: Dict[str, threading.RLock] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)

    def put(self, session: Session) -> None:
        with self._lock:
            self._sessions[session.id] = session
            self._locks.setdefault(session.id, threading.RLock())

    def delete(self, session_id: str) -> bool:
        with self._lock:
            self._locks.pop(session_id, None)
            return self._sessions.pop(session_id, None) is not None

    def lock_for(self, session_id: str) -> threading.RLock:
        # Unknown ids get a throwaway lock; the caller will raise SessionNotFound.
        with self._lock:
            return self._locks.get(session_id) or threading.RLock()

    def snapshot(self) -> List[Session]:
        with self._lock:
            return list(self._sessions.values())

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()
            self._locks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._sessions


class InterviewSessionManager:
    """
    Single authority over session creation, mutation and querying.
    """

    def __init__(
        self,
        store: SessionStore,
        question_generator: QuestionGenerator,
        evaluator: AnswerEvaluator,
        clock: Callable[[], datetime] = datetime.now,
        callbacks: Optional[SessionEventCallbacks] = None
    ):
        """
        Initialize session manager.

        Args:
            store: Session storage
            question_generator: Source of questions for new sessions
            evaluator: Scores answers to the current question
            clock: Returns the current time
            callbacks: Optional lifecycle event callbacks
        """
        self.store = store
        self.question_generator = question_generator
        self.evaluator = evaluator
        self.clock = clock
        self.callbacks = callbacks or SessionEventCallbacks()

        logger.info("InterviewSessionManager initialized (in-memory store)")

    # ---- lifecycle ----

    def create_session(
        self,
        user_id: str,
        difficulty: Difficulty,
        question_count: int,
        category: Optional[str] = None
    ) -> Session:
        """
        Create a new interview session.

        Args:
            user_id: Owning user
            difficulty: beginner/intermediate/advanced
            question_count: Number of questions requested
            category: Optional category hint for generation

        Returns:
            The new Session

        Raises:
            QuestionGenerationFailed: If no questions could be produced
        """
        difficulty = Difficulty(difficulty)
        questions = self.question_generator.generate_questions(question_count, difficulty, category)
        if not questions:
            logger.error(f"No {difficulty.value} questions available for user {user_id}")
            raise QuestionGenerationFailed(
                f"Failed to generate {difficulty.value} questions for session"
            )

        session = Session(
            id=str(uuid.uuid4()),
            user_id=user_id,
            difficulty=difficulty,
            questions=tuple(questions),
            started_at=self.clock()
        )
        self.store.put(session)
        logger.info(
            f"Created interview session: {session.id} for user: {user_id} "
            f"({len(questions)} {difficulty.value} questions)"
        )
        return session

    def get_session(self, session_id: str) -> Optional[Session]:
        """Get session by ID."""
        return self.store.get(session_id)

    def require_session(self, session_id: str) -> Session:
        session = self.store.get(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    def current_question(self, session_id: str) -> Optional[Question]:
        return self.require_session(session_id).current_question

    def delete_session(self, session_id: str) -> None:
        """Remove a session; no error if it is already gone."""
        with self.store.lock_for(session_id):
            if self.store.delete(session_id):
                logger.info(f"Deleted interview session: {session_id}")

    def sweep_expired(self, max_age_hours: float) -> int:
        """
        Remove every session started at least `max_age_hours` ago, regardless of status.

        Args:
            max_age_hours: Age threshold in hours (0 removes everything)

        Returns:
            Number of sessions removed
        """
        if max_age_hours < 0:
            raise ValueError("max_age_hours must be non-negative")

        cutoff = self.clock() - timedelta(hours=max_age_hours)
        expired = [s.id for s in self.store.snapshot() if s.started_at <= cutoff]
        for session_id in expired:
            self.delete_session(session_id)

        if expired:
            logger.info(f"Swept {len(expired)} expired session(s) older than {max_age_hours}h")
        return len(expired)

    def session_count(self) -> int:
        return len(self.store)

    def set_event_callbacks(self, **callbacks) -> None:
        """Register lifecycle callbacks, keeping any not given."""
        self.callbacks = self.callbacks.merged(**callbacks)

    # ---- answers and evaluations ----

    def add_answer(self, session_id: str, question_id: str, text: str) -> Answer:
        """
        Record an answer to the current question.

        Raises:
            SessionNotFound: Unknown session
            SessionNotActive: Session already completed
            QuestionMismatch: question_id is not the current question
        """
        with self.store.lock_for(session_id):
            session = self.require_session(session_id)
            self._require_active(session)

            current = session.current_question
            if current.id != question_id:
                logger.warning(
                    f"Rejected answer for question {question_id} in session {session_id}; "
                    f"current question is {current.id}"
                )
                raise QuestionMismatch(session_id, current.id, question_id)

            answer = Answer(
                question_id=question_id,
                text=text,
                submitted_at=self.clock(),
                attempt=len(session.answers_for(question_id)) + 1
            )
            session.answers.append(answer)

        logger.info(f"Session {session_id}: answer attempt {answer.attempt} for question {question_id}")
        return answer

    def evaluate_current_answer(
        self,
        session_id: str,
        text: str,
        context: Optional[EvaluationContext] = None
    ) -> EvaluationResult:
        """
        Evaluate `text` against the current question without changing the session.

        If no context is given, one is built from the session history.
        """
        with self.store.lock_for(session_id):
            session = self.require_session(session_id)
            self._require_active(session)
            question = session.current_question
            if context is None:
                context = self._build_context(session, question, text)

        return self.evaluator.evaluate_answer(question, text, context)

    def record_evaluation(self, session_id: str, evaluation: EvaluationResult) -> EvaluationResult:
        """
        Append an evaluation for the current question to the session history.

        Returns:
            The stored result, stamped with question id and attempt number
        """
        with self.store.lock_for(session_id):
            session = self.require_session(session_id)
            self._require_active(session)

            question = session.current_question
            attempt = len(session.answers_for(question.id)) or None
            stored = evaluation.model_copy(update={"question_id": question.id, "attempt": attempt})
            session.evaluations.append(stored)
            return stored

    def advance(self, session_id: str) -> Session:
        """
        Move to the next question, or complete the session after the last one.

        On completion, completed_at and overall_score (rounded mean of all
        recorded evaluation scores, 0 if none) are set together.

        Raises:
            SessionNotFound: Unknown session
            SessionNotActive: Session already completed
        """
        with self.store.lock_for(session_id):
            session = self.require_session(session_id)
            self._require_active(session)

            session.current_question_index += 1
            if session.current_question_index >= len(session.questions):
                session.current_question_index = len(session.questions)
                session.overall_score = mean_score(e.score for e in session.evaluations)
                session.completed_at = self.clock()
                session.status = SessionStatus.COMPLETED
                logger.info(f"Completed interview session: {session_id} (score {session.overall_score})")
                self.callbacks.fire("on_session_completed", session_id)
            return session

    def force_next_question(self, session_id: str) -> Session:
        """
        Skip the current question without an answer (admin/testing).

        Nothing is recorded for the skipped question; otherwise identical to advance().
        """
        logger.info(f"Session {session_id}: forcing move to the next question")
        return self.advance(session_id)

    # ---- reporting ----

    def get_report(self, session_id: str) -> Dict[str, Any]:
        """Get a read-only summary of the session."""
        with self.store.lock_for(session_id):
            session = self.require_session(session_id)

            question_scores = []
            for question in session.questions:
                answers = session.answers_for(question.id)
                evaluations = session.evaluations_for(question.id)
                best = max(evaluations, key=lambda e: e.score) if evaluations else None
                question_scores.append({
                    "question_id": question.id,
                    "question": question.text,
                    "answer": answers[-1].text if answers else "",
                    "attempts": len(answers),
                    "score": best.score if best else 0,
                    "feedback": best.feedback if best else "No feedback available"
                })

            return {
                "session_id": session.id,
                "user_id": session.user_id,
                "status": session.status.value,
                "overall_score": session.overall_score or 0,
                "questions_answered": sum(1 for q in question_scores if q["attempts"] > 0),
                "total_questions": len(session.questions),
                "total_answers": len(session.answers),
                "question_scores": question_scores,
                "started_at": session.started_at,
                "completed_at": session.completed_at,
                "duration_seconds": self._duration_seconds(session)
            }

    def get_status(self, session_id: str) -> Dict[str, Any]:
        """Get the session's position and state."""
        with self.store.lock_for(session_id):
            session = self.require_session(session_id)
            return {
                "session_id": session.id,
                "status": session.status.value,
                "current_question_index": session.current_question_index,
                "total_questions": len(session.questions),
                "current_question": session.current_question,
                "answers_count": len(session.answers),
                "overall_score": session.overall_score,
                "started_at": session.started_at,
                "completed_at": session.completed_at
            }

    def get_session_stats(self, session_id: str) -> Dict[str, Any]:
        """Attempt statistics for the session."""
        with self.store.lock_for(session_id):
            session = self.require_session(session_id)

            attempted = {a.question_id for a in session.answers}
            remedial = {
                e.question_id for e in session.evaluations
                if e.question_id is not None and e.score < REMEDIAL_SCORE
            }
            total_attempts = len(session.answers)
            total_questions = len(session.questions)
            return {
                "session_id": session.id,
                "status": session.status.value,
                "questions_attempted": len(attempted),
                "total_questions": total_questions,
                "total_attempts": total_attempts,
                "average_attempts": total_attempts / len(attempted) if attempted else 0.0,
                "remedial_questions_count": len(remedial),
                "completion_rate": session.current_question_index / total_questions if total_questions else 0.0,
                "overall_score": session.overall_score
            }

    # ---- helpers ----

    def _require_active(self, session: Session) -> None:
        if session.status != SessionStatus.IN_PROGRESS:
            raise SessionNotActive(session.id, session.status.value)

    def _duration_seconds(self, session: Session) -> int:
        end = session.completed_at or self.clock()
        return max(0, round_half_up((end - session.started_at).total_seconds()))

    def _build_context(self, session: Session, question: Question, text: str) -> EvaluationContext:
        previous = [a.text for a in session.answers_for(question.id)]
        # The answer being evaluated is usually already recorded as the latest attempt.
        if previous and previous[-1] == text:
            previous = previous[:-1]

        scores = [e.score for e in session.evaluations]
        return EvaluationContext(
            previous_answers=previous,
            user_level=session.difficulty,
            answered_count=len(scores),
            passed_count=sum(1 for e in session.evaluations if e.passed),
            average_score=sum(scores) / len(scores) if scores else 0.0
        )
