"""
Mock interview core for Excel skills.

This module provides:
- Question generation (LLM oracle with built-in template fallback)
- Rubric-first answer evaluation
- In-memory interview session management
- The advancement policy between questions
- Lifecycle event callbacks
"""

from .errors import (
    InterviewError,
    SessionNotFound,
    QuestionMismatch,
    SessionNotActive,
    QuestionGenerationFailed,
    OracleUnavailable,
    OracleResponseError
)
from .models import (
    Difficulty,
    SessionStatus,
    Question,
    Answer,
    EvaluationResult,
    EvaluationContext,
    Session
)
from .question_generator import QuestionGenerator
from .answer_evaluator import AnswerEvaluator
from .session_manager import InterviewSessionManager, SessionStore
from .policy import AdvancementPolicy
from .events import SessionEventCallbacks

__all__ = [
    'InterviewError',
    'SessionNotFound',
    'QuestionMismatch',
    'SessionNotActive',
    'QuestionGenerationFailed',
    'OracleUnavailable',
    'OracleResponseError',
    'Difficulty',
    'SessionStatus',
    'Question',
    'Answer',
    'EvaluationResult',
    'EvaluationContext',
    'Session',
    'QuestionGenerator',
    'AnswerEvaluator',
    'InterviewSessionManager',
    'SessionStore',
    'AdvancementPolicy',
    'SessionEventCallbacks'
]
