"""
Domain models for the interview core.

Questions, answers and evaluation results are immutable once created;
a Session is mutated only by the InterviewSessionManager.
"""
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Question(BaseModel):
    """A single interview question."""
    id: str = Field(..., description="Unique question ID")
    text: str = Field(..., min_length=1, description="Prompt text")
    category: str = Field("General", description="Category label")
    difficulty: Difficulty = Field(..., description="Difficulty tier")
    expected_answer: str = Field("", description="Expected-answer outline")
    keywords: List[str] = Field(default_factory=list, description="Keywords used for heuristic matching")
    hints: List[str] = Field(default_factory=list, description="Hints for the candidate")

    class Config:
        frozen = True


class Answer(BaseModel):
    """A candidate's submitted answer."""
    question_id: str
    text: str
    submitted_at: datetime
    attempt: int = Field(..., ge=1)

    class Config:
        frozen = True


class EvaluationResult(BaseModel):
    """Outcome of evaluating one answer."""
    score: int = Field(..., ge=0, le=100)
    passed: bool
    feedback: str
    follow_ups: List[str] = Field(default_factory=list)
    source: str = Field("fallback", description="rubric, oracle or fallback")
    # Stamped by the session manager when the result is recorded
    question_id: Optional[str] = None
    attempt: Optional[int] = None

    class Config:
        frozen = True


class EvaluationContext(BaseModel):
    """Optional session context handed to the oracle."""
    previous_answers: List[str] = Field(default_factory=list)
    user_level: Optional[Difficulty] = None
    answered_count: int = 0
    passed_count: int = 0
    average_score: float = 0.0


class Session(BaseModel):
    """One interview instance."""
    id: str
    user_id: str
    difficulty: Difficulty
    questions: Tuple[Question, ...]
    current_question_index: int = 0
    answers: List[Answer] = Field(default_factory=list)
    evaluations: List[EvaluationResult] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.IN_PROGRESS
    started_at: datetime
    completed_at: Optional[datetime] = None
    overall_score: Optional[int] = None

    @property
    def current_question(self) -> Optional[Question]:
        if self.status != SessionStatus.IN_PROGRESS:
            return None
        if self.current_question_index >= len(self.questions):
            return None
        return self.questions[self.current_question_index]

    def answers_for(self, question_id: str) -> List[Answer]:
        return [a for a in self.answers if a.question_id == question_id]

    def evaluations_for(self, question_id: str) -> List[EvaluationResult]:
        return [e for e in self.evaluations if e.question_id == question_id]


# ========== ORACLE RESPONSE SCHEMAS ==========
# Oracle output is decoded strictly: any missing, extra, mistyped or
# out-of-range field is a validation error and the caller falls back.

class OracleEvaluation(BaseModel):
    score: int = Field(..., ge=0, le=100)
    passed: bool = Field(..., alias="pass")
    feedback: str = Field(..., min_length=1)
    follow_ups: List[str] = Field(..., max_length=10)

    class Config:
        extra = "forbid"
        strict = True
        populate_by_name = True


class OracleQuestion(BaseModel):
    text: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    expected_answer: str = Field(..., min_length=1)
    hints: List[str] = Field(default_factory=list)

    class Config:
        extra = "forbid"
        strict = True
