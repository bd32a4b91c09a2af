"""
FastAPI request and response models.
"""
from datetime import datetime
from pydantic import BaseModel, Field
from typing import List, Optional

from ..interview.models import Difficulty, EvaluationResult, Question
from ..utils.config import (
    ANONYMOUS_USER_ID,
    DEFAULT_DIFFICULTY,
    DEFAULT_QUESTION_COUNT,
    MIN_QUESTION_COUNT,
    MAX_QUESTION_COUNT
)


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str = Field(..., description="Service status")
    llm_ready: bool = Field(..., description="Whether the LLM oracle is configured")
    active_sessions: int = Field(..., description="Sessions currently held in memory")
    timestamp: datetime = Field(..., description="Server time")


class QuestionResponse(BaseModel):
    """Response model for a question (expected answer and keywords are not exposed)."""
    question_id: str = Field(..., description="Question ID")
    question: str = Field(..., description="Question text")
    category: str = Field(..., description="Question category")
    difficulty: Difficulty = Field(..., description="Question difficulty")
    hints: List[str] = Field(default_factory=list, description="Hints for the candidate")

    @classmethod
    def from_question(cls, question: Optional[Question]) -> Optional["QuestionResponse"]:
        if question is None:
            return None
        return cls(
            question_id=question.id,
            question=question.text,
            category=question.category,
            difficulty=question.difficulty,
            hints=list(question.hints)
        )


class QuestionListResponse(BaseModel):
    """Response model for the question bank listing."""
    questions: List[QuestionResponse] = Field(..., description="Matching questions")
    total: int = Field(..., description="Number of matching questions")
    categories: List[str] = Field(..., description="All known categories")


# ========== INTERVIEW MODELS ==========

class InterviewStartRequest(BaseModel):
    """Request model for starting an interview."""
    user_id: str = Field(ANONYMOUS_USER_ID, min_length=1, description="User identifier")
    difficulty: Difficulty = Field(Difficulty(DEFAULT_DIFFICULTY), description="beginner, intermediate or advanced")
    question_count: int = Field(
        DEFAULT_QUESTION_COUNT,
        ge=MIN_QUESTION_COUNT,
        le=MAX_QUESTION_COUNT,
        description="Number of questions"
    )
    category: Optional[str] = Field(None, description="Optional category hint for question generation")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "candidate-42",
                "difficulty": "intermediate",
                "question_count": 5
            }
        }


class InterviewStartResponse(BaseModel):
    """Response model for starting an interview."""
    session_id: str = Field(..., description="Interview session ID")
    status: str = Field(..., description="Session status")
    total_questions: int = Field(..., description="Number of questions in the session")
    current_question: QuestionResponse = Field(..., description="First question")


class AnswerEvaluationResponse(BaseModel):
    """Response model for a submitted answer."""
    question_id: str = Field(..., description="Question the answer was recorded for")
    attempt: int = Field(..., description="Attempt number for this question")
    score: int = Field(..., description="Answer score (0-100)")
    passed: bool = Field(..., description="Whether the answer passed")
    feedback: str = Field(..., description="Feedback text")
    follow_ups: List[str] = Field(..., description="Follow-up prompts")
    scored_by: str = Field(..., description="rubric, oracle or fallback")
    advanced: bool = Field(..., description="Whether the interview moved on")
    next_question: Optional[QuestionResponse] = Field(None, description="Next question if the interview moved on")
    completed: bool = Field(..., description="Whether the interview is complete")

    @classmethod
    def build(
        cls,
        question_id: str,
        attempt: int,
        evaluation: EvaluationResult,
        advanced: bool,
        next_question: Optional[Question],
        completed: bool
    ) -> "AnswerEvaluationResponse":
        return cls(
            question_id=question_id,
            attempt=attempt,
            score=evaluation.score,
            passed=evaluation.passed,
            feedback=evaluation.feedback,
            follow_ups=list(evaluation.follow_ups),
            scored_by=evaluation.source,
            advanced=advanced,
            next_question=QuestionResponse.from_question(next_question),
            completed=completed
        )


class TranscribeResponse(BaseModel):
    """Response model for audio transcription."""
    text: str = Field(..., description="Transcribed text")
    placeholder: bool = Field(..., description="True when the text is a placeholder, not a real transcript")


class InterviewStatusResponse(BaseModel):
    """Response model for interview status."""
    session_id: str = Field(..., description="Session ID")
    status: str = Field(..., description="Session status: in_progress or completed")
    current_question_index: int = Field(..., description="Index of the current question")
    total_questions: int = Field(..., description="Total questions")
    current_question: Optional[QuestionResponse] = Field(None, description="Current question (if in progress)")
    answers_count: int = Field(..., description="Number of answers submitted")
    overall_score: Optional[int] = Field(None, description="Overall score (if completed)")
    started_at: datetime = Field(..., description="Session start time")
    completed_at: Optional[datetime] = Field(None, description="Session completion time")


class QuestionScore(BaseModel):
    """Per-question result in a report."""
    question_id: str
    question: str
    answer: str = Field(..., description="Last submitted answer")
    attempts: int
    score: int = Field(..., description="Best recorded score")
    feedback: str


class InterviewReportResponse(BaseModel):
    """Response model for interview report."""
    session_id: str = Field(..., description="Session ID")
    user_id: str = Field(..., description="User identifier")
    status: str = Field(..., description="Session status")
    overall_score: int = Field(..., description="Overall score (0 until completed)")
    questions_answered: int = Field(..., description="Questions with at least one answer")
    total_questions: int = Field(..., description="Total questions")
    total_answers: int = Field(..., description="Answers submitted, including retries")
    question_scores: List[QuestionScore] = Field(..., description="Per-question results")
    started_at: datetime = Field(..., description="Session start time")
    completed_at: Optional[datetime] = Field(None, description="Session completion time")
    duration_seconds: int = Field(..., description="Elapsed seconds (until now if still in progress)")


class SessionStatsResponse(BaseModel):
    """Response model for attempt statistics."""
    session_id: str
    status: str
    questions_attempted: int
    total_questions: int
    total_attempts: int
    average_attempts: float
    remedial_questions_count: int = Field(..., description="Questions with a recorded score below 50")
    completion_rate: float = Field(..., description="Fraction of questions completed")
    overall_score: Optional[int] = None


class SweepResponse(BaseModel):
    """Response model for expiring old sessions."""
    removed: int = Field(..., description="Number of sessions removed")
    max_age_hours: float = Field(..., description="Age threshold used")
