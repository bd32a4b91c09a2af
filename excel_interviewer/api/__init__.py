"""
FastAPI API modules.
"""
from .models import (
    HealthResponse,
    QuestionResponse,
    QuestionListResponse,
    InterviewStartRequest,
    InterviewStartResponse,
    AnswerEvaluationResponse,
    TranscribeResponse,
    InterviewStatusResponse,
    QuestionScore,
    InterviewReportResponse,
    SessionStatsResponse,
    SweepResponse
)
from .service import InterviewService, get_service

__all__ = [
    'HealthResponse',
    'QuestionResponse',
    'QuestionListResponse',
    'InterviewStartRequest',
    'InterviewStartResponse',
    'AnswerEvaluationResponse',
    'TranscribeResponse',
    'InterviewStatusResponse',
    'QuestionScore',
    'InterviewReportResponse',
    'SessionStatsResponse',
    'SweepResponse',
    'InterviewService',
    'get_service'
]
