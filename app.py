"""
FastAPI application for the Excel Mock Interviewer.

Endpoints:
- GET /api/questions - List the built-in question bank
- POST /api/sessions - Start an interview session
- POST /api/sessions/{session_id}/answer - Submit a typed or spoken answer
- POST /api/sessions/{session_id}/next - Force the next question (admin/testing)
- GET /api/sessions/{session_id}/status - Current position in the interview
- GET /api/sessions/{session_id}/report - Session summary
- GET /api/sessions/{session_id}/stats - Attempt statistics
- DELETE /api/sessions/{session_id} - Delete a session
- POST /api/sessions/sweep - Remove expired sessions
- POST /api/transcribe - Placeholder audio transcription
- GET /health - Health check
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Query, Response, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from excel_interviewer.api import (
    AnswerEvaluationResponse,
    HealthResponse,
    InterviewReportResponse,
    InterviewService,
    InterviewStartRequest,
    InterviewStartResponse,
    InterviewStatusResponse,
    QuestionListResponse,
    QuestionResponse,
    SessionStatsResponse,
    SweepResponse,
    TranscribeResponse,
    get_service
)
from excel_interviewer.interview import (
    Difficulty,
    InterviewError,
    QuestionGenerationFailed,
    QuestionMismatch,
    SessionNotActive,
    SessionNotFound
)
from excel_interviewer.interview.question_bank import list_categories, list_questions
from excel_interviewer.utils.config import CORS_ORIGINS, LOG_FILE, SESSION_MAX_AGE_HOURS
from excel_interviewer.utils.logger import setup_logger
from excel_interviewer.voice import AudioValidationError

logger = setup_logger("fastapi_app", log_file=LOG_FILE)


def to_http_exception(error: InterviewError) -> HTTPException:
    """Map interview errors onto HTTP status codes."""
    if isinstance(error, SessionNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, (QuestionMismatch, SessionNotActive)):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, QuestionGenerationFailed):
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Interview error")


def create_app(service: Optional[InterviewService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Pre-built service (tests). If None, one is built from
            environment configuration at startup.

    Returns:
        Configured FastAPI app
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Excel Mock Interviewer API...")
        if getattr(app.state, "service", None) is None:
            app.state.service = InterviewService.from_config()
        yield
        app.state.service.shutdown()
        logger.info("Excel Mock Interviewer API stopped")

    app = FastAPI(
        title="Excel Mock Interviewer API",
        description="Mock interview on Excel skills with rubric-first answer evaluation",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", tags=["General"])
    def root():
        """Root endpoint with API information."""
        return {
            "message": "Excel Mock Interviewer API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health"
        }

    @app.get("/health", response_model=HealthResponse, tags=["General"])
    def health_check(service: InterviewService = Depends(get_service)):
        """Health check endpoint."""
        return HealthResponse(
            status="ok",
            llm_ready=service.is_llm_ready(),
            active_sessions=service.sessions.session_count(),
            timestamp=datetime.now()
        )

    @app.get("/api/questions", response_model=QuestionListResponse, tags=["Questions"])
    def get_questions(
        difficulty: Optional[Difficulty] = Query(None, description="Filter by difficulty"),
        category: Optional[str] = Query(None, description="Filter by category")
    ):
        """List the built-in question bank."""
        questions = list_questions(difficulty=difficulty, category=category)
        return QuestionListResponse(
            questions=[QuestionResponse.from_question(q) for q in questions],
            total=len(questions),
            categories=list_categories()
        )

    @app.post(
        "/api/sessions",
        response_model=InterviewStartResponse,
        status_code=status.HTTP_201_CREATED,
        tags=["Interview"]
    )
    def start_interview(request: InterviewStartRequest, service: InterviewService = Depends(get_service)):
        """
        Start an interview session.

        Questions are generated for the requested difficulty; the first one is returned.
        """
        logger.info(
            f"Start interview: user={request.user_id}, difficulty={request.difficulty.value}, "
            f"count={request.question_count}"
        )
        try:
            session = service.sessions.create_session(
                request.user_id,
                request.difficulty,
                request.question_count,
                category=request.category
            )
        except InterviewError as e:
            logger.error(f"Error creating session: {e}")
            raise to_http_exception(e)

        return InterviewStartResponse(
            session_id=session.id,
            status=session.status.value,
            total_questions=len(session.questions),
            current_question=QuestionResponse.from_question(session.current_question)
        )

    @app.post(
        "/api/sessions/sweep",
        response_model=SweepResponse,
        tags=["Interview"]
    )
    def sweep_sessions(
        max_age_hours: float = Query(SESSION_MAX_AGE_HOURS, ge=0, description="Remove sessions at least this old"),
        service: InterviewService = Depends(get_service)
    ):
        """Remove sessions older than the threshold, regardless of status."""
        removed = service.sessions.sweep_expired(max_age_hours)
        return SweepResponse(removed=removed, max_age_hours=max_age_hours)

    @app.post(
        "/api/sessions/{session_id}/answer",
        response_model=AnswerEvaluationResponse,
        tags=["Interview"]
    )
    def submit_answer(
        session_id: str,
        text: Optional[str] = Form(None),
        question_id: Optional[str] = Form(None),
        audio: Optional[UploadFile] = File(None),
        service: InterviewService = Depends(get_service)
    ):
        """
        Submit an answer for the current question.

        Accepts answer text and/or an audio file. Audio is not transcribed:
        when no text is given a placeholder transcript is used.
        """
        answer_text = text or ""
        if audio is not None and not answer_text.strip():
            try:
                transcript = service.stt.speech_to_text(audio.file.read(), audio.content_type, audio.filename)
            except AudioValidationError as e:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
            answer_text = transcript["text"]

        if not answer_text.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Answer text is required")

        try:
            outcome = service.submit_answer(session_id, answer_text, question_id=question_id)
        except InterviewError as e:
            logger.warning(f"Rejected answer for session {session_id}: {e}")
            raise to_http_exception(e)

        answer = outcome["answer"]
        return AnswerEvaluationResponse.build(
            question_id=answer.question_id,
            attempt=answer.attempt,
            evaluation=outcome["evaluation"],
            advanced=outcome["advanced"],
            next_question=outcome["next_question"],
            completed=outcome["completed"]
        )

    @app.post(
        "/api/sessions/{session_id}/next",
        response_model=InterviewStatusResponse,
        tags=["Interview"]
    )
    def force_next_question(session_id: str, service: InterviewService = Depends(get_service)):
        """Skip to the next question without an answer (admin/testing)."""
        try:
            service.sessions.force_next_question(session_id)
            info = service.sessions.get_status(session_id)
        except InterviewError as e:
            raise to_http_exception(e)
        info["current_question"] = QuestionResponse.from_question(info["current_question"])
        return InterviewStatusResponse(**info)

    @app.post("/api/transcribe", response_model=TranscribeResponse, tags=["Voice"])
    def transcribe(audio: Optional[UploadFile] = File(None), service: InterviewService = Depends(get_service)):
        """Transcribe an audio answer (placeholder)."""
        if audio is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Audio file is required")
        try:
            result = service.stt.speech_to_text(audio.file.read(), audio.content_type, audio.filename)
        except AudioValidationError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        return TranscribeResponse(text=result["text"], placeholder=result["placeholder"])

    @app.get(
        "/api/sessions/{session_id}/status",
        response_model=InterviewStatusResponse,
        tags=["Interview"]
    )
    def get_status(session_id: str, service: InterviewService = Depends(get_service)):
        """Get the current position and state of an interview."""
        try:
            info = service.sessions.get_status(session_id)
        except InterviewError as e:
            raise to_http_exception(e)
        info["current_question"] = QuestionResponse.from_question(info["current_question"])
        return InterviewStatusResponse(**info)

    @app.get(
        "/api/sessions/{session_id}/report",
        response_model=InterviewReportResponse,
        tags=["Interview"]
    )
    def get_report(session_id: str, service: InterviewService = Depends(get_service)):
        """Get the interview report: per-question scores, overall score and duration."""
        try:
            report = service.sessions.get_report(session_id)
        except InterviewError as e:
            raise to_http_exception(e)
        return InterviewReportResponse(**report)

    @app.get(
        "/api/sessions/{session_id}/stats",
        response_model=SessionStatsResponse,
        tags=["Interview"]
    )
    def get_stats(session_id: str, service: InterviewService = Depends(get_service)):
        """Get attempt statistics for an interview."""
        try:
            stats = service.sessions.get_session_stats(session_id)
        except InterviewError as e:
            raise to_http_exception(e)
        return SessionStatsResponse(**stats)

    @app.delete(
        "/api/sessions/{session_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        tags=["Interview"]
    )
    def delete_session(session_id: str, service: InterviewService = Depends(get_service)):
        """Delete an interview session (no error if it does not exist)."""
        service.sessions.delete_session(session_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
