"""
Errors raised by the interview core.

Session errors surface to the API boundary as client errors, except
QuestionGenerationFailed which is a server error. Oracle errors never leave
the evaluator or generator; they are absorbed into fallback results.
"""


class InterviewError(Exception):
    """Base class for interview errors."""


class SessionNotFound(InterviewError):
    """No session exists with the given id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class QuestionMismatch(InterviewError):
    """An answer was submitted for a question other than the current one."""

    def __init__(self, session_id: str, expected_id: str, received_id: str):
        self.session_id = session_id
        self.expected_id = expected_id
        self.received_id = received_id
        super().__init__(
            f"Question mismatch in session {session_id}: "
            f"expected {expected_id}, got {received_id}"
        )


class SessionNotActive(InterviewError):
    """The session is no longer in progress."""

    def __init__(self, session_id: str, status: str):
        self.session_id = session_id
        self.status = status
        super().__init__(f"Session {session_id} is not active (status: {status})")


class QuestionGenerationFailed(InterviewError):
    """Neither the oracle nor the built-in templates produced any question."""


class OracleUnavailable(InterviewError):
    """The remote oracle is not configured or could not be reached."""


class OracleResponseError(InterviewError):
    """The oracle answered with text that does not match the expected schema."""
