import json
from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from app import create_app
from excel_interviewer.api import InterviewService
from excel_interviewer.interview import (
    AnswerEvaluator,
    Difficulty,
    InterviewSessionManager,
    Question,
    QuestionGenerator,
    SessionStore
)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 15, 9, 0, 0)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FailingChatModel(FakeListChatModel):
    """Chat model whose every call fails like an unreachable endpoint."""

    def _call(self, *args, **kwargs):
        raise ConnectionError("oracle unreachable")


def oracle_json(score, passed, feedback="Solid answer.", follow_ups=None):
    return json.dumps({
        "score": score,
        "pass": passed,
        "feedback": feedback,
        "follow_ups": follow_ups or [],
    })


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def vlookup_question():
    return Question(
        id="q-vlookup",
        text="What does VLOOKUP do?",
        category="Lookup",
        difficulty=Difficulty.INTERMEDIATE,
        expected_answer="",
        keywords=["vlookup", "lookup"],
    )


@pytest.fixture
def manager(clock):
    """Session manager with no oracle (template questions, fallback scoring)."""
    return InterviewSessionManager(SessionStore(), QuestionGenerator(), AnswerEvaluator(), clock=clock)


@pytest.fixture
def service(clock):
    return InterviewService(llm=None, clock=clock)


@pytest.fixture
def client(service):
    with TestClient(create_app(service)) as test_client:
        yield test_client


@pytest.fixture
def failing_llm():
    return FailingChatModel(responses=["unused"])
