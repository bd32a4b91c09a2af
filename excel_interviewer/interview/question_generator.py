"""
Question Generator for the Excel Mock Interviewer.

Produces interview questions for a requested difficulty (and optional
category) from the LLM oracle, or from the built-in template bank when the
oracle is not configured or cannot be reached.

Contract:
- Fallback returns min(count, available templates) questions and never fails
  for an unknown category (category is informational only there).
- An oracle response that does not decode to the expected JSON array yields
  an empty list; the session manager treats that as a hard failure.
"""

import json
import uuid
from typing import List, Optional

from pydantic import ValidationError

from .errors import OracleResponseError
from .models import Difficulty, OracleQuestion, Question
from .question_bank import build_question, get_templates
from ..llm.groq_service import create_question_chain
from ..utils.logger import setup_logger
from ..utils.text_utils import strip_code_fence

logger = setup_logger("question_generator")


def new_question_id() -> str:
    return f"q_{uuid.uuid4().hex}"


class QuestionGenerator:
    """
    Generates interview questions using the LLM oracle with a template fallback.
    """

    def __init__(self, llm=None):
        """
        Initialize question generator.

        Args:
            llm: Optional chat model. If None, only built-in templates are used.
        """
        self.llm = llm
        self._question_chain = None

        logger.info(f"QuestionGenerator initialized (oracle={'on' if llm is not None else 'off'})")

    def _get_question_chain(self):
        """Get or create question generation chain."""
        if self._question_chain is None:
            self._question_chain = create_question_chain(self.llm)
        return self._question_chain

    def generate_questions(
        self,
        count: int,
        difficulty: Difficulty,
        category: Optional[str] = None
    ) -> List[Question]:
        """
        Generate interview questions.

        Args:
            count: Number of questions wanted
            difficulty: beginner/intermediate/advanced
            category: Optional category hint

        Returns:
            List of Question objects (possibly fewer than `count`, possibly empty)
        """
        difficulty = Difficulty(difficulty)
        if count <= 0:
            return []

        if self.llm is None:
            return self.fallback_questions(count, difficulty)

        try:
            chain = self._get_question_chain()
            result = chain.invoke({
                "num_questions": count,
                "difficulty": difficulty.value,
                "category": category or "any Excel topic"
            })
        except Exception as e:
            logger.error(f"Error calling question oracle, using built-in templates: {e}")
            return self.fallback_questions(count, difficulty)

        try:
            questions = self._parse_questions(result.get("questions", ""), difficulty)
        except OracleResponseError as e:
            logger.error(f"Discarding malformed question oracle response: {e}")
            return []

        logger.info(f"Generated {len(questions[:count])} {difficulty.value} questions via oracle")
        return questions[:count]

    def fallback_questions(self, count: int, difficulty: Difficulty) -> List[Question]:
        """
        Build questions from the built-in templates.

        Args:
            count: Number of questions wanted
            difficulty: Difficulty tier

        Returns:
            The first min(count, available) templates as fresh Questions
        """
        templates = get_templates(difficulty)[:max(count, 0)]
        questions = [build_question(new_question_id(), difficulty, t) for t in templates]
        logger.info(f"Using {len(questions)} built-in {Difficulty(difficulty).value} questions")
        return questions

    def _parse_questions(self, text: str, difficulty: Difficulty) -> List[Question]:
        """Decode the oracle's JSON array into Questions, failing closed."""
        try:
            payload = json.loads(strip_code_fence(text))
        except (json.JSONDecodeError, TypeError) as e:
            raise OracleResponseError(f"not valid JSON: {e}") from e

        if not isinstance(payload, list):
            raise OracleResponseError(f"expected a JSON array, got {type(payload).__name__}")

        try:
            items = [OracleQuestion.model_validate(item) for item in payload]
        except ValidationError as e:
            raise OracleResponseError(f"schema mismatch: {e.error_count()} error(s)") from e

        return [
            build_question(new_question_id(), difficulty, item.model_dump())
            for item in items
        ]
