"""
Answer Evaluator for the Excel Mock Interviewer.

Rubric-first evaluation:
1. Deterministic rubric (keyword, domain-term and numeric-density scores)
2. Confidently high rubric scores short-circuit without calling the oracle
3. Otherwise the LLM oracle scores the answer; it can raise but never lower
   the rubric score
4. Any oracle failure degrades to a length/keyword fallback score

evaluate_answer never raises: every path returns an EvaluationResult.
"""

import json
from typing import List, Optional

from pydantic import ValidationError

from .errors import OracleResponseError, OracleUnavailable
from .models import EvaluationContext, EvaluationResult, OracleEvaluation, Question
from ..llm.groq_service import create_evaluation_chain
from ..utils.config import (
    PASS_THRESHOLD,
    SHORT_CIRCUIT_THRESHOLD,
    KEYWORD_WEIGHT,
    DOMAIN_TERM_WEIGHT,
    NUMERIC_WEIGHT,
    MAX_FOLLOW_UPS
)
from ..utils.logger import setup_logger
from ..utils.scoring import clamp_score, round_half_up
from ..utils.text_utils import (
    contains_term,
    count_distinct_numbers,
    significant_words,
    strip_code_fence,
    unique
)

logger = setup_logger("answer_evaluator")

# Excel functions and features that signal hands-on familiarity
DOMAIN_TERMS = (
    "vlookup",
    "xlookup",
    "index",
    "match",
    "sumif",
    "countif",
    "pivot table",
    "conditional formatting",
    "data validation",
    "chart",
    "macro",
    "named range",
)

SHORT_CIRCUIT_FEEDBACK = "Excellent answer! You covered the key concepts."


class AnswerEvaluator:
    """
    Evaluates interview answers with a deterministic rubric and an optional LLM oracle.
    """

    def __init__(
        self,
        llm=None,
        pass_threshold: int = PASS_THRESHOLD,
        short_circuit_threshold: int = SHORT_CIRCUIT_THRESHOLD
    ):
        """
        Initialize answer evaluator.

        Args:
            llm: Optional chat model. If None, the oracle step always falls back.
            pass_threshold: Minimum score for a pass
            short_circuit_threshold: Rubric score at which the oracle is skipped
        """
        self.llm = llm
        self.pass_threshold = pass_threshold
        self.short_circuit_threshold = short_circuit_threshold
        self._evaluation_chain = None

        logger.info(f"AnswerEvaluator initialized (oracle={'on' if llm is not None else 'off'})")

    def _get_evaluation_chain(self):
        """Get or create answer evaluation chain."""
        if self._evaluation_chain is None:
            self._evaluation_chain = create_evaluation_chain(self.llm)
        return self._evaluation_chain

    # ---- deterministic rubric ----

    def rubric_terms(self, question: Question) -> List[str]:
        """Question keywords plus significant words from the expected-answer outline."""
        keywords = [k.lower() for k in question.keywords if k.strip()]
        return unique(keywords + significant_words(question.expected_answer))

    def keyword_score(self, question: Question, answer: str) -> float:
        """Percentage of rubric terms found in the answer (0-100)."""
        terms = self.rubric_terms(question)
        if not terms:
            return 0.0
        found = sum(1 for term in terms if contains_term(answer, term))
        return 100.0 * found / len(terms)

    def domain_term_score(self, answer: str) -> float:
        """Percentage of the Excel domain vocabulary present in the answer (0-100)."""
        found = sum(1 for term in DOMAIN_TERMS if contains_term(answer, term))
        return 100.0 * found / len(DOMAIN_TERMS)

    def numeric_score(self, answer: str) -> float:
        """10 points per distinct number in the answer, capped at 100."""
        return float(min(100, 10 * count_distinct_numbers(answer)))

    def rubric_score(self, question: Question, answer: str) -> int:
        """Weighted deterministic aggregate, capped at 100."""
        aggregate = (
            KEYWORD_WEIGHT * self.keyword_score(question, answer)
            + DOMAIN_TERM_WEIGHT * self.domain_term_score(answer)
            + NUMERIC_WEIGHT * self.numeric_score(answer)
        )
        return min(100, round_half_up(aggregate))

    # ---- evaluation ----

    def evaluate_answer(
        self,
        question: Question,
        answer: str,
        context: Optional[EvaluationContext] = None
    ) -> EvaluationResult:
        """
        Evaluate a candidate's answer.

        Args:
            question: The question being answered
            answer: Candidate's answer text
            context: Optional interview context passed to the oracle

        Returns:
            EvaluationResult with score (0-100), pass flag, feedback and follow-ups
        """
        answer = answer or ""
        rubric = self.rubric_score(question, answer)

        if rubric >= self.short_circuit_threshold:
            logger.info(f"Rubric score {rubric} for question {question.id}, skipping oracle")
            return EvaluationResult(
                score=rubric,
                passed=True,
                feedback=SHORT_CIRCUIT_FEEDBACK,
                follow_ups=[],
                source="rubric"
            )

        try:
            graded = self._call_oracle(question, answer, context)
        except OracleUnavailable as e:
            logger.info(f"Oracle unavailable ({e}), using fallback scoring")
            return self.fallback_evaluation(question, answer)
        except Exception as e:
            logger.error(f"Error evaluating answer with oracle, using fallback scoring: {e}")
            return self.fallback_evaluation(question, answer)

        final_score = max(rubric, graded.score)
        follow_ups = [f.strip() for f in graded.follow_ups if f and f.strip()][:MAX_FOLLOW_UPS]
        logger.info(
            f"Evaluated answer for question {question.id}: rubric={rubric}, "
            f"oracle={graded.score}, final={final_score}"
        )
        return EvaluationResult(
            score=final_score,
            passed=final_score >= self.pass_threshold,
            feedback=graded.feedback,
            follow_ups=follow_ups,
            source="oracle"
        )

    def fallback_evaluation(self, question: Question, answer: str) -> EvaluationResult:
        """
        Length/keyword fallback used whenever the oracle cannot produce a score.

        Base 40, +20 over 50 characters, +10 more over 100, +10 more over 200,
        +20 if any question keyword is present; capped at 100.
        """
        answer = answer or ""
        length = len(answer)
        score = 40
        if length > 50:
            score += 20
        if length > 100:
            score += 10
        if length > 200:
            score += 10
        if any(contains_term(answer, k) for k in question.keywords):
            score += 20
        score = clamp_score(score)

        if score >= 80:
            feedback = "Good answer! You covered the main points."
        elif score >= self.pass_threshold:
            feedback = "Reasonable answer, but it could be more comprehensive."
        else:
            feedback = "Your answer is missing some key concepts. Try to be more specific."

        follow_ups: List[str] = []
        if score < 70:
            if score >= self.pass_threshold:
                follow_ups = ["Can you provide a specific example?"]
            else:
                follow_ups = [
                    "Can you explain this concept in more detail?",
                    "What are the main components involved?",
                ]

        return EvaluationResult(
            score=score,
            passed=score >= self.pass_threshold,
            feedback=feedback,
            follow_ups=follow_ups[:MAX_FOLLOW_UPS],
            source="fallback"
        )

    # ---- oracle ----

    def _call_oracle(
        self,
        question: Question,
        answer: str,
        context: Optional[EvaluationContext]
    ) -> OracleEvaluation:
        """Call the oracle and decode its response; raises on any failure."""
        if self.llm is None:
            raise OracleUnavailable("no LLM configured")

        chain = self._get_evaluation_chain()
        result = chain.invoke({
            "question": question.text,
            "expected_answer": question.expected_answer or "Not provided",
            "keywords": ", ".join(question.keywords) or "None",
            "answer": answer,
            "context": self._format_context(context)
        })
        return self._parse_evaluation(result.get("evaluation", ""))

    def _parse_evaluation(self, text: str) -> OracleEvaluation:
        """Decode the oracle's JSON object strictly."""
        try:
            payload = json.loads(strip_code_fence(text))
        except (json.JSONDecodeError, TypeError) as e:
            raise OracleResponseError(f"not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise OracleResponseError(f"expected a JSON object, got {type(payload).__name__}")

        try:
            return OracleEvaluation.model_validate(payload)
        except ValidationError as e:
            raise OracleResponseError(f"schema mismatch: {e.error_count()} error(s)") from e

    def _format_context(self, context: Optional[EvaluationContext]) -> str:
        if context is None:
            return "No additional context."

        lines = []
        if context.user_level is not None:
            lines.append(f"Candidate level: {context.user_level.value}")
        if context.answered_count:
            lines.append(
                f"Session so far: {context.passed_count}/{context.answered_count} answers passed, "
                f"average score {context.average_score:.0f}"
            )
        if context.previous_answers:
            lines.append("Previous attempts at this question:")
            lines.extend(f"- {a}" for a in context.previous_answers)
        return "\n".join(lines) or "No additional context."
