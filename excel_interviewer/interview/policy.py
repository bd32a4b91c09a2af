"""
Advancement policy: decides whether the interview moves to the next question.

The evaluator only scores; whether a score is good enough to move on is the
orchestration layer's decision, made here.
"""
from dataclasses import dataclass

from .models import EvaluationResult
from ..utils.config import MAX_ATTEMPTS_PER_QUESTION, PASS_THRESHOLD


@dataclass(frozen=True)
class AdvancementPolicy:
    pass_threshold: int = PASS_THRESHOLD
    max_attempts: int = MAX_ATTEMPTS_PER_QUESTION

    def is_passing(self, evaluation: EvaluationResult) -> bool:
        return evaluation.passed or evaluation.score >= self.pass_threshold

    def attempts_exhausted(self, attempt: int) -> bool:
        return attempt >= self.max_attempts

    def should_advance(self, evaluation: EvaluationResult, attempt: int) -> bool:
        """
        Advance on a passing answer, or force-advance once the attempt cap is reached.

        Args:
            evaluation: Result for the latest answer
            attempt: 1-based attempt number of that answer

        Returns:
            True if the caller should advance the session
        """
        return self.is_passing(evaluation) or self.attempts_exhausted(attempt)
