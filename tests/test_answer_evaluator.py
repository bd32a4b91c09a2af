from langchain_core.language_models.fake_chat_models import FakeListChatModel

from excel_interviewer.interview import AnswerEvaluator, EvaluationContext, Difficulty, Question
from excel_interviewer.interview.answer_evaluator import DOMAIN_TERMS, SHORT_CIRCUIT_FEEDBACK
from excel_interviewer.interview.question_bank import list_questions

from conftest import oracle_json

STRONG_ANSWER = (
    "VLOOKUP finds a lookup value in the first column. XLOOKUP, INDEX with MATCH, "
    "SUMIF, COUNTIF and a pivot table cover related needs. "
    "Example rows: 1 2 3 4 5 6 7 8 9 10."
)
WEAK_ANSWER = "It finds things."


def test_rubric_components(vlookup_question):
    evaluator = AnswerEvaluator()
    assert evaluator.rubric_terms(vlookup_question) == ["vlookup", "lookup"]
    assert evaluator.keyword_score(vlookup_question, "Use VLOOKUP") == 100.0
    assert evaluator.domain_term_score("vlookup and match") == 100.0 * 2 / len(DOMAIN_TERMS)
    assert evaluator.numeric_score("values 1 2 3") == 30.0
    assert evaluator.numeric_score(" ".join(str(i) for i in range(20))) == 100.0


def test_rubric_score_is_zero_for_irrelevant_answer(vlookup_question):
    assert AnswerEvaluator().rubric_score(vlookup_question, WEAK_ANSWER) == 0


def test_high_rubric_score_skips_oracle(vlookup_question, failing_llm):
    evaluator = AnswerEvaluator(llm=failing_llm)
    result = evaluator.evaluate_answer(vlookup_question, STRONG_ANSWER)
    assert result.source == "rubric"
    assert result.score >= 85
    assert result.passed
    assert result.feedback == SHORT_CIRCUIT_FEEDBACK
    assert result.follow_ups == []


def test_short_circuit_with_outline_words(failing_llm):
    question = list_questions(difficulty=Difficulty.BEGINNER)[0]
    evaluator = AnswerEvaluator(llm=failing_llm)
    terms = evaluator.rubric_terms(question)
    assert set(question.keywords) < set(terms)
    assert "grid" in terms

    keywords_only = " ".join(question.keywords)
    assert evaluator.keyword_score(question, keywords_only) < 100.0

    answer = (
        " ".join(terms)
        + " vlookup xlookup index match sumif countif. 1 2 3 4 5 6 7 8 9 10"
    )
    result = evaluator.evaluate_answer(question, answer)
    assert result.source == "rubric"
    assert result.score == evaluator.rubric_score(question, answer)
    assert result.score >= 85
    assert result.passed


def test_oracle_score_used_when_higher(vlookup_question):
    llm = FakeListChatModel(responses=[oracle_json(72, True, follow_ups=["a?", "b?", "c?", "d?"])])
    result = AnswerEvaluator(llm=llm).evaluate_answer(vlookup_question, WEAK_ANSWER)
    assert result.source == "oracle"
    assert result.score == 72
    assert result.passed
    assert result.feedback == "Solid answer."
    assert result.follow_ups == ["a?", "b?", "c?"]


def test_oracle_cannot_lower_rubric_score(vlookup_question):
    # keyword score 100 (60 points) plus two domain terms (5 points)
    answer = "VLOOKUP does a lookup, like INDEX."
    llm = FakeListChatModel(responses=[oracle_json(30, False, feedback="Too short.")])
    result = AnswerEvaluator(llm=llm).evaluate_answer(vlookup_question, answer)
    assert result.source == "oracle"
    assert result.score == 65
    assert result.passed


def test_oracle_pass_flag_is_recomputed_from_final_score(vlookup_question):
    llm = FakeListChatModel(responses=[oracle_json(45, True)])
    result = AnswerEvaluator(llm=llm).evaluate_answer(vlookup_question, WEAK_ANSWER)
    assert result.score == 45
    assert not result.passed


def test_fenced_oracle_json_is_accepted(vlookup_question):
    llm = FakeListChatModel(responses=["```json\n" + oracle_json(66, True) + "\n```"])
    result = AnswerEvaluator(llm=llm).evaluate_answer(vlookup_question, WEAK_ANSWER)
    assert result.source == "oracle"
    assert result.score == 66


def test_non_json_oracle_response_falls_back(vlookup_question):
    llm = FakeListChatModel(responses=["Great answer, I would give it 90/100."])
    result = AnswerEvaluator(llm=llm).evaluate_answer(vlookup_question, WEAK_ANSWER)
    assert result.source == "fallback"
    assert result.score == 40
    assert not result.passed


def test_oracle_schema_mismatch_falls_back(vlookup_question):
    missing_follow_ups = '{"score": 90, "pass": true, "feedback": "Nice."}'
    extra_field = '{"score": 90, "pass": true, "feedback": "Nice.", "follow_ups": [], "grade": "A"}'
    out_of_range = '{"score": 140, "pass": true, "feedback": "Nice.", "follow_ups": []}'
    for response in (missing_follow_ups, extra_field, out_of_range, "[1, 2, 3]"):
        llm = FakeListChatModel(responses=[response])
        result = AnswerEvaluator(llm=llm).evaluate_answer(vlookup_question, WEAK_ANSWER)
        assert result.source == "fallback"
        assert result.score == 40


def test_mistyped_oracle_values_fall_back(vlookup_question):
    string_score = '{"score": "88", "pass": true, "feedback": "ok", "follow_ups": []}'
    string_pass = '{"score": 88, "pass": "yes", "feedback": "ok", "follow_ups": []}'
    float_score = '{"score": 88.0, "pass": true, "feedback": "ok", "follow_ups": []}'
    for response in (string_score, string_pass, float_score):
        llm = FakeListChatModel(responses=[response])
        result = AnswerEvaluator(llm=llm).evaluate_answer(vlookup_question, WEAK_ANSWER)
        assert result.source == "fallback"
        assert result.score == 40


def test_unreachable_oracle_falls_back(vlookup_question, failing_llm):
    result = AnswerEvaluator(llm=failing_llm).evaluate_answer(vlookup_question, WEAK_ANSWER)
    assert result.source == "fallback"
    assert result.score == 40


def test_no_oracle_uses_fallback(vlookup_question):
    result = AnswerEvaluator().evaluate_answer(vlookup_question, WEAK_ANSWER, EvaluationContext())
    assert result.source == "fallback"
    assert result.feedback == "Your answer is missing some key concepts. Try to be more specific."
    assert result.follow_ups == [
        "Can you explain this concept in more detail?",
        "What are the main components involved?",
    ]


def test_fallback_passing_band_has_one_follow_up(vlookup_question):
    answer = "It returns a matching value from a table. " * 2
    result = AnswerEvaluator().fallback_evaluation(vlookup_question, answer)
    assert result.score == 60
    assert result.passed
    assert result.feedback == "Reasonable answer, but it could be more comprehensive."
    assert result.follow_ups == ["Can you provide a specific example?"]


def test_fallback_long_answer_with_keyword_scores_full_marks(vlookup_question):
    answer = "Lookup " + "x" * 220
    result = AnswerEvaluator().fallback_evaluation(vlookup_question, answer)
    assert result.score == 100
    assert result.passed
    assert result.feedback == "Good answer! You covered the main points."
    assert result.follow_ups == []


def test_fallback_length_steps():
    question = Question(id="q", text="Explain charts.", difficulty=Difficulty.BEGINNER)
    evaluator = AnswerEvaluator()
    assert evaluator.fallback_evaluation(question, "x" * 50).score == 40
    assert evaluator.fallback_evaluation(question, "x" * 51).score == 60
    assert evaluator.fallback_evaluation(question, "x" * 101).score == 70
    assert evaluator.fallback_evaluation(question, "x" * 201).score == 80


def test_empty_answer_is_scored_not_rejected(vlookup_question):
    result = AnswerEvaluator().evaluate_answer(vlookup_question, "")
    assert result.score == 40
    assert not result.passed


def test_context_is_formatted_for_oracle():
    context = EvaluationContext(
        previous_answers=["first try"],
        user_level=Difficulty.ADVANCED,
        answered_count=2,
        passed_count=1,
        average_score=65.0,
    )
    text = AnswerEvaluator()._format_context(context)
    assert "Candidate level: advanced" in text
    assert "1/2 answers passed" in text
    assert "- first try" in text
    assert AnswerEvaluator()._format_context(None) == "No additional context."
