import json

from langchain_core.language_models.fake_chat_models import FakeListChatModel

from excel_interviewer.interview import Difficulty, QuestionGenerator
from excel_interviewer.interview.question_bank import QUESTION_TEMPLATES, list_categories, list_questions


def oracle_questions(n):
    return json.dumps([
        {
            "text": f"How would you use SUMIFS for report {i}?",
            "category": "Formulas",
            "expected_answer": "SUMIFS sums a range subject to several criteria ranges.",
            "hints": ["Think about multiple criteria"],
        }
        for i in range(n)
    ])


def test_fallback_returns_requested_count():
    questions = QuestionGenerator().generate_questions(3, Difficulty.BEGINNER)
    assert len(questions) == 3
    assert all(q.difficulty == Difficulty.BEGINNER for q in questions)
    assert questions[0].text == QUESTION_TEMPLATES[Difficulty.BEGINNER][0]["text"]


def test_fallback_caps_at_available_templates():
    questions = QuestionGenerator().generate_questions(20, Difficulty.ADVANCED)
    assert len(questions) == len(QUESTION_TEMPLATES[Difficulty.ADVANCED])


def test_fallback_ids_are_unique():
    generator = QuestionGenerator()
    first = generator.generate_questions(5, Difficulty.INTERMEDIATE)
    second = generator.generate_questions(5, Difficulty.INTERMEDIATE)
    ids = [q.id for q in first + second]
    assert len(set(ids)) == len(ids)
    assert all(i.startswith("q_") for i in ids)


def test_fallback_ignores_unknown_category():
    questions = QuestionGenerator().generate_questions(2, Difficulty.BEGINNER, category="Astrophysics")
    assert len(questions) == 2


def test_zero_count_returns_empty_list():
    assert QuestionGenerator().generate_questions(0, Difficulty.BEGINNER) == []


def test_keywords_derived_from_prompt():
    question = QuestionGenerator().generate_questions(1, Difficulty.BEGINNER)[0]
    assert question.keywords == ["difference", "workbook", "worksheet"]


def test_oracle_questions_are_used_and_truncated():
    llm = FakeListChatModel(responses=[oracle_questions(4)])
    questions = QuestionGenerator(llm=llm).generate_questions(2, Difficulty.INTERMEDIATE)
    assert len(questions) == 2
    assert questions[0].text == "How would you use SUMIFS for report 0?"
    assert questions[0].category == "Formulas"
    assert questions[0].difficulty == Difficulty.INTERMEDIATE
    assert "sumifs" in questions[0].keywords


def test_oracle_fenced_json_is_accepted():
    llm = FakeListChatModel(responses=["```json\n" + oracle_questions(1) + "\n```"])
    questions = QuestionGenerator(llm=llm).generate_questions(1, Difficulty.ADVANCED)
    assert len(questions) == 1


def test_malformed_oracle_response_yields_no_questions():
    llm = FakeListChatModel(responses=["Here are some questions: 1. What is Excel?"])
    assert QuestionGenerator(llm=llm).generate_questions(3, Difficulty.BEGINNER) == []


def test_oracle_schema_mismatch_yields_no_questions():
    llm = FakeListChatModel(responses=[json.dumps([{"question": "What is a macro?"}])])
    assert QuestionGenerator(llm=llm).generate_questions(1, Difficulty.BEGINNER) == []


def test_unreachable_oracle_falls_back_to_templates(failing_llm):
    questions = QuestionGenerator(llm=failing_llm).generate_questions(2, Difficulty.BEGINNER)
    assert len(questions) == 2
    assert questions[1].text == QUESTION_TEMPLATES[Difficulty.BEGINNER][1]["text"]


def test_list_questions_filters():
    beginner = list_questions(difficulty=Difficulty.BEGINNER)
    assert len(beginner) == len(QUESTION_TEMPLATES[Difficulty.BEGINNER])
    assert beginner[0].id == "bank-beginner-1"

    formulas = list_questions(category="formulas")
    assert formulas
    assert all(q.category == "Formulas" for q in formulas)


def test_list_categories_sorted_and_unique():
    categories = list_categories()
    assert categories == sorted(set(categories))
    assert "Formulas" in categories
