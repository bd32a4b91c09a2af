import excel_interviewer.utils as utils
from excel_interviewer.utils.scoring import clamp_score, mean_score, round_half_up
from excel_interviewer.utils.text_utils import (
    contains_term,
    count_distinct_numbers,
    derive_keywords,
    get_stopwords,
    significant_words,
    strip_code_fence,
    tokenize,
)


def test_tokenize_lowercases_and_drops_punctuation():
    assert tokenize("What's a PivotTable?") == ["what's", "a", "pivottable"]
    assert tokenize("") == []


def test_derive_keywords_skips_stopwords():
    keywords = derive_keywords("What is the difference between a workbook and a worksheet in Excel?")
    assert keywords == ["difference", "workbook", "worksheet"]


def test_derive_keywords_respects_limit():
    keywords = derive_keywords("absolute relative mixed references formulas copying cells", limit=3)
    assert keywords == ["absolute", "relative", "mixed"]


def test_significant_words_minimum_length_and_dedup():
    assert significant_words("SUM adds the sum of a range of cells") == ["adds", "range", "cells"]


def test_contains_term_is_case_insensitive():
    assert contains_term("Use a Pivot Table here", "pivot table")
    assert not contains_term("Use a Pivot Table here", "vlookup")
    assert not contains_term("", "vlookup")


def test_count_distinct_numbers():
    assert count_distinct_numbers("Rows 1, 2 and 2 again, then 3.5") == 3
    assert count_distinct_numbers("no digits") == 0


def test_comma_separated_list_counts_each_number():
    assert count_distinct_numbers("rows 1,2,3,4,5") == 5
    assert count_distinct_numbers("a rate of 0.25 and 0.25") == 1


def test_stopwords_combine_nltk_and_interview_words():
    words = get_stopwords()
    assert {"the", "between", "how", "does"} <= words
    assert {"excel", "explain", "describe", "use", "would"} <= words
    assert "vlookup" not in words
    assert get_stopwords() is words


def test_strip_code_fence():
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fence('  [1, 2]  ') == "[1, 2]"


def test_round_half_up_is_not_bankers_rounding():
    assert round_half_up(70.5) == 71
    assert round_half_up(72.5) == 73
    assert round_half_up(72.49) == 72


def test_clamp_score():
    assert clamp_score(140) == 100
    assert clamp_score(-5) == 0


def test_mean_score():
    assert mean_score([]) == 0
    assert mean_score([100, 80]) == 90
    assert mean_score([70, 71]) == 71


def test_utils_package_exports_submodules():
    for name in utils.__all__:
        assert hasattr(utils, name)
    assert utils.scoring.round_half_up(0.5) == 1
