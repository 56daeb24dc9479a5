"""Unit tests for AtsScorer."""

import pytest

from backend.app.core.keywords import KeywordExtractor
from backend.app.core.scoring import AtsScorer


@pytest.fixture
def scorer():
    return AtsScorer()


@pytest.mark.unit
def test_calculates_score(scorer):
    score = scorer.score(
        "Experienced software engineer with expertise in Java and Spring Boot.",
        ["software engineer", "java", "spring boot", "aws"],
    )
    assert score == 75


@pytest.mark.unit
def test_no_keywords_scores_zero(scorer):
    assert scorer.score("Anything at all", []) == 0
    assert scorer.score("", []) == 0


@pytest.mark.unit
def test_matching_is_case_insensitive(scorer):
    assert scorer.score("Senior JAVA developer", ["Java"]) == 100


@pytest.mark.unit
def test_repeated_occurrences_count_once(scorer):
    assert scorer.score("java java java java", ["java", "aws"]) == 50


@pytest.mark.unit
def test_rounds_half_up(scorer):
    keywords = ["java", "rust", "scala", "kotlin", "swift", "ruby", "perl", "haskell"]

    # 1/8 = 12.5%
    assert scorer.score("I write java.", keywords) == 13


@pytest.mark.unit
@pytest.mark.parametrize("resume, expected", [
    ("kafka", 33),
    ("kafka spark", 67),
    ("kafka spark flink", 100),
])
def test_thirds(scorer, resume, expected):
    assert scorer.score(resume, ["kafka", "spark", "flink"]) == expected


@pytest.mark.unit
def test_adding_a_missing_keyword_never_lowers_the_score(scorer):
    keywords = ["python", "django", "postgres", "docker"]
    resume = "Python and Django developer"

    before = scorer.score(resume, keywords)
    after = scorer.score(resume + " who ships with Docker", keywords)

    assert after > before


@pytest.mark.unit
def test_single_word_keywords_from_extraction(scorer):
    keywords = KeywordExtractor().extract("Java Spring Boot AWS")
    assert keywords == ["java", "spring", "boot", "aws"]

    # "spring" and "boot" are separate tokens, each found in "spring boot"
    assert scorer.score("Built Java services with Spring Boot", keywords) == 75


@pytest.mark.unit
def test_multi_word_keyword_needs_the_exact_phrase(scorer):
    keywords = ["java", "spring boot", "aws"]

    assert scorer.score("Built Java services with Spring Boot", keywords) == 67
    # both words present, but not as one phrase
    assert scorer.score("Java, Spring and Boot", keywords) == 33
