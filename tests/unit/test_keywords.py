"""Unit tests for KeywordExtractor."""

import pytest

from backend.app.core.keywords import MAX_KEYWORDS, STOP_WORDS, KeywordExtractor

JOB_POSTING = (
    "We are looking for a software engineer with experience in Java, Spring Boot, and AWS. "
    "The ideal candidate should have strong problem-solving skills and the ability to work "
    "in a team environment."
)


@pytest.fixture
def extractor():
    return KeywordExtractor()


@pytest.mark.unit
def test_extracts_relevant_keywords(extractor):
    keywords = extractor.extract(JOB_POSTING)

    assert "java" in keywords
    assert "spring" in keywords
    assert "boot" in keywords
    assert keywords[:3] == ["looking", "software", "engineer"]


@pytest.mark.unit
def test_keeps_plus_hash_and_dot_inside_tokens(extractor):
    keywords = extractor.extract("C++ and C# developers with Node.js")

    # "c#" is only two characters long, so it is dropped
    assert keywords == ["c++", "developers", "node.js"]


@pytest.mark.unit
def test_duplicates_collapse_to_first_occurrence(extractor):
    keywords = extractor.extract("Python python PYTHON Django python django Flask")

    assert keywords == ["python", "django", "flask"]


@pytest.mark.unit
def test_truncates_to_twenty_keywords(extractor):
    text = " ".join(f"skill{i:02d}" for i in range(30))

    keywords = extractor.extract(text)

    assert len(keywords) == MAX_KEYWORDS
    assert keywords[0] == "skill00"
    assert keywords[-1] == "skill19"


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", None, "   ", "the and with role team years ability required", "a an to of"])
def test_empty_or_filler_input_yields_nothing(extractor, text):
    assert extractor.extract(text) == []


@pytest.mark.unit
@pytest.mark.parametrize("text", [
    JOB_POSTING,
    "Required: 5+ years with SQL, ETL and BI tools; the role reports to the data team.",
    "An ability to ship. Has had go, js, ts, c, r experience. From this role, not that one.",
])
def test_never_returns_stop_words_or_short_tokens(extractor, text):
    keywords = extractor.extract(text)

    assert keywords
    assert not set(keywords) & STOP_WORDS
    assert all(len(k) > 2 for k in keywords)


@pytest.mark.unit
def test_extraction_is_repeatable(extractor):
    assert extractor.extract(JOB_POSTING) == extractor.extract(JOB_POSTING)


@pytest.mark.unit
def test_custom_limit():
    extractor = KeywordExtractor(limit=2)

    assert extractor.extract("kafka spark flink") == ["kafka", "spark"]


@pytest.mark.unit
def test_zero_limit_yields_nothing():
    assert KeywordExtractor(limit=0).extract("java spring kafka docker") == []
