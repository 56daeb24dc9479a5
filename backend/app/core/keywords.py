# backend/app/core/keywords.py

import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset({
    "the", "and", "with", "for", "that", "this", "from", "are", "was", "but", "not",
    "have", "has", "had", "by", "on", "in", "at", "to", "of", "a", "an", "role",
    "team", "years", "ability", "required",
})

MAX_KEYWORDS = 20
MIN_TOKEN_LENGTH = 3

# '+', '#' and '.' stay inside tokens so c++, c# and node.js survive
_SPLIT_RE = re.compile(r"[^a-z0-9+#.]+")


class KeywordExtractor:
    """Pulls candidate ATS keywords out of a job description."""

    def __init__(self, stop_words=STOP_WORDS, limit: int = MAX_KEYWORDS):
        self.stop_words = frozenset(stop_words)
        self.limit = limit

    def extract(self, job_description: Optional[str]) -> List[str]:
        text = (job_description or "").lower()
        logger.info("Extracting keywords from job description - length=%d", len(text))

        keywords: List[str] = []
        seen = set()
        for token in _SPLIT_RE.split(text):
            if len(keywords) >= self.limit:
                break
            if len(token) < MIN_TOKEN_LENGTH or token in self.stop_words or token in seen:
                continue
            seen.add(token)
            keywords.append(token)

        logger.info("Extracted %d keywords: %s", len(keywords), keywords)
        return keywords
