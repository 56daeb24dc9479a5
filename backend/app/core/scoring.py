# backend/app/core/scoring.py

import logging
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class AtsScorer:
    """Percentage of job keywords that appear verbatim in the resume."""

    def score(self, resume_text: Optional[str], keywords: Sequence[str]) -> int:
        total = len(keywords)
        if total == 0:
            logger.warning("No keywords provided, returning score 0")
            return 0

        normalized_resume = (resume_text or "").lower()
        matches = sum(1 for kw in keywords if kw.lower() in normalized_resume)
        # round half up; round() would send 12.5 to 12
        score = (matches * 200 + total) // (2 * total)

        logger.info("ATS score calculated: %d%% (%d/%d keywords matched)", score, matches, total)
        return score
