"""
Sentiment Scorer.

Lexicon-based word scoring: net count of positive minus negative
tokens per review.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from src.models.lexicon import NEGATIVE, POSITIVE, SentimentLexicon
from src.models.review import NormalizedRecord

logger = logging.getLogger(__name__)

# Anything except letters, digits, whitespace and ! ? .
_DISALLOWED_CHARS = re.compile(r"[^\w\s!?.]|_")
_WHITESPACE_RUN = re.compile(r"\s+")
_WORD = re.compile(r"[^\W_]+")


@dataclass(frozen=True)
class SentimentBreakdown:
    """Token-level sentiment counts for one review."""
    positive: int = 0
    negative: int = 0

    @property
    def score(self) -> int:
        return self.positive - self.negative


def cleanse(text: Optional[str]) -> str:
    """
    Remove characters other than alphanumerics, whitespace and ! ? .
    and collapse whitespace runs to single spaces.
    """
    if not text:
        return ""
    stripped = _DISALLOWED_CHARS.sub("", text)
    return _WHITESPACE_RUN.sub(" ", stripped).strip()


def tokenize(text: Optional[str]) -> List[str]:
    """Split text into lowercase single-word tokens."""
    return _WORD.findall(cleanse(text).lower())


class SentimentScorer:
    """
    Scores review texts against an injected, read-only lexicon.
    """

    def __init__(self, lexicon: SentimentLexicon):
        """
        Args:
            lexicon: Word -> polarity mapping shared across all reviews
        """
        self.lexicon = lexicon
        logger.info(f"Initialized SentimentScorer with {len(lexicon)} lexicon words")

    def score_text(self, text: Optional[str]) -> SentimentBreakdown:
        """
        Score a single review text.

        Returns:
            SentimentBreakdown; score is 0 when no token matches the lexicon
        """
        polarities = Counter(
            polarity
            for polarity in (self.lexicon.polarity(token) for token in tokenize(text))
            if polarity is not None
        )
        return SentimentBreakdown(positive=polarities[POSITIVE], negative=polarities[NEGATIVE])

    def score(self, records: Sequence[NormalizedRecord]) -> Dict[str, SentimentBreakdown]:
        """
        Score every record.

        Args:
            records: Normalized records

        Returns:
            Mapping record_id -> SentimentBreakdown
        """
        scores = {record.record_id: self.score_text(record.review_text) for record in records}

        matched = sum(1 for b in scores.values() if b.positive or b.negative)
        logger.info(
            f"Scored {len(scores)} reviews ({matched} with lexicon matches, "
            f"{len(scores) - matched} scored 0)"
        )
        return scores
