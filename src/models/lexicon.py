"""
Sentiment lexicon data model.

Static word -> polarity mapping shared read-only by the Sentiment Scorer.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

POSITIVE = "positive"
NEGATIVE = "negative"
POLARITIES = (POSITIVE, NEGATIVE)


@dataclass(frozen=True)
class SentimentLexicon:
    """
    Immutable mapping from lowercase word to "positive" or "negative".
    """
    entries: Mapping[str, str] = field(default_factory=dict)
    source: str = ""  # Where the lexicon was loaded from, for logging

    def __post_init__(self):
        cleaned: Dict[str, str] = {}
        for word, polarity in self.entries.items():
            if polarity not in POLARITIES:
                raise ValueError(
                    f"Invalid polarity for '{word}': {polarity}. Must be 'positive' or 'negative'"
                )
            cleaned[word.strip().lower()] = polarity
        object.__setattr__(self, "entries", MappingProxyType(cleaned))

    def polarity(self, word: str) -> Optional[str]:
        """Return the polarity label for a word, or None if it is not in the lexicon."""
        return self.entries.get(word)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def positive_count(self) -> int:
        return sum(1 for p in self.entries.values() if p == POSITIVE)

    @property
    def negative_count(self) -> int:
        return sum(1 for p in self.entries.values() if p == NEGATIVE)
