"""
Lexicon Registry - loads the sentiment lexicon once at process start.

Supports bing-style CSV (word,sentiment) and JSON sources.
"""

import json
import logging
import os
from typing import Dict, Iterable, Tuple

import pandas as pd

from src.models.lexicon import POLARITIES, SentimentLexicon
from src.utils.errors import LexiconLoadError

logger = logging.getLogger(__name__)

WORD_COLUMN = "word"
SENTIMENT_COLUMN = "sentiment"


class LexiconRegistry:
    """
    Loads a word -> polarity lexicon from disk.

    The loaded SentimentLexicon is immutable; callers pass it explicitly
    into the Sentiment Scorer.
    """

    def __init__(self, lexicon_path: str):
        """
        Args:
            lexicon_path: Path to a .csv or .json lexicon file
        """
        self.lexicon_path = str(lexicon_path)

    def load(self) -> SentimentLexicon:
        """
        Load and validate the lexicon.

        Returns:
            SentimentLexicon

        Raises:
            LexiconLoadError: If the file is missing, unreadable, malformed,
                contains unknown polarity labels, or is empty
        """
        if not os.path.exists(self.lexicon_path):
            raise LexiconLoadError(f"Lexicon file not found: {self.lexicon_path}")

        extension = os.path.splitext(self.lexicon_path)[1].lower()
        try:
            if extension == ".json":
                pairs = self._read_json()
            else:
                pairs = self._read_csv()
        except LexiconLoadError:
            raise
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise LexiconLoadError(f"Failed to read lexicon {self.lexicon_path}: {e}") from e

        entries = self._build_entries(pairs)
        if not entries:
            raise LexiconLoadError(f"Lexicon {self.lexicon_path} contains no entries")

        lexicon = SentimentLexicon(entries=entries, source=self.lexicon_path)
        logger.info(
            f"Loaded lexicon from {self.lexicon_path}: {len(lexicon)} words "
            f"({lexicon.positive_count} positive, {lexicon.negative_count} negative)"
        )
        return lexicon

    def _read_csv(self) -> Iterable[Tuple[str, str]]:
        df = pd.read_csv(self.lexicon_path, dtype=str, keep_default_na=False)
        df.columns = [c.strip().lower() for c in df.columns]

        missing = {WORD_COLUMN, SENTIMENT_COLUMN} - set(df.columns)
        if missing:
            raise LexiconLoadError(
                f"Lexicon {self.lexicon_path} is missing columns: {sorted(missing)}"
            )

        return zip(df[WORD_COLUMN].tolist(), df[SENTIMENT_COLUMN].tolist())

    def _read_json(self) -> Iterable[Tuple[str, str]]:
        with open(self.lexicon_path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        # Either {"word": "polarity"} or [{"word": ..., "sentiment": ...}]
        if isinstance(data, dict):
            return list(data.items())
        if isinstance(data, list):
            try:
                return [(item[WORD_COLUMN], item[SENTIMENT_COLUMN]) for item in data]
            except (KeyError, TypeError) as e:
                raise LexiconLoadError(f"Malformed lexicon entry in {self.lexicon_path}: {e}") from e

        raise LexiconLoadError(f"Unsupported lexicon JSON structure in {self.lexicon_path}")

    def _build_entries(self, pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
        entries: Dict[str, str] = {}
        for raw_word, raw_polarity in pairs:
            word = str(raw_word).strip().lower()
            polarity = str(raw_polarity).strip().lower()
            if not word:
                continue

            if polarity not in POLARITIES:
                raise LexiconLoadError(
                    f"Invalid polarity '{raw_polarity}' for word '{word}' in {self.lexicon_path}"
                )

            previous = entries.get(word)
            if previous is not None and previous != polarity:
                logger.warning(
                    f"Conflicting polarity for '{word}': {previous} -> {polarity}, keeping {polarity}"
                )
            entries[word] = polarity

        return entries
