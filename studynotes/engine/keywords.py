from __future__ import annotations

import re
from collections import Counter
from typing import List, Tuple

from studynotes.engine.stopwords import STOPWORDS


TOKEN_SPLIT = re.compile(r"\W+", re.ASCII)
MIN_TOKEN_LENGTH = 4
MAX_KEYWORDS = 10


def rank_terms(text: str) -> List[Tuple[str, int]]:
    """(term, count) pairs, most frequent first.

    Counter keeps first-seen order and sorted() is stable, so equal counts
    stay in order of first occurrence.
    """
    if not text or not text.strip():
        return []
    tokens = [
        t for t in TOKEN_SPLIT.split(text.lower())
        if len(t) >= MIN_TOKEN_LENGTH and t not in STOPWORDS
    ]
    counts = Counter(tokens)
    return sorted(counts.items(), key=lambda item: -item[1])


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    return [term for term, _ in rank_terms(text)[:limit]]
