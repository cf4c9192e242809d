from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
SENTENCE_SPLIT = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class Sentence:
    index: int
    text: str


def split_into_paragraphs(text: str) -> List[str]:
    return [p.strip() for p in PARAGRAPH_SPLIT.split(text or "") if p.strip()]


def _split_paragraph(paragraph: str) -> List[str]:
    return [s.strip() for s in SENTENCE_SPLIT.split(paragraph) if s.strip()]


def split_into_sentences(text: str) -> List[Sentence]:
    """Split text into sentences, paragraph by paragraph.

    A paragraph that does not end with terminal punctuation never runs into
    the next one. Each sentence keeps its position in the whole document.
    """
    out: List[Sentence] = []
    for paragraph in split_into_paragraphs(text):
        for s in _split_paragraph(paragraph):
            out.append(Sentence(index=len(out), text=s))
    return out


def paragraph_topic_sentences(text: str) -> List[Sentence]:
    """First sentence of every paragraph, with document-wide indexes."""
    topics: List[Sentence] = []
    offset = 0
    for paragraph in split_into_paragraphs(text):
        parts = _split_paragraph(paragraph)
        if parts:
            topics.append(Sentence(index=offset, text=parts[0]))
        offset += len(parts)
    return topics
