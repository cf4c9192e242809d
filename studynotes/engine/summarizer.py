from __future__ import annotations

from typing import Dict, List, Set

from studynotes.engine.keywords import extract_keywords
from studynotes.engine.text import Sentence, paragraph_topic_sentences, split_into_sentences


SHORT_CONTENT_CHARS = 200
MAX_UNSCORED_SENTENCES = 5
TOP_SCORED_SENTENCES = 7


def join_sentences(sentences: List[Sentence]) -> str:
    return ". ".join(s.text for s in sentences) + "."


def score_sentence(text: str, keywords: List[str]) -> float:
    """Longer sentences and sentences mentioning keywords score higher."""
    lowered = text.lower()
    score = min(len(text) / 20, 3)
    score += 2 * sum(1 for k in keywords if k.lower() in lowered)
    return score


def summarize(text: str) -> str:
    """Extractive summary that keeps sentences in document order."""
    if len(text) < SHORT_CONTENT_CHARS:
        return text

    sentences = split_into_sentences(text)
    if not sentences:
        return text
    if len(sentences) <= MAX_UNSCORED_SENTENCES:
        return join_sentences(sentences)

    chosen: List[Sentence] = []
    chosen_texts: Set[str] = set()

    def include(sentence: Sentence) -> None:
        if sentence.text not in chosen_texts:
            chosen.append(sentence)
            chosen_texts.add(sentence.text)

    include(sentences[0])
    for topic in paragraph_topic_sentences(text):
        include(topic)

    keywords = extract_keywords(text)
    scores: Dict[str, float] = {}
    candidates: List[Sentence] = []
    for s in sentences:
        if s.text in chosen_texts or s.text in scores:
            continue
        scores[s.text] = score_sentence(s.text, keywords)
        candidates.append(s)

    ranked = sorted(candidates, key=lambda s: (-scores[s.text], s.index))
    for s in ranked[:TOP_SCORED_SENTENCES]:
        include(s)

    include(sentences[-1])

    return join_sentences(sorted(chosen, key=lambda s: s.index))
