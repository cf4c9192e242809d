from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence, Tuple

from studynotes.engine.keywords import extract_keywords
from studynotes.engine.text import split_into_sentences


MAX_QUESTIONS = 5
MIN_QUESTIONS = 3
OPTION_COUNT = 4
MIN_ANCHOR_LENGTH = 20
MIN_DISTRACTOR_LENGTH = 15

NOT_MENTIONED = "This information is not mentioned in the notes"
STATED_EXPLANATION = "This information is directly stated in the notes."
GENERIC_QUESTION = "What is one of the main topics covered in these notes?"
GENERIC_EXPLANATION = "This appears to be one of the key topics based on frequency of mention."
GENERIC_DISTRACTORS = (
    "This topic is not covered",
    "All topics are equally important",
    "The notes don't have a clear focus",
)


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int:
        ...


@dataclass(frozen=True)
class QuizQuestion:
    question: str
    options: Tuple[str, ...]
    correct_answer_index: int
    explanation: Optional[str] = None

    @property
    def correct_answer(self) -> str:
        return self.options[self.correct_answer_index]

    def to_dict(self) -> dict:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctAnswerIndex": self.correct_answer_index,
            "explanation": self.explanation,
        }


def shuffle(items: Sequence[str], rng: RandomSource) -> List[str]:
    """Fisher-Yates shuffle of a copy of ``items``."""
    out = list(items)
    for k in range(len(out) - 1, 0, -1):
        j = rng.randrange(k + 1)
        out[k], out[j] = out[j], out[k]
    return out


def _shuffled_question(question: str, correct: str, distractors: List[str],
                       explanation: str, rng: RandomSource) -> QuizQuestion:
    options = shuffle([correct] + distractors, rng)
    return QuizQuestion(
        question=question,
        options=tuple(options),
        correct_answer_index=options.index(correct),
        explanation=explanation,
    )


def swap_keyword(sentence: str, old: str, new: str) -> str:
    """Replace every occurrence of ``old`` (any case) with ``new``."""
    return re.sub(re.escape(old), lambda _m: new, sentence, flags=re.IGNORECASE)


def build_distractors(anchor: str, keyword: str, sentences: List[str], keywords: List[str]) -> List[str]:
    others = [s for s in sentences if s != anchor and len(s) > MIN_DISTRACTOR_LENGTH]
    swap_from = next((k for k in keywords if k != keyword), None) if len(keywords) > 1 else None
    distractors = []
    for s in others[:OPTION_COUNT - 1]:
        distractors.append(swap_keyword(s, swap_from, keyword) if swap_from else s)
    while len(distractors) < OPTION_COUNT - 1:
        distractors.append(NOT_MENTIONED)
    return distractors


def _anchor_questions(sentences: List[str], keywords: List[str], rng: RandomSource) -> List[QuizQuestion]:
    n = len(sentences)
    loop_count = min(MAX_QUESTIONS, n // 2)
    out: List[QuizQuestion] = []
    for i in range(loop_count):
        anchor = sentences[(i * n) // loop_count]
        if len(anchor) < MIN_ANCHOR_LENGTH:
            continue
        lowered = anchor.lower()
        keyword = next((k for k in keywords if k.lower() in lowered), None)
        # anchors without a keyword produce no question
        if keyword is None:
            continue
        out.append(_shuffled_question(
            f'According to the notes, what is mentioned about "{keyword}"?',
            anchor,
            build_distractors(anchor, keyword, sentences, keywords),
            STATED_EXPLANATION,
            rng,
        ))
    return out


def _definition_question(sentences: List[str], keyword: str, rng: RandomSource) -> Optional[QuizQuestion]:
    relevant = next((s for s in sentences if keyword.lower() in s.lower()), None)
    if relevant is None:
        return None
    return _shuffled_question(
        f'Which of the following best describes "{keyword}" based on the notes?',
        relevant,
        [
            f"{keyword} is not discussed in these notes",
            f"{keyword} is briefly mentioned without detail",
            f"{keyword} is the main topic of the entire document",
        ],
        f"This is the information provided about {keyword} in the notes.",
        rng,
    )


def _generic_question(keywords: List[str]) -> QuizQuestion:
    return QuizQuestion(
        question=GENERIC_QUESTION,
        options=(keywords[0] if keywords else "Main topic",) + GENERIC_DISTRACTORS,
        correct_answer_index=0,
        explanation=GENERIC_EXPLANATION,
    )


def generate_quiz(text: str, rng: Optional[RandomSource] = None) -> List[QuizQuestion]:
    """Build three to five multiple-choice questions from the notes.

    Questions are anchored on sentences spread across the document. When too
    few anchors carry a keyword, a definition question about the most
    frequent keyword is added, then generic topic questions fill the rest.
    Empty text gives an empty list.
    """
    if not text or not text.strip():
        return []
    rng = rng or random.SystemRandom()

    sentences = [s.text for s in split_into_sentences(text)]
    keywords = extract_keywords(text)

    quiz = _anchor_questions(sentences, keywords, rng)

    if len(keywords) >= 2 and len(quiz) < MIN_QUESTIONS:
        definition = _definition_question(sentences, keywords[0], rng)
        if definition is not None:
            quiz.append(definition)

    while len(quiz) < MIN_QUESTIONS:
        quiz.append(_generic_question(keywords))

    return quiz[:MAX_QUESTIONS]
