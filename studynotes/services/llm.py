from __future__ import annotations

import json
from typing import List, Optional

import structlog
from openai import OpenAI

from studynotes import config
from studynotes.engine.keywords import extract_keywords as local_keywords
from studynotes.engine.quiz import OPTION_COUNT, QuizQuestion, RandomSource
from studynotes.engine.quiz import generate_quiz as local_quiz
from studynotes.engine.summarizer import summarize as local_summary
from studynotes.services.logging import log_performance
from studynotes.services.monitoring import AI_GENERATION_REQUESTS

logger = structlog.get_logger()

EMPTY_NOTE_MESSAGE = "Please add some content to your note before generating a summary."
MAX_REMOTE_KEYWORDS = 15
MAX_REMOTE_QUESTIONS = 5

SYSTEM_SUMMARY = (
    "You are an educational assistant that creates detailed, well-structured summaries of study notes. "
    "Include all key concepts, their relationships, and important details. "
    "Make the summary thorough enough to be useful for review purposes."
)
SYSTEM_KEYWORDS = (
    "You are an educational assistant that identifies key terms and concepts from study notes. "
    "Return only a valid JSON array of strings."
)
SYSTEM_QUIZ = (
    "You are an educational assistant that creates effective multiple-choice quiz questions to test "
    "understanding of study material. Make sure the questions test comprehension, not just memorization. "
    "Include plausible distractors for incorrect options. Return only a valid JSON array."
)


def _get_client() -> OpenAI:
    api_key = config.openai_api_key()
    if not api_key:
        raise RuntimeError("OPENAI_API_KEY not set")
    return OpenAI(api_key=api_key)


def _chat(system: str, prompt: str) -> str:
    client = _get_client().with_options(timeout=config.OPENAI_TIMEOUT)
    rsp = client.chat.completions.create(
        model=config.OPENAI_MODEL,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ],
        temperature=0.2,
    )
    return rsp.choices[0].message.content or ""


def _clean_json_like(content: str) -> str:
    # Strip common code fences ```json ... ``` or ``` ... ```
    text = content.strip()
    if text.startswith("```"):
        first_nl = text.find("\n")
        if first_nl != -1:
            text = text[first_nl + 1 :]
        if text.endswith("```"):
            text = text[:-3]
    # Try to extract first JSON array substring if present
    start = text.find("[")
    end = text.rfind("]")
    if start != -1 and end != -1 and end > start:
        return text[start : end + 1]
    return text


def _count(kind: str, status: str) -> None:
    AI_GENERATION_REQUESTS.labels(type=kind, status=status).inc()


_fallback_summary = log_performance("fallback_summary")(local_summary)
_fallback_keywords = log_performance("fallback_keywords")(local_keywords)
_fallback_quiz = log_performance("fallback_quiz")(local_quiz)


# -------------------- SUMMARY --------------------

def summarize_note(content: str) -> str:
    if not content.strip():
        _count("summary", "empty")
        return EMPTY_NOTE_MESSAGE

    if not config.is_api_available():
        _count("summary", "fallback")
        return _fallback_summary(content)

    try:
        prompt = (
            "Summarize the following study notes in a comprehensive way that captures all the main points, "
            f"key concepts, and important details:\n\n{content}"
        )
        text = _chat(SYSTEM_SUMMARY, prompt).strip()
    except Exception as e:
        logger.warning("remote_summary_failed", error=str(e))
        text = ""
    if not text:
        _count("summary", "fallback")
        return _fallback_summary(content)
    _count("summary", "remote")
    return text


# -------------------- KEYWORDS --------------------

def _keywords_from_remote(data) -> Optional[List[str]]:
    if not isinstance(data, list):
        return None
    keywords = [str(k).strip() for k in data if isinstance(k, (str, int, float)) and str(k).strip()]
    return keywords[:MAX_REMOTE_KEYWORDS]


def extract_keywords(content: str) -> List[str]:
    if not content.strip():
        _count("keywords", "empty")
        return []

    if not config.is_api_available():
        _count("keywords", "fallback")
        return _fallback_keywords(content)

    try:
        prompt = (
            "Extract the most important keywords and concepts from these study notes. "
            f"Return ONLY a JSON array of strings with no explanation:\n\n{content}"
        )
        raw = _chat(SYSTEM_KEYWORDS, prompt)
        keywords = _keywords_from_remote(json.loads(_clean_json_like(raw)))
    except Exception as e:
        logger.warning("remote_keywords_failed", error=str(e))
        keywords = None
    if keywords is None:
        _count("keywords", "fallback")
        return _fallback_keywords(content)
    _count("keywords", "remote")
    return keywords


# -------------------- QUIZ --------------------

def _question_from_remote(item) -> Optional[QuizQuestion]:
    if not isinstance(item, dict):
        return None
    question = str(item.get("question", "")).strip()
    options = item.get("options")
    index = item.get("correctAnswer")
    if index is None:
        index = item.get("correctAnswerIndex")
    if not question or not isinstance(options, list) or len(options) != OPTION_COUNT:
        return None
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < OPTION_COUNT:
        return None
    explanation = item.get("explanation")
    return QuizQuestion(
        question=question,
        options=tuple(str(o) for o in options),
        correct_answer_index=index,
        explanation=str(explanation) if explanation else None,
    )


def _quiz_from_remote(data) -> List[QuizQuestion]:
    if not isinstance(data, list):
        return []
    items = []
    for item in data:
        q = _question_from_remote(item)
        if q is not None:
            items.append(q)
    return items[:MAX_REMOTE_QUESTIONS]


def generate_quiz(content: str, rng: Optional[RandomSource] = None) -> List[QuizQuestion]:
    if not content.strip():
        _count("quiz", "empty")
        return []

    if not config.is_api_available():
        _count("quiz", "fallback")
        return _fallback_quiz(content, rng)

    try:
        prompt = (
            "Generate 5 multiple-choice quiz questions based on these study notes. Each question should have "
            "4 options (A, B, C, D) with only one correct answer. Return ONLY a JSON array of objects with "
            'this structure:\n{"question": "The question text", "options": ["Option A", "Option B", '
            '"Option C", "Option D"], "correctAnswer": 0, "explanation": "Brief explanation of why this '
            f'is correct"}}\n\nStudy notes:\n{content}'
        )
        raw = _chat(SYSTEM_QUIZ, prompt)
        quiz = _quiz_from_remote(json.loads(_clean_json_like(raw)))
    except Exception as e:
        logger.warning("remote_quiz_failed", error=str(e))
        quiz = []
    if not quiz:
        _count("quiz", "fallback")
        return _fallback_quiz(content, rng)
    _count("quiz", "remote")
    return quiz
