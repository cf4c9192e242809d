from fastapi import APIRouter, Request

from studynotes.middleware.rate_limit import ai_generation_limit
from studynotes.models import ContentPayload
from studynotes.services.llm import extract_keywords, generate_quiz, summarize_note


router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/summary")
@ai_generation_limit()
def summary(request: Request, payload: ContentPayload):
    return {"summary": summarize_note(payload.content)}


@router.post("/keywords")
@ai_generation_limit()
def keywords(request: Request, payload: ContentPayload):
    return {"keywords": extract_keywords(payload.content)}


@router.post("/quiz")
@ai_generation_limit()
def quiz(request: Request, payload: ContentPayload):
    return {"questions": [q.to_dict() for q in generate_quiz(payload.content)]}
