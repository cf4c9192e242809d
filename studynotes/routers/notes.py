from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
import structlog

from studynotes.db import get_session
from studynotes.middleware.rate_limit import ai_generation_limit
from studynotes.models import Note, NotePayload, as_utc, utcnow
from studynotes.services.llm import extract_keywords, generate_quiz, summarize_note


router = APIRouter(prefix="/api/notes", tags=["notes"])
logger = structlog.get_logger()

_timestamp = TypeAdapter(datetime)


class InvalidNote(ValueError):
    pass


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _note_not_found() -> JSONResponse:
    return _error(404, "Note not found")


def _check_payload(payload: NotePayload, *, creating: bool) -> dict:
    """Validate a note body by hand and return the fields that were sent."""
    if not isinstance(payload.title, str) or not payload.title:
        raise InvalidNote("title")
    if creating:
        if not isinstance(payload.content, str):
            raise InvalidNote("content")
    elif not isinstance(payload.id, str) or not payload.id:
        raise InvalidNote("id")

    fields = {"title": payload.title}
    if payload.id is not None:
        if not isinstance(payload.id, str):
            raise InvalidNote("id")
        fields["id"] = payload.id
    if payload.content is not None:
        if not isinstance(payload.content, str):
            raise InvalidNote("content")
        fields["content"] = payload.content
    if payload.tags is not None:
        if not isinstance(payload.tags, list) or not all(isinstance(t, str) for t in payload.tags):
            raise InvalidNote("tags")
        fields["tags"] = list(payload.tags)
    if payload.createdAt:
        try:
            fields["created_at"] = as_utc(_timestamp.validate_python(payload.createdAt))
        except ValidationError:
            raise InvalidNote("createdAt")
    return fields


@router.get("")
def list_notes(session: Session = Depends(get_session)):
    notes = session.exec(select(Note).order_by(Note.created_at)).all()
    return [n.to_dict() for n in notes]


@router.post("", status_code=201)
def create_note(payload: NotePayload, session: Session = Depends(get_session)):
    try:
        fields = _check_payload(payload, creating=True)
    except InvalidNote as e:
        logger.info("note_rejected", field=str(e))
        return _error(400, "Invalid note data")
    note = Note(**fields)
    session.add(note)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        return _error(409, "Note already exists")
    session.refresh(note)
    logger.info("note_created", note_id=note.id)
    return note.to_dict()


@router.put("")
def update_note(payload: NotePayload, session: Session = Depends(get_session)):
    try:
        fields = _check_payload(payload, creating=False)
    except InvalidNote as e:
        logger.info("note_rejected", field=str(e))
        return _error(400, "Invalid note data")
    note = session.get(Note, fields.pop("id"))
    if not note:
        return _note_not_found()
    for name, value in fields.items():
        setattr(note, name, value)
    note.updated_at = utcnow()
    session.add(note)
    session.commit()
    session.refresh(note)
    logger.info("note_updated", note_id=note.id)
    return note.to_dict()


@router.delete("")
def delete_note(id: Optional[str] = None, session: Session = Depends(get_session)):
    if not id:
        return _error(400, "Note ID is required")
    note = session.get(Note, id)
    if not note:
        return _note_not_found()
    session.delete(note)
    session.commit()
    logger.info("note_deleted", note_id=id)
    return {"success": True}


# ----------------- AI on stored notes -----------------

@router.post("/{note_id}/summary")
@ai_generation_limit()
def note_summary(request: Request, note_id: str, session: Session = Depends(get_session)):
    note = session.get(Note, note_id)
    if not note:
        return _note_not_found()
    return {"note_id": note.id, "summary": summarize_note(note.content)}


@router.post("/{note_id}/keywords")
@ai_generation_limit()
def note_keywords(request: Request, note_id: str, session: Session = Depends(get_session)):
    note = session.get(Note, note_id)
    if not note:
        return _note_not_found()
    return {"note_id": note.id, "keywords": extract_keywords(note.content)}


@router.post("/{note_id}/quiz")
@ai_generation_limit()
def note_quiz(request: Request, note_id: str, session: Session = Depends(get_session)):
    note = session.get(Note, note_id)
    if not note:
        return _note_not_found()
    quiz = generate_quiz(note.content)
    return {"note_id": note.id, "questions": [q.to_dict() for q in quiz]}
