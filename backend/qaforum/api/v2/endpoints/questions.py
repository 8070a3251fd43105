"""
Questions API Endpoints.

Ask questions, browse them and post replies.
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field, field_validator

from qaforum.api.negotiation import require_json_body
from qaforum.core.config import settings
from qaforum.models.forum import Question, Reply
from qaforum.modules.forum.store import ForumStore, get_forum_store

router = APIRouter()


# ==================== Schemas ====================


class ForumPostRequest(BaseModel):
    """Fields shared by questions and replies."""

    author: str = Field(max_length=settings.forum_max_author_length)
    message: str = Field(max_length=settings.forum_max_message_length)

    @field_validator("author")
    @classmethod
    def author_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Author should not be blank")
        return v

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message should not be blank")
        return v


class QuestionCreate(ForumPostRequest):
    """Question to be asked in the forum."""


class ReplyCreate(ForumPostRequest):
    """Reply to a question."""


def _reply_to_dict(reply: Reply) -> dict[str, Any]:
    return {
        "id": reply.id,
        "author": reply.author,
        "message": reply.message,
        "questionId": reply.question_id,
    }


def _question_to_dict(question: Question) -> dict[str, Any]:
    return {
        "id": question.id,
        "author": question.author,
        "message": question.message,
        "replies": [_reply_to_dict(r) for r in question.replies],
    }


# ==================== Questions ====================


@router.post(
    "/questions",
    status_code=201,
    dependencies=[Depends(require_json_body)],
)
async def create_question(
    request: QuestionCreate,
    store: ForumStore = Depends(get_forum_store),
) -> dict[str, Any]:
    """Create a new question."""
    question = store.create_question(
        author=request.author,
        message=request.message,
    )
    return _question_to_dict(question)


@router.get("/questions", response_model=None)
async def get_questions(
    store: ForumStore = Depends(get_forum_store),
) -> list[dict[str, Any]] | Response:
    """
    Get all questions in creation order.

    Returns 204 No Content when nothing has been asked yet.
    """
    questions = store.list_questions()
    if not questions:
        return Response(status_code=204)

    return [_question_to_dict(q) for q in questions]


# Path parameters keep the camelCase name clients see in error reports
@router.get("/questions/{questionId}")
async def get_question(
    questionId: int,
    store: ForumStore = Depends(get_forum_store),
) -> dict[str, Any]:
    """Get question along with all its replies."""
    question = store.get_question(questionId)

    if not question:
        raise HTTPException(status_code=404, detail="Question not found")

    return _question_to_dict(question)


# ==================== Replies ====================


@router.post(
    "/questions/{questionId}/reply",
    status_code=201,
    dependencies=[Depends(require_json_body)],
)
async def reply_to_question(
    questionId: int,
    request: ReplyCreate,
    store: ForumStore = Depends(get_forum_store),
) -> dict[str, Any]:
    """Post a reply to a question."""
    reply = store.add_reply(
        questionId,
        author=request.author,
        message=request.message,
    )

    if not reply:
        raise HTTPException(status_code=404, detail="Question not found")

    return _reply_to_dict(reply)
