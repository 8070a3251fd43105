"""
Forum models for questions and answers.

Includes:
- Questions (threads)
- Replies (answers to a question)

Both are immutable snapshots handed out by the forum store.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Reply:
    """Reply posted to a question."""

    id: int
    author: str
    message: str
    question_id: int  # Owning question, lookup only

    def __repr__(self) -> str:
        return f"<Reply {self.id} to question {self.question_id}>"


@dataclass(frozen=True)
class Question:
    """Question with the replies it had when the snapshot was taken."""

    id: int
    author: str
    message: str
    replies: tuple[Reply, ...] = ()

    def __repr__(self) -> str:
        return f"<Question {self.id} by {self.author}>"
