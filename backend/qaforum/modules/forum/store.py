"""
Forum Store - In-memory registry of questions and their replies.
"""

import threading
from dataclasses import dataclass, field

from loguru import logger

from qaforum.models.forum import Question, Reply


class IdSequence:
    """
    Thread-safe, strictly increasing id generator.

    Ids start at ``start`` and are never handed out twice.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """Allocate the next id."""
        with self._lock:
            value = self._next
            self._next += 1
            return value


@dataclass
class _QuestionEntry:
    """Mutable store-side record of a question."""

    id: int
    author: str
    message: str
    replies: list[Reply] = field(default_factory=list)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def snapshot(self) -> Question:
        with self.lock:
            replies = tuple(self.replies)
        return Question(
            id=self.id,
            author=self.author,
            message=self.message,
            replies=replies,
        )


class ForumStore:
    """
    Concurrency-safe registry of questions and replies.

    The store is the only allocator of question and reply ids. Question ids
    and reply ids come from two independent sequences; the reply sequence is
    global across all questions. Every read returns immutable snapshots, so
    callers can never modify a stored reply list.

    Locking:
    - the registry lock guards the id -> question mapping
    - every question has its own lock guarding its reply list, so replies
      to different questions never wait on each other

    Usage:
        store = ForumStore()
        question = store.create_question("John", "Hello")
        reply = store.add_reply(question.id, "Jane", "Hi")
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._questions: dict[int, _QuestionEntry] = {}
        self._registry_lock = threading.Lock()
        self._question_ids = IdSequence()
        self._reply_ids = IdSequence()

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._questions)

    # ==================== Questions ====================

    def create_question(self, author: str, message: str) -> Question:
        """
        Store a new question with an empty reply list.

        Args:
            author: Question author (already validated)
            message: Question text (already validated)

        Returns:
            Stored question with its assigned id
        """
        # Allocation and insertion share the registry lock so readers never
        # observe an allocated id without its entry.
        with self._registry_lock:
            entry = _QuestionEntry(
                id=self._question_ids.next_id(),
                author=author,
                message=message,
            )
            self._questions[entry.id] = entry

        logger.info(f"Question {entry.id} created by {author}")
        return entry.snapshot()

    def list_questions(self) -> list[Question]:
        """Get all questions in creation order."""
        with self._registry_lock:
            entries = list(self._questions.values())
        return [entry.snapshot() for entry in entries]

    def get_question(self, question_id: int) -> Question | None:
        """Get question by ID with all replies appended so far."""
        entry = self._lookup(question_id)
        if entry is None:
            logger.debug(f"Question {question_id} not found")
            return None
        return entry.snapshot()

    # ==================== Replies ====================

    def add_reply(
        self,
        question_id: int,
        author: str,
        message: str,
    ) -> Reply | None:
        """
        Append a reply to a question.

        The reply id sequence only advances when the question exists.

        Args:
            question_id: ID of the question being answered
            author: Reply author (already validated)
            message: Reply text (already validated)

        Returns:
            Stored reply, or None if the question does not exist
        """
        entry = self._lookup(question_id)
        if entry is None:
            logger.debug(f"Reply rejected: question {question_id} not found")
            return None

        # Allocating under the question lock keeps list order equal to id order.
        with entry.lock:
            reply = Reply(
                id=self._reply_ids.next_id(),
                author=author,
                message=message,
                question_id=question_id,
            )
            entry.replies.append(reply)

        logger.info(f"Reply {reply.id} added to question {question_id} by {author}")
        return reply

    def _lookup(self, question_id: int) -> _QuestionEntry | None:
        with self._registry_lock:
            return self._questions.get(question_id)


# Singleton instance
_forum_store: ForumStore | None = None
_forum_store_lock = threading.Lock()


def get_forum_store() -> ForumStore:
    """Get or create the process-wide forum store."""
    global _forum_store
    if _forum_store is None:
        with _forum_store_lock:
            if _forum_store is None:
                _forum_store = ForumStore()
    return _forum_store
