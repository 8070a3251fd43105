"""
Forum Module - Questions and answers.

Features:
- Questions with ordered replies
- Global, never-reused id sequences
- Thread-safe in-memory storage
"""

from qaforum.modules.forum.store import ForumStore, get_forum_store

__all__ = ["ForumStore", "get_forum_store"]
