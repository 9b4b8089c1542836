"""
Database models for the Blog API.

This module defines the SQLAlchemy model for blog posts together with
the functions that map the author between its stored form (first and
last name columns) and its wire form (a single composed string).
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from app import db


def generate_post_id() -> str:
    """Return a new opaque, globally unique post identifier."""
    return uuid.uuid4().hex


def compose_author(first_name: str, last_name: str) -> str:
    """Join the stored name parts into the wire representation."""
    return f"{first_name} {last_name}".strip()


def parse_author(value: Any) -> tuple[str, str]:
    """
    Resolve a wire author value into a (first_name, last_name) pair.

    Accepts either a mapping with ``firstName`` and ``lastName`` or a
    composed string. Strings are split on the first run of whitespace,
    so ``"Mary Ann Evans"`` becomes ``("Mary", "Ann Evans")``.

    Args:
        value: Author as received in the request body.

    Returns:
        Tuple of first and last name, both non-empty.

    Raises:
        ValueError: If the value cannot be resolved into both parts.
    """
    if isinstance(value, dict):
        first_name = value.get("firstName")
        last_name = value.get("lastName")
        if not isinstance(first_name, str) or not first_name.strip():
            raise ValueError("'author.firstName' is required")
        if not isinstance(last_name, str) or not last_name.strip():
            raise ValueError("'author.lastName' is required")
        return first_name.strip(), last_name.strip()

    if isinstance(value, str):
        parts = value.split(None, 1)
        if len(parts) != 2:
            raise ValueError("'author' must contain a first and last name")
        return parts[0], parts[1].strip()

    raise ValueError("'author' is required")


class BlogPost(db.Model):
    """
    Blog post document.

    Attributes:
        id: Store-generated identifier, immutable after creation.
        title: Post title.
        content: Post body.
        author_first_name: First part of the author's name.
        author_last_name: Last part of the author's name.
        created: Timestamp set once when the post is inserted.
    """

    __tablename__ = "posts"

    id: str = db.Column(db.String(32), primary_key=True, default=generate_post_id)
    title: str = db.Column(db.Text, nullable=False)
    content: str = db.Column(db.Text, nullable=False)
    author_first_name: str = db.Column(db.String(100), nullable=False)
    author_last_name: str = db.Column(db.String(100), nullable=False)
    created: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    @property
    def author(self) -> str:
        """Author name as exposed on the wire."""
        return compose_author(self.author_first_name, self.author_last_name)

    @staticmethod
    def _to_utc_iso(value: datetime | None) -> str | None:
        """
        Convert datetime to an ISO-8601 UTC string.

        SQLite returns naive datetime values even when timezone-aware
        columns are declared, so naive values are treated as UTC.
        """
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.isoformat()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the post to its wire representation.

        Returns:
            Dictionary with exactly id, title, content, author and created.
        """
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "created": self._to_utc_iso(self.created),
        }

    def __repr__(self) -> str:
        """Return string representation of the post."""
        return f"<BlogPost {self.id}: {self.title}>"
