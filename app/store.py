"""
Document store for blog posts.

``PostStore`` is the persistence seam of the API: a handful of
single-document operations over the ``posts`` table, each one a single
round trip through the request-scoped SQLAlchemy session. Database
failures are re-raised as ``StoreError`` so routes never see SQLAlchemy
exceptions.
"""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.errors import StoreError
from app.models import BlogPost

logger = logging.getLogger(__name__)

# Fields a caller may set; id and created belong to the store.
MUTABLE_FIELDS = ("title", "content", "author_first_name", "author_last_name")


def _mutable_fields(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if key in MUTABLE_FIELDS}


class PostStore:
    """Single-document operations on the blog post collection."""

    def __init__(self, database=db):
        self.db = database

    @property
    def session(self):
        return self.db.session

    def _fail(self, operation: str, exc: SQLAlchemyError) -> StoreError:
        self.session.rollback()
        logger.error("Store operation '%s' failed: %s", operation, exc)
        return StoreError(f"Store operation '{operation}' failed")

    def insert_many(self, docs: Iterable[dict[str, Any]]) -> list[BlogPost]:
        """Insert several posts in one commit and return them with ids assigned."""
        posts = [BlogPost(**_mutable_fields(doc)) for doc in docs]
        try:
            self.session.add_all(posts)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("insert_many", exc) from exc
        logger.info("Inserted %d posts", len(posts))
        return posts

    def create(self, fields: dict[str, Any]) -> BlogPost:
        """Insert a single post."""
        return self.insert_many([fields])[0]

    def find(self) -> list[BlogPost]:
        """Return every post, oldest first."""
        stmt = select(BlogPost).order_by(BlogPost.created.asc(), BlogPost.id.asc())
        try:
            return list(self.session.scalars(stmt).all())
        except SQLAlchemyError as exc:
            raise self._fail("find", exc) from exc

    def find_by_id(self, post_id: str) -> BlogPost | None:
        """Return the post with the given id, or None."""
        try:
            return self.session.get(BlogPost, post_id)
        except SQLAlchemyError as exc:
            raise self._fail("find_by_id", exc) from exc

    def find_one(self) -> BlogPost | None:
        """Return any one post (the oldest), or None when empty."""
        stmt = select(BlogPost).order_by(BlogPost.created.asc(), BlogPost.id.asc()).limit(1)
        try:
            return self.session.scalars(stmt).first()
        except SQLAlchemyError as exc:
            raise self._fail("find_one", exc) from exc

    def count(self) -> int:
        """Return the number of stored posts."""
        try:
            return self.session.scalar(select(func.count()).select_from(BlogPost))
        except SQLAlchemyError as exc:
            raise self._fail("count", exc) from exc

    def update_by_id(self, post_id: str, fields: dict[str, Any]) -> BlogPost | None:
        """
        Replace the mutable fields of a post.

        Args:
            post_id: Identifier of the post to update.
            fields: New values; keys other than the mutable fields are ignored.

        Returns:
            The updated post, or None if no post has that id.
        """
        try:
            post = self.session.get(BlogPost, post_id)
            if post is None:
                return None
            for key, value in _mutable_fields(fields).items():
                setattr(post, key, value)
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("update_by_id", exc) from exc
        return post

    def delete_by_id(self, post_id: str) -> bool:
        """Delete a post; returns False when there was nothing to delete."""
        try:
            result = self.session.execute(delete(BlogPost).where(BlogPost.id == post_id))
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete_by_id", exc) from exc
        return result.rowcount > 0

    def drop_all(self) -> int:
        """Remove every post and return how many were removed."""
        try:
            result = self.session.execute(delete(BlogPost))
            self.session.commit()
        except SQLAlchemyError as exc:
            raise self._fail("drop_all", exc) from exc
        logger.warning("Deleted %d posts", result.rowcount)
        return result.rowcount
