"""
REST API endpoints for blog posts.

This module maps HTTP verbs onto single document-store operations.
All endpoints speak JSON; update and delete answer with an empty body.

Endpoints:
    GET    /health        - Health check
    GET    /posts         - List all posts
    GET    /posts/<id>    - Get a single post by ID
    POST   /posts         - Create a new post
    PUT    /posts/<id>    - Replace an existing post
    DELETE /posts/<id>    - Delete a post (idempotent)
"""

import logging
import os
from typing import Any

from flask import Blueprint, Response, jsonify, request, url_for

from app.errors import NotFoundError, ValidationError
from app.models import parse_author
from app.store import PostStore

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

store = PostStore()


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def get_json_body() -> dict[str, Any]:
    """
    Return the request body as a JSON object.

    Raises:
        ValidationError: If the body is missing, malformed or not an object.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def validate_post_data(data: dict[str, Any]) -> dict[str, str]:
    """
    Validate a post payload and convert it to stored fields.

    Args:
        data: Dictionary containing title, content and author.

    Returns:
        Dictionary of store fields (title, content, author name parts).

    Raises:
        ValidationError: If a required field is missing or invalid.
    """
    for field in ("title", "content"):
        value = data.get(field)
        # Check if field exists and has non-whitespace content
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f"'{field}' is required")

    try:
        first_name, last_name = parse_author(data.get("author"))
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    return {
        "title": data["title"],
        "content": data["content"],
        "author_first_name": first_name,
        "author_last_name": last_name,
    }


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({
        "status": "healthy",
        "service": "posts",
        "environment": os.getenv("ENVIRONMENT", "unknown"),
    }), 200


@api_bp.route("/posts", methods=["GET"])
def get_posts() -> tuple[Response, int]:
    """
    List all blog posts.

    Returns:
        JSON array of every post and 200 status code.
    """
    logger.info("GET /posts - Fetching all posts")

    posts = store.find()
    logger.info("Found %d posts", len(posts))

    return jsonify([post.to_dict() for post in posts]), 200


@api_bp.route("/posts/<post_id>", methods=["GET"])
def get_post(post_id: str) -> tuple[Response, int]:
    """
    Get a single post by ID.

    Args:
        post_id: The unique identifier of the post.

    Returns:
        JSON response with the post and 200 status code.

    Raises:
        NotFoundError: If no post has that ID.
    """
    logger.info("GET /posts/%s - Fetching post", post_id)

    post = store.find_by_id(post_id)
    if post is None:
        raise NotFoundError()

    return jsonify(post.to_dict()), 200


@api_bp.route("/posts", methods=["POST"])
def create_post() -> tuple[Response, int, dict[str, str]]:
    """
    Create a new blog post.

    Request Body (JSON):
        title: Post title (required)
        content: Post body (required)
        author: "First Last" or {"firstName": ..., "lastName": ...} (required)

    Any other keys, including id and created, are ignored.

    Returns:
        JSON response with the created post and 201 status code.
    """
    logger.info("POST /posts - Creating new post")

    fields = validate_post_data(get_json_body())
    post = store.create(fields)

    logger.info("Created post with ID: %s", post.id)
    location = url_for("api.get_post", post_id=post.id)
    return jsonify(post.to_dict()), 201, {"Location": location}


@api_bp.route("/posts/<post_id>", methods=["PUT"])
def update_post(post_id: str) -> tuple[str, int]:
    """
    Replace the title, content and author of an existing post.

    Args:
        post_id: The unique identifier of the post.

    Request Body (JSON):
        id: Optional; must equal post_id when present
        title: Post title (required)
        content: Post body (required)
        author: Post author (required)

    Returns:
        Empty response with 204 status code.

    Raises:
        ValidationError: On invalid body or mismatched IDs.
        NotFoundError: If no post has that ID.
    """
    logger.info("PUT /posts/%s - Updating post", post_id)

    data = get_json_body()
    if "id" in data and data["id"] != post_id:
        raise ValidationError(
            f"Request path id ({post_id}) and request body id ({data['id']}) must match"
        )

    fields = validate_post_data(data)
    post = store.update_by_id(post_id, fields)
    if post is None:
        raise NotFoundError()

    logger.info("Updated post %s", post_id)
    return "", 204


@api_bp.route("/posts/<post_id>", methods=["DELETE"])
def delete_post(post_id: str) -> tuple[str, int]:
    """
    Delete a post.

    Deleting a post that does not exist is not an error.

    Args:
        post_id: The unique identifier of the post.

    Returns:
        Empty response with 204 status code.
    """
    logger.info("DELETE /posts/%s - Deleting post", post_id)

    if store.delete_by_id(post_id):
        logger.info("Deleted post %s", post_id)
    else:
        logger.info("Post %s already absent", post_id)

    return "", 204
