# photofeed/api/posts/validators.py
"""
Request body checks for the post routes. They run before any store call, so a
rejected request never touches the database.
"""
from typing import Any, Dict

from marshmallow import ValidationError as SchemaValidationError

from photofeed.api.posts.schemas import PostCreateSchema, CommentCreateSchema
from photofeed.core.exceptions import ValidationError


def _first_message(messages: Any, field: str, fallback: str) -> str:
    if isinstance(messages, dict) and messages.get(field):
        return messages[field][0]
    return fallback


def validate_post_payload(payload: Any) -> Dict[str, Any]:
    """Returns `{"image", "caption"}` or raises ValidationError."""
    try:
        return PostCreateSchema().load(payload if payload is not None else {})
    except SchemaValidationError as err:
        message = _first_message(err.messages, "image", "Invalid post payload")
        raise ValidationError(message, details=err.messages) from err


def validate_comment_payload(payload: Any) -> Dict[str, Any]:
    """Returns `{"text"}` with surrounding whitespace removed, or raises ValidationError."""
    try:
        return CommentCreateSchema().load(payload if payload is not None else {})
    except SchemaValidationError as err:
        message = _first_message(err.messages, "text", "Invalid comment payload")
        raise ValidationError(message, details=err.messages) from err
