# photofeed/api/posts/schemas.py
from marshmallow import Schema, fields, validate, pre_load, EXCLUDE

from photofeed.api.users.schemas import UserDisplaySchema


def _strip_fields(data, names):
    if not isinstance(data, dict):
        return data
    return {k: (v.strip() if k in names and isinstance(v, str) else v) for k, v in data.items()}


# --- request schemas ---

class PostCreateSchema(Schema):
    """Body of POST /api/posts/create."""
    class Meta:
        unknown = EXCLUDE

    caption = fields.Str(allow_none=True, load_default=None, validate=validate.Length(max=500))
    image = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Image is required"),
        error_messages={"required": "Image is required", "null": "Image is required"}
    )

    @pre_load
    def strip_image(self, data, **kwargs):
        return _strip_fields(data, {"image"})


class CommentCreateSchema(Schema):
    """Body of POST /api/posts/<post_id>/comment. Whitespace-only text counts as empty."""
    class Meta:
        unknown = EXCLUDE

    text = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Comment cannot be empty"),
        error_messages={"required": "Comment cannot be empty", "null": "Comment cannot be empty"}
    )

    @pre_load
    def strip_text(self, data, **kwargs):
        return _strip_fields(data, {"text"})


# --- response schemas ---

class CommentResponseSchema(Schema):
    comment_id = fields.Str(data_key="id")
    owner = fields.Str(required=True)
    text = fields.Str(required=True)
    created_at = fields.DateTime(data_key="createdAt")


class PostResponseSchema(Schema):
    """A post as stored: owners are plain user ids."""
    post_id = fields.Str(dump_only=True, data_key="id")
    owner = fields.Str(required=True)
    caption = fields.Str(allow_none=True)
    image = fields.Str(required=True)
    likes = fields.List(fields.Str(), required=True)
    comments = fields.List(fields.Nested(CommentResponseSchema), required=True)
    created_at = fields.DateTime(data_key="createdAt")
    updated_at = fields.DateTime(data_key="updatedAt")


class FeedCommentSchema(CommentResponseSchema):
    owner = fields.Nested(UserDisplaySchema, allow_none=True)


class FeedPostSchema(PostResponseSchema):
    """A feed entry: post and comment owners resolved to their display identity."""
    owner = fields.Nested(UserDisplaySchema, allow_none=True)
    comments = fields.List(fields.Nested(FeedCommentSchema), required=True)
