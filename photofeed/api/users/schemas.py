# photofeed/api/users/schemas.py
from marshmallow import Schema, fields


class UserDisplaySchema(Schema):
    """
    The public identity of a post or comment owner in the feed.
    Only what the feed displays: no email, no password hash.
    """
    user_id = fields.Str(required=True, data_key="id")
    username = fields.Str(required=True)
    profile_picture = fields.Str(allow_none=True, data_key="profilePicture")


class UserResponseSchema(Schema):
    """The caller's own account, returned by the auth endpoints."""
    user_id = fields.Str(required=True, data_key="id")
    username = fields.Str(required=True)
    email = fields.Str(allow_none=True)
    profile_picture = fields.Str(allow_none=True, data_key="profilePicture")
    created_at = fields.DateTime(data_key="createdAt")
