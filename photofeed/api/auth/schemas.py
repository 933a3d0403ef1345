# photofeed/api/auth/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE


class RegisterSchema(Schema):
    """Body of POST /api/auth/register."""
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(
        required=True,
        validate=[
            validate.Length(min=3, max=30),
            validate.Regexp(r'^[A-Za-z0-9_.]+$', error="Only letters, digits, '_' and '.' are allowed.")
        ]
    )
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=6, max=128))
    email = fields.Email(allow_none=True, load_default=None)
    profile_picture = fields.Str(load_default="", data_key="profilePicture")


class LoginSchema(Schema):
    """Body of POST /api/auth/login."""
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True)
    password = fields.Str(required=True, load_only=True)
