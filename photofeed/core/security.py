import logging
import jwt
from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Optional
from flask import Blueprint, request, jsonify, g, current_app

from photofeed.core.exceptions import AuthenticationError

ALGORITHM = "HS256"


class TokenVerifier:
    """
    Issues and checks the bearer tokens used by the API.
    The payload carries the user id in the `id` claim.
    """
    def __init__(self, secret_key: str, algorithm: str = ALGORITHM, expires_delta: timedelta = timedelta(hours=24)):
        if not secret_key:
            raise ValueError("JWT secret key is not configured.")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, user_id: str) -> str:
        issued_at = datetime.now(timezone.utc)
        payload = {"id": user_id, "iat": issued_at, "exp": issued_at + self.expires_delta}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, auth_header: Optional[str]) -> str:
        """
        Validates an `Authorization` header value and returns the user id inside it.

        :raises AuthenticationError: "no token" when the header is missing or not `Bearer <token>`,
            "invalid token" on a bad signature, an expired token or a payload without `id`.
        """
        if not auth_header:
            raise AuthenticationError("no token")

        scheme, _, token = auth_header.partition(" ")
        token = token.strip()
        if scheme != "Bearer" or not token:
            raise AuthenticationError("no token")

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.InvalidTokenError as e:
            # ExpiredSignatureError is a subclass and lands here as well.
            raise AuthenticationError("invalid token") from e

        user_id = payload.get("id")
        if not user_id:
            raise AuthenticationError("invalid token")
        return str(user_id)


def _authenticate():
    """Runs the registered verifier against the current request and stores the identity on `g.user_id`."""
    verifier = current_app.services['auth']
    try:
        g.user_id = verifier.verify(request.headers.get("Authorization"))
    except AuthenticationError as e:
        logging.warning(f"Rejected unauthenticated request to {request.path}: {e.message}")
        return jsonify(e.to_dict()), 401
    return None


def require_auth(blueprint: Blueprint) -> Blueprint:
    """Authenticates every request dispatched to `blueprint` before its view runs."""
    @blueprint.before_request
    def authenticate_request():
        # CORS preflight carries no credentials.
        if request.method == "OPTIONS":
            return None
        return _authenticate()

    return blueprint


def auth_required(f):
    """Per-view variant of `require_auth` for blueprints that mix public and private routes."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        rejection = _authenticate()
        if rejection is not None:
            return rejection
        return f(*args, **kwargs)

    return decorated_function
