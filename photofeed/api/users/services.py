# photofeed/api/users/services.py
import logging
import uuid
from dataclasses import asdict
from typing import Any, Dict, Iterable, Optional

from google.api_core.exceptions import GoogleAPIError
from werkzeug.security import generate_password_hash, check_password_hash

from photofeed.core.exceptions import AuthenticationError, ConflictError, NotFoundError, StoreError
from photofeed.models.user import User
from photofeed.utils.datetime_utils import DateTimeUtils


class UserStore:
    """
    Persists user accounts in the 'users' collection and resolves the
    display identity (username, profile picture) shown next to posts and comments.
    """
    def __init__(self, db):
        self.db = db
        self.users_ref = db.collection('users')

    def create(self, username: str, password: str, email: Optional[str] = None, profile_picture: str = "") -> Dict[str, Any]:
        """Registers a new account. Usernames are unique."""
        try:
            existing = next(self.users_ref.where('username', '==', username).limit(1).stream(), None)
            if existing:
                raise ConflictError("Username is already taken")

            new_user = User(
                user_id=str(uuid.uuid4()),
                username=username,
                password_hash=generate_password_hash(password),
                email=email,
                profile_picture=profile_picture or ""
            )
            user_data = DateTimeUtils.for_firestore(asdict(new_user))
            self.users_ref.document(new_user.user_id).set(user_data)
            logging.info(f"User created (user_id: {new_user.user_id})")
            return user_data
        except GoogleAPIError as e:
            logging.error(f"User creation failed (username: {username}): {e}", exc_info=True)
            raise StoreError(str(e)) from e

    def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        try:
            user_doc = next(self.users_ref.where('username', '==', username).limit(1).stream(), None)
        except GoogleAPIError as e:
            logging.error(f"User lookup failed (username: {username}): {e}", exc_info=True)
            raise StoreError(str(e)) from e

        if not user_doc:
            raise AuthenticationError("invalid credentials")
        user_data = user_doc.to_dict()
        if not check_password_hash(user_data.get('password_hash', ''), password):
            raise AuthenticationError("invalid credentials")
        return DateTimeUtils.from_firestore(user_data)

    def get(self, user_id: str) -> Dict[str, Any]:
        try:
            user_doc = self.users_ref.document(user_id).get()
        except GoogleAPIError as e:
            logging.error(f"User lookup failed (user_id: {user_id}): {e}", exc_info=True)
            raise StoreError(str(e)) from e

        if not user_doc.exists:
            raise NotFoundError("User not found")
        return DateTimeUtils.from_firestore(user_doc.to_dict())

    def get_display_identities(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """
        Batch-resolves user ids to `{user_id, username, profile_picture}`.
        Ids without a user document are left out of the result.
        """
        unique_ids = sorted({uid for uid in user_ids if uid})
        if not unique_ids:
            return {}

        try:
            snapshots = self.db.get_all([self.users_ref.document(uid) for uid in unique_ids])
            identities = {}
            for snapshot in snapshots:
                if not snapshot.exists:
                    continue
                user_data = snapshot.to_dict()
                identities[snapshot.id] = {
                    "user_id": snapshot.id,
                    "username": user_data.get("username"),
                    "profile_picture": user_data.get("profile_picture", "")
                }
            return identities
        except GoogleAPIError as e:
            logging.error(f"Display identity lookup failed ({len(unique_ids)} users): {e}", exc_info=True)
            raise StoreError(str(e)) from e
