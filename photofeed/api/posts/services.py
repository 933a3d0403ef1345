# photofeed/api/posts/services.py
import logging
import uuid
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import GoogleAPIError

from photofeed.api.users.services import UserStore
from photofeed.core.exceptions import NotFoundError, StoreError, ValidationError
from photofeed.models.comment import Comment
from photofeed.models.post import Post
from photofeed.utils.datetime_utils import DateTimeUtils

CAPTION_MAX_LENGTH = 500


class PostStore:
    """
    Post persistence and the feed.

    Likes and comments are updated with fetch-then-save on the whole document.
    There is no transaction around it: two concurrent writers on the same post
    can overwrite each other (last write wins).
    """
    def __init__(self, db, user_store: UserStore, clock: Callable = DateTimeUtils.now):
        self.db = db
        self.posts_ref = db.collection('posts')
        self.user_store = user_store
        self.clock = clock

    def create(self, owner: str, image: Optional[str], caption: Optional[str] = None) -> Dict[str, Any]:
        """Stores a new post with no likes and no comments, and returns it."""
        if not isinstance(image, str) or not image.strip():
            raise ValidationError("Image is required")
        if caption is not None and len(caption) > CAPTION_MAX_LENGTH:
            raise ValidationError(f"Caption must be at most {CAPTION_MAX_LENGTH} characters")

        created_at = self.clock()
        new_post = Post(
            post_id=str(uuid.uuid4()),
            owner=owner,
            image=image,
            caption=caption,
            created_at=created_at,
            updated_at=created_at
        )
        post_data = DateTimeUtils.for_firestore(asdict(new_post))
        try:
            self.posts_ref.document(new_post.post_id).set(post_data)
        except GoogleAPIError as e:
            logging.error(f"Post creation failed (owner: {owner}): {e}", exc_info=True)
            raise StoreError(str(e)) from e

        logging.info(f"Post created (post_id: {new_post.post_id}, owner: {owner})")
        return post_data

    def get(self, post_id: str) -> Dict[str, Any]:
        try:
            doc = self.posts_ref.document(post_id).get()
        except GoogleAPIError as e:
            logging.error(f"Post lookup failed (post_id: {post_id}): {e}", exc_info=True)
            raise StoreError(str(e)) from e

        if not doc.exists:
            raise NotFoundError("Post not found")
        post_data = DateTimeUtils.from_firestore(doc.to_dict())
        post_data['post_id'] = doc.id
        return post_data

    def list_feed(self) -> List[Dict[str, Any]]:
        """
        Every post, newest first, with post and comment owners resolved to
        `{user_id, username, profile_picture}` (None for deleted users). Not paginated.
        """
        try:
            query = self.posts_ref.order_by("created_at", direction=firestore.Query.DESCENDING)
            posts = []
            for doc in query.stream():
                post_data = DateTimeUtils.from_firestore(doc.to_dict())
                post_data['post_id'] = doc.id
                posts.append(post_data)
        except GoogleAPIError as e:
            logging.error(f"Feed query failed: {e}", exc_info=True)
            raise StoreError(str(e)) from e

        owner_ids = {post.get('owner') for post in posts}
        owner_ids.update(c.get('owner') for post in posts for c in post.get('comments', []))
        identities = self.user_store.get_display_identities(owner_ids)

        for post in posts:
            post['owner'] = identities.get(post.get('owner'))
            for comment in post.setdefault('comments', []):
                comment['owner'] = identities.get(comment.get('owner'))
            post.setdefault('likes', [])
        return posts

    def toggle_like(self, post_id: str, user_id: str) -> int:
        """Likes the post, or unlikes it if `user_id` already liked it. Returns the new like count."""
        post_data = self.get(post_id)
        likes = post_data.get('likes', [])

        if user_id in likes:
            likes = [uid for uid in likes if uid != user_id]
        else:
            likes.append(user_id)

        post_data['likes'] = likes
        self._save(post_data)
        return len(likes)

    def add_comment(self, post_id: str, user_id: str, text: str) -> List[Dict[str, Any]]:
        """Appends a comment and returns the post's full comment list in insertion order."""
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Comment cannot be empty")

        post_data = self.get(post_id)
        new_comment = Comment(
            comment_id=str(uuid.uuid4()),
            owner=user_id,
            text=text.strip(),
            created_at=self.clock()
        )
        post_data.setdefault('comments', []).append(asdict(new_comment))
        self._save(post_data)
        return post_data['comments']

    def _save(self, post_data: Dict[str, Any]) -> None:
        post_data['updated_at'] = self.clock()
        try:
            self.posts_ref.document(post_data['post_id']).set(DateTimeUtils.for_firestore(post_data))
        except GoogleAPIError as e:
            logging.error(f"Post save failed (post_id: {post_data['post_id']}): {e}", exc_info=True)
            raise StoreError(str(e)) from e
