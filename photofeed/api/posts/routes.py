# photofeed/api/posts/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app, g

from photofeed.api.posts.schemas import PostResponseSchema, FeedPostSchema, CommentResponseSchema
from photofeed.api.posts.validators import validate_post_payload, validate_comment_payload
from photofeed.core.exceptions import ValidationError, NotFoundError
from photofeed.core.security import require_auth

posts_bp = require_auth(Blueprint('posts_bp', __name__))


def _server_error(e: Exception):
    return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Server error", "error": str(e)}), 500


@posts_bp.route('/create', methods=['POST'])
def create_post():
    """Creates a post owned by the caller. `image` is required, `caption` is optional."""
    post_service = current_app.services['posts']
    try:
        data = validate_post_payload(request.get_json(silent=True))
        new_post = post_service.create(g.user_id, image=data['image'], caption=data.get('caption'))
        return jsonify({"message": "Post created", "post": PostResponseSchema().dump(new_post)}), 201
    except ValidationError as e:
        return jsonify(e.to_dict()), 400
    except Exception as e:
        logging.error(f"Error while creating post (user_id: {g.user_id}): {e}", exc_info=True)
        return _server_error(e)


@posts_bp.route('/feed', methods=['GET'])
def get_feed():
    post_service = current_app.services['posts']
    try:
        posts = post_service.list_feed()
        return jsonify(FeedPostSchema(many=True).dump(posts)), 200
    except Exception as e:
        logging.error(f"Error while loading feed: {e}", exc_info=True)
        return _server_error(e)


@posts_bp.route('/<string:post_id>/like', methods=['POST'])
def toggle_like(post_id: str):
    """Likes the post, or takes the like back when the caller already liked it."""
    post_service = current_app.services['posts']
    try:
        like_count = post_service.toggle_like(post_id, g.user_id)
        return jsonify({"message": "Post updated", "likes": like_count}), 200
    except NotFoundError as e:
        return jsonify(e.to_dict()), 404
    except Exception as e:
        logging.error(f"Error while toggling like (post_id: {post_id}): {e}", exc_info=True)
        return _server_error(e)


@posts_bp.route('/<string:post_id>/comment', methods=['POST'])
def add_comment(post_id: str):
    post_service = current_app.services['posts']
    try:
        data = validate_comment_payload(request.get_json(silent=True))
        comments = post_service.add_comment(post_id, g.user_id, data['text'])
        return jsonify({"message": "Comment added", "comments": CommentResponseSchema(many=True).dump(comments)}), 200
    except ValidationError as e:
        return jsonify(e.to_dict()), 400
    except NotFoundError as e:
        return jsonify(e.to_dict()), 404
    except Exception as e:
        logging.error(f"Error while adding comment (post_id: {post_id}): {e}", exc_info=True)
        return _server_error(e)
