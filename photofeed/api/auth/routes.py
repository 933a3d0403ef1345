# photofeed/api/auth/routes.py

import logging
from flask import Blueprint, request, jsonify, current_app, g
from marshmallow import ValidationError

from photofeed.api.auth.schemas import RegisterSchema, LoginSchema
from photofeed.api.users.schemas import UserResponseSchema
from photofeed.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from photofeed.core.security import auth_required

auth_bp = Blueprint('auth_bp', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    """Creates an account and returns a token for it right away."""
    user_service = current_app.services['users']
    token_service = current_app.services['auth']
    try:
        data = RegisterSchema().load(request.get_json(silent=True) or {})
        user = user_service.create(
            username=data['username'],
            password=data['password'],
            email=data.get('email'),
            profile_picture=data.get('profile_picture', "")
        )
        token = token_service.issue(user['user_id'])
        return jsonify({"token": token, "user": UserResponseSchema().dump(user)}), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ConflictError as e:
        return jsonify(e.to_dict()), 409
    except Exception as e:
        logging.error(f"Error during registration: {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Server error", "error": str(e)}), 500


@auth_bp.route('/login', methods=['POST'])
def login():
    user_service = current_app.services['users']
    token_service = current_app.services['auth']
    try:
        data = LoginSchema().load(request.get_json(silent=True) or {})
        user = user_service.authenticate(data['username'], data['password'])
        token = token_service.issue(user['user_id'])
        return jsonify({"token": token, "user": UserResponseSchema().dump(user)}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except AuthenticationError as e:
        logging.warning(f"Failed login attempt (username: {data['username']})")
        return jsonify(e.to_dict()), 401
    except Exception as e:
        logging.error(f"Error during login: {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Server error", "error": str(e)}), 500


@auth_bp.route('/me', methods=['GET'])
@auth_required
def me():
    """The account behind the presented token."""
    user_service = current_app.services['users']
    try:
        user = user_service.get(g.user_id)
        return jsonify(UserResponseSchema().dump(user)), 200
    except NotFoundError as e:
        return jsonify(e.to_dict()), 404
    except Exception as e:
        logging.error(f"Error while loading current user (user_id: {g.user_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "Server error", "error": str(e)}), 500
