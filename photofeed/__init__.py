# photofeed/__init__.py

# =====================================================================================
# 1. Environment variables (loaded first so config classes see them)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. Module imports
# =====================================================================================
import os
import logging
from datetime import timedelta
from flask import Flask, jsonify
from flask_cors import CORS
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials, firestore

# - config
from photofeed.core.config import config_by_name
from photofeed.core.exceptions import ApiError
from photofeed.core.security import TokenVerifier

# - API blueprints
from photofeed.api.auth.routes import auth_bp
from photofeed.api.posts.routes import posts_bp

# - stores
from photofeed.api.users.services import UserStore
from photofeed.api.posts.services import PostStore


def _open_firestore(app: Flask):
    """Initializes firebase_admin once per process and returns a Firestore client."""
    if not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase credentials file not found: {cred_path}")
        cred = credentials.Certificate(cred_path)
        options = {}
        if app.config.get('FIREBASE_PROJECT_ID'):
            options['projectId'] = app.config['FIREBASE_PROJECT_ID']
        firebase_admin.initialize_app(cred, options)
    return firestore.client()


def create_app(config_name=None, db=None):
    """
    Flask application factory.

    :param config_name: key of `config_by_name`; defaults to FLASK_ENV or 'development'
    :param db: Firestore client (or a compatible object). Opened from the configured
        credentials when omitted.
    """
    # =====================================================================================
    # 3. Flask app and base config
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    CORS(app, origins=app.config['CORS_ORIGINS'])

    # =====================================================================================
    # 4. Database
    # =====================================================================================
    if db is None:
        try:
            db = _open_firestore(app)
            logging.info("Firestore client initialized successfully")
        except Exception as e:
            logging.error(f"Failed to initialize Firestore: {e}")
            raise

    # =====================================================================================
    # 5. Services stored on 'app.services' (dependency injection)
    # =====================================================================================
    app.services = {}

    app.services['auth'] = TokenVerifier(
        secret_key=app.config['JWT_SECRET_KEY'],
        algorithm=app.config['JWT_ALGORITHM'],
        expires_delta=timedelta(hours=app.config['JWT_ACCESS_TOKEN_EXPIRES_HOURS'])
    )
    app.services['users'] = UserStore(db)
    app.services['posts'] = PostStore(db, user_store=app.services['users'])

    # =====================================================================================
    # 6. Blueprints
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(posts_bp, url_prefix='/api/posts')

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok"}), 200

    # =====================================================================================
    # 7. Global error handlers
    # =====================================================================================
    @app.errorhandler(ApiError)
    def handle_api_error(err):
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 404/405 and other HTTP errors keep their own status.
        if isinstance(err, HTTPException):
            return err
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "Server error", "error": str(err)}
        return jsonify(response), 500

    # =====================================================================================
    # 8. Logging
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
