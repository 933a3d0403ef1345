# photofeed/core/config.py

import os


class Config:
    """Settings shared by every environment. Values come from the process environment (.env)."""
    # Signs and verifies the bearer tokens checked on every post route.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
    JWT_ACCESS_TOKEN_EXPIRES_HOURS = int(os.getenv('JWT_ACCESS_TOKEN_EXPIRES_HOURS', 24))

    # Firestore connection: service account key file and (optionally) the project it belongs to.
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')
    FIREBASE_PROJECT_ID = os.getenv('FIREBASE_PROJECT_ID')

    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')


class DevelopmentConfig(Config):
    """Local development: debug mode with auto reload."""
    DEBUG = True


class TestingConfig(Config):
    """pytest runs. Tests inject an in-memory database, so no credentials are needed."""
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = os.getenv('TEST_JWT_SECRET_KEY', 'photofeed-testing-secret-key-0123456789')
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')


class ProductionConfig(Config):
    DEBUG = False


# Maps FLASK_ENV values to config classes; create_app picks one from here.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
