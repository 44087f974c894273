"""Configuration module for Flask application."""
import os
from decimal import Decimal
from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '1') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    TESTING = False
    JSON_SORT_KEYS = False

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Database - Support multiple environment variable naming conventions
    # Priority: DATABASE_URL > DB_* > POSTGRES_*
    DATABASE_URL = os.getenv('DATABASE_URL')

    if not DATABASE_URL:
        # Try DB_* variables (Docker style)
        DB_HOST = os.getenv('DB_HOST') or os.getenv('POSTGRES_HOST', 'localhost')
        DB_PORT = os.getenv('DB_PORT') or os.getenv('POSTGRES_PORT', '5432')
        DB_NAME = os.getenv('DB_NAME') or os.getenv('POSTGRES_DB', 'supermarket')
        DB_USER = os.getenv('DB_USER') or os.getenv('POSTGRES_USER', 'supermarket')
        DB_PASSWORD = os.getenv('DB_PASSWORD') or os.getenv('POSTGRES_PASSWORD', 'supermarket')

        DATABASE_URL = (
            f"postgresql://{DB_USER}:{DB_PASSWORD}"
            f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
        )

    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', '0') == '1'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,  # Enable connection health checks
        'pool_size': int(os.getenv('DB_POOL_SIZE', '10')),
        'max_overflow': int(os.getenv('DB_MAX_OVERFLOW', '20')),
    }

    # Checkout
    TAX_RATE = Decimal(os.getenv('TAX_RATE', '0.08'))
    # 'discount-aware' or 'trigger-equivalent'
    CHECKOUT_STRATEGY = os.getenv('CHECKOUT_STRATEGY', 'discount-aware')
    ORDER_NUMBER_PREFIX = os.getenv('ORDER_NUMBER_PREFIX', 'ORD')

    # Reporting
    RECENT_ORDERS_LIMIT = int(os.getenv('RECENT_ORDERS_LIMIT', '10'))

    # Error tracking (production only)
    SENTRY_DSN = os.getenv('SENTRY_DSN')


class TestConfig(Config):
    """In-memory SQLite configuration used by the test-suite."""

    TESTING = True
    DEBUG = False
    ENV = 'testing'
    SENTRY_DSN = None

    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ECHO = False
    # A single shared connection so every session sees the same in-memory database
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False},
        'poolclass': StaticPool,
    }

    TAX_RATE = Decimal('0.08')
    CHECKOUT_STRATEGY = 'discount-aware'
