"""
Application Configuration

Centralizes Flask, database, logging and costing settings.
"""

import logging
import os

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'costing.db'))
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

    # Restaurant used when a request does not name one (auth lives upstream)
    DEFAULT_RESTAURANT_ID = int(os.environ.get('DEFAULT_RESTAURANT_ID', '1'))
    DEFAULT_CURRENCY = os.environ.get('DEFAULT_CURRENCY', 'IQD')

    # Live supplier catalog; empty means read the local supplier_product table
    SUPPLIER_CATALOG_URL = os.environ.get('SUPPLIER_CATALOG_URL', '')
    SUPPLIER_CATALOG_TIMEOUT = float(os.environ.get('SUPPLIER_CATALOG_TIMEOUT', '10'))
    SUPPLIER_CATALOG_RETRIES = int(os.environ.get('SUPPLIER_CATALOG_RETRIES', '2'))

    # Keyword overrides for conversion and label heuristics, e.g.
    # {'dry_goods': ['rice', 'freekeh'], 'spices': [...]}
    CONVERSION_KEYWORDS = {}

    # Margin bands and zero-cost allow-list; None keeps the built-in defaults
    MARGIN_BANDS = None
    ZERO_COST_ALLOWED = None


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG').upper()


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SUPPLIER_CATALOG_URL = ''


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])


def configure_logging(level='INFO'):
    """Configure root logging once; module loggers inherit it."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
