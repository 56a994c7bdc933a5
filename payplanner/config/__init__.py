"""
Configuration package
"""

import os
from .settings import ConfigurationManager

# Global configuration instance
config_manager = ConfigurationManager()

def load_config(app, config_name='development', overrides=None):
    """Load configuration into Flask app"""

    # Detect if running on Render
    if os.environ.get('RENDER') and config_name != 'testing':
        config_name = 'production'

    basedir = os.path.abspath(os.path.dirname(__file__))

    shared = {
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'LOG_LEVEL': os.getenv('LOG_LEVEL', 'INFO'),
        'CORS_ORIGINS': os.getenv('CORS_ORIGINS', '*'),
        'DADATA_API_KEY': os.getenv('DADATA_API_KEY'),
        'DADATA_BASE_URL': os.getenv(
            'DADATA_BASE_URL', config_manager.get_app_config('DADATA_DEFAULT_BASE_URL')),
        'DADATA_TIMEOUT_SECONDS': float(os.getenv(
            'DADATA_TIMEOUT_SECONDS', config_manager.get_app_config('DADATA_DEFAULT_TIMEOUT_SECONDS'))),
    }

    configs = {
        'development': {
            'DEBUG': True,
            'SQLALCHEMY_DATABASE_URI': _get_dev_database_url(basedir),
            'SECRET_KEY': os.getenv('SECRET_KEY', 'dev-secret-key'),
        },
        'testing': {
            'TESTING': True,
            'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
            'SECRET_KEY': 'test-secret-key',
            'DADATA_API_KEY': None,
            'LOG_LEVEL': 'DEBUG',
        },
        'production': {
            'DEBUG': False,
            'SQLALCHEMY_DATABASE_URI': _get_production_database_url(basedir),
            'SECRET_KEY': os.getenv('SECRET_KEY'),
            'SQLALCHEMY_ENGINE_OPTIONS': {
                'pool_pre_ping': True,
                'pool_recycle': 300,
            }
        }
    }

    app.config.update(shared)
    app.config.update(configs.get(config_name, configs['development']))
    if overrides:
        app.config.update(overrides)
    app.logger.info("Loaded %s configuration", config_name)

def _get_dev_database_url(basedir):
    """Get development database URL"""
    database_url = os.getenv('DATABASE_URL')
    if database_url:
        return _normalize_database_url(database_url)

    db_path = os.path.join(basedir, "..", "..", "instance", "payplanner.db")
    os.makedirs(os.path.dirname(db_path), exist_ok=True)
    return f"sqlite:///{db_path}"

def _get_production_database_url(basedir):
    """Get production database URL with fallback"""
    database_url = os.getenv('DATABASE_URL')

    if database_url:
        return _normalize_database_url(database_url)

    # Fallback to SQLite for production if no PostgreSQL available
    db_path = os.path.join(basedir, "..", "..", "instance", "payplanner.db")
    os.makedirs(os.path.dirname(db_path), exist_ok=True)
    return f"sqlite:///{db_path}"

def _normalize_database_url(database_url):
    # Render provides postgres:// but SQLAlchemy 1.4+ requires postgresql://
    if database_url.startswith('postgres://'):
        database_url = database_url.replace('postgres://', 'postgresql://', 1)
    return database_url

__all__ = ['config_manager', 'ConfigurationManager', 'load_config']
