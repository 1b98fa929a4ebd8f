import os
from pathlib import Path

class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'a-very-secret-key')
    WORKSPACE_ROOT = Path(__file__).parent.parent
    SERVERS_DIR = Path(os.environ.get('PORTAL_SERVERS_DIR', WORKSPACE_ROOT / "servers"))
    README_PREVIEW_BYTES = int(os.environ.get('PORTAL_README_PREVIEW_BYTES', 300))
    PORT = int(os.environ.get('PORT', 8080))

class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False

class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = True
    TESTING = True

class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False

config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
}
