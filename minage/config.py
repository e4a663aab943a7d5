# minage/config.py
"""Configuration for the minimum password age service"""
import os
import secrets


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or secrets.token_hex(32)

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///minage.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Realm created on first start; new realms copy MIN_PASSWORD_AGE
    DEFAULT_REALM = os.environ.get('DEFAULT_REALM', 'master')
    MIN_PASSWORD_AGE = os.environ.get('MIN_PASSWORD_AGE', '0')

    # Password handling
    PASSWORD_MIN_LENGTH = 8
    PASSWORD_HISTORY_COUNT = 5
    BCRYPT_ROUNDS = 12

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Optional administrator created on first start
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = 'DEBUG'


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    DEBUG = True
    SECRET_KEY = 'testing-secret-key'

    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    MIN_PASSWORD_AGE = '0'

    # Faster hashing for tests
    BCRYPT_ROUNDS = 4


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
