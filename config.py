"""
Configuration Module for the Account & Session Service

This module manages all configuration parameters.
CRITICAL: Load all secrets from environment variables in production.
"""

import os
from datetime import timedelta


class SecurityConfig:
    """
    Central configuration class for accounts and session handling.
    All security-critical parameters are defined here with secure defaults.

    An instance is built once at process start (see get_config) and passed
    explicitly to the services that need it.
    """

    # ==================== CRYPTOGRAPHIC SETTINGS ====================

    # CRITICAL: Load from environment variables - NEVER hardcode in production
    JWT_SECRET_KEY = os.getenv('JWT_SECRET', 'CHANGE_IN_PRODUCTION_USE_ENV_VAR')
    JWT_ALGORITHM = 'HS256'

    # Argon2id parameters - memory-hard KDF resistant to GPU attacks
    ARGON2_TIME_COST = 3  # Number of iterations
    ARGON2_MEMORY_COST = 65536  # 64 MB memory usage
    ARGON2_PARALLELISM = 4  # Number of parallel threads
    ARGON2_HASH_LENGTH = 32  # Output hash length in bytes
    ARGON2_SALT_LENGTH = 16  # Salt length in bytes

    # ==================== PASSWORD POLICY ====================

    PASSWORD_MIN_LENGTH = 6

    # ==================== SESSION TOKEN ====================

    # Signed token lifetime; the cookie carrying it lives exactly as long
    TOKEN_LIFETIME = timedelta(days=1)

    # ==================== COOKIE SECURITY ====================

    COOKIE_NAME = 'token'
    COOKIE_SECURE = True  # HTTPS only
    COOKIE_HTTPONLY = True  # Prevent JavaScript access (XSS protection)
    COOKIE_SAMESITE = 'None'  # Frontend is served from another origin
    COOKIE_PATH = '/'
    COOKIE_MAX_AGE = int(TOKEN_LIFETIME.total_seconds())

    # ==================== DATABASE SETTINGS ====================

    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///accounts.db')
    DATABASE_ECHO = False  # Set True to see SQL statements

    # ==================== LOGGING ====================

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class DevelopmentConfig(SecurityConfig):
    """Development configuration - verbose, local database"""
    DATABASE_ECHO = True
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')


class ProductionConfig(SecurityConfig):
    """Production configuration - the secure defaults of SecurityConfig, unchanged"""


class TestingConfig(SecurityConfig):
    """Testing configuration - in-memory database, cheap hashing"""
    JWT_SECRET_KEY = 'test-secret-key-with-at-least-32-bytes!'
    DATABASE_URL = 'sqlite://'

    # Keep argon2id but make it fast enough for a test suite
    ARGON2_TIME_COST = 1
    ARGON2_MEMORY_COST = 1024
    ARGON2_PARALLELISM = 1


# Configuration selector based on environment
def get_config() -> SecurityConfig:
    """
    Returns appropriate configuration based on environment.
    Default to production for safety.
    """
    env = os.getenv('FLASK_ENV', 'production')
    if env == 'development':
        return DevelopmentConfig()
    if env == 'testing':
        return TestingConfig()
    return ProductionConfig()
