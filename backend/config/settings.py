"""
Runtime Configuration

Reads deployment settings from environment variables once at import time.

Includes:
- Data directory and database URL
- Credential signing secret and validity window
- Bootstrap admin account used by init_db
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = 'dev_secret'


def get_data_dir() -> Path:
    """
    Resolve the directory holding the SQLite database and log files.

    Returns:
        Path from RATINGS_DATA_DIR, or ~/.ratings_platform when unset
    """
    configured = os.environ.get('RATINGS_DATA_DIR')
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".ratings_platform"


def get_database_url() -> str:
    """Get the SQLAlchemy URL, defaulting to a SQLite file in the data directory."""
    url = os.environ.get('DATABASE_URL')
    if url:
        return url
    return f"sqlite:///{DATA_DIR / 'ratings.db'}"


def get_jwt_secret() -> str:
    """
    Get the HMAC secret used to sign credentials.

    Logs a warning when the development default is in use.
    """
    secret = os.environ.get('JWT_SECRET', DEFAULT_JWT_SECRET)
    if secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET not set - using development secret")
    return secret


def get_token_ttl_hours() -> int:
    """
    Get the credential validity window in hours.

    Raises:
        ValueError: If TOKEN_TTL_HOURS is not a positive integer
    """
    raw = os.environ.get('TOKEN_TTL_HOURS', '8')
    try:
        hours = int(raw)
    except ValueError:
        raise ValueError(f"TOKEN_TTL_HOURS must be an integer, got: {raw!r}")
    if hours <= 0:
        raise ValueError(f"TOKEN_TTL_HOURS must be positive, got: {hours}")
    return hours


DATA_DIR = get_data_dir()
DATABASE_URL = get_database_url()
JWT_SECRET = get_jwt_secret()
JWT_ALGORITHM = 'HS256'
TOKEN_TTL_HOURS = get_token_ttl_hours()

BOOTSTRAP_ADMIN_EMAIL = os.environ.get('BOOTSTRAP_ADMIN_EMAIL', 'admin@example.com')
BOOTSTRAP_ADMIN_PASSWORD = os.environ.get('BOOTSTRAP_ADMIN_PASSWORD', 'Admin@123')
