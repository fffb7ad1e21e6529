"""
Application-wide constants.

This module centralizes the magic strings and numbers used by the access
control layer, the rating ledger and the owner-request workflow.
"""


class ServerConfig:
    """Server configuration constants"""

    HOST = "0.0.0.0"
    PORT = 4000

    @classmethod
    def url(cls) -> str:
        """Get the full server URL"""
        return f"http://{cls.HOST}:{cls.PORT}"


class RatingBounds:
    """Inclusive bounds for a store rating"""

    MIN = 1
    MAX = 5


class OwnerRequestDefaults:
    """Defaults applied by the owner-request workflow"""

    REJECTION_REASON = "Request rejected by admin"


class AuthMessages:
    """Details returned to callers that fail authentication or authorization"""

    MISSING_TOKEN = "Missing token"
    INVALID_TOKEN = "Invalid token"
    FORBIDDEN = "Forbidden"
    INVALID_CREDENTIALS = "Invalid credentials"


class LogConfig:
    """Rotating log file configuration"""

    FILE_NAME = "backend.log"
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5
    FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    OK = 200
    CREATED = 201
    NOT_MODIFIED = 304

    # Client Errors
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    UNPROCESSABLE_ENTITY = 422

    # Server Errors
    INTERNAL_SERVER_ERROR = 500
