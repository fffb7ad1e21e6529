"""
Token Service

Issues and verifies the signed, time-limited credentials that carry a
caller's user id and role. Verification is stateless: it never touches
storage, and there is no revocation list, so a credential stays valid until
it expires even if the user's role changes in the meantime.
"""

from dataclasses import dataclass
from datetime import timedelta, timezone
import logging

from jose import jwt, JWTError

from config.settings import JWT_ALGORITHM, JWT_SECRET, TOKEN_TTL_HOURS
from domain.value_objects import Role
from exceptions import ExpiredCredential, InvalidSignature
from services.interfaces import IClock, SystemClock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenClaims:
    """Verified content of a credential."""

    user_id: str
    role: Role
    credential_version: int
    expires_at: int


def _epoch_seconds(moment) -> int:
    return int(moment.replace(tzinfo=timezone.utc).timestamp())


class TokenService:
    """
    Signs and verifies HS256 JWT credentials.

    Expiry is evaluated against the injected clock rather than the wall
    clock, so the validity window is deterministic under test.
    """

    def __init__(
        self,
        secret: str = JWT_SECRET,
        ttl: timedelta = timedelta(hours=TOKEN_TTL_HOURS),
        clock: IClock | None = None,
        algorithm: str = JWT_ALGORITHM,
    ):
        self.secret = secret
        self.ttl = ttl
        self.clock = clock or SystemClock()
        self.algorithm = algorithm

    def issue(self, user_id: str, role: Role, credential_version: int = 1) -> str:
        """
        Issue a credential for a user.

        Args:
            user_id: User primary key
            role: Role at issue time
            credential_version: User's current credential version

        Returns:
            Encoded JWT
        """
        issued_at = self.clock.now()
        claims = {
            "sub": user_id,
            "role": Role(role).value,
            "ver": credential_version,
            "iat": _epoch_seconds(issued_at),
            "exp": _epoch_seconds(issued_at + self.ttl),
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a credential and return its claims.

        Args:
            token: Encoded JWT

        Returns:
            TokenClaims

        Raises:
            InvalidSignature: If the token is malformed, tampered with, or has bad claims
            ExpiredCredential: If the token's expiry has passed
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            logger.debug(f"Credential rejected: {e}")
            raise InvalidSignature()

        user_id = payload.get("sub")
        expires_at = payload.get("exp")
        if not user_id or not isinstance(expires_at, int):
            raise InvalidSignature("Credential is missing required claims")

        try:
            role = Role.from_string(payload.get("role"))
        except ValueError:
            raise InvalidSignature("Credential carries an unknown role")

        if _epoch_seconds(self.clock.now()) >= expires_at:
            raise ExpiredCredential()

        return TokenClaims(
            user_id=user_id,
            role=role,
            credential_version=int(payload.get("ver", 1)),
            expires_at=expires_at,
        )
