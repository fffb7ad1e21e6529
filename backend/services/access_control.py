"""
Access Control Gate

Resolves the caller of every operation from its credential and checks the
caller's role, and for owner-scoped reads, store ownership. The gate only
reads; it never changes state.
"""

from typing import Callable, Iterable, Optional
import logging

from sqlalchemy.orm import Session

from constants import AuthMessages
from domain.entities import IdentityContext
from domain.value_objects import Role
from exceptions import Forbidden, MissingCredential
from repositories.store_repository import StoreRepository
from services.token_service import TokenService

logger = logging.getLogger(__name__)

OwnershipCheck = Callable[[IdentityContext], bool]


class AccessControl:
    """
    Authentication and authorization for a single request.

    Args:
        token_service: Verifies credentials
        db: Session used by ownership predicates (optional when none are built)
    """

    def __init__(self, token_service: TokenService, db: Optional[Session] = None):
        self.token_service = token_service
        self.db = db

    def authenticate(self, credential: Optional[str]) -> IdentityContext:
        """
        Resolve the caller from a credential.

        Args:
            credential: Raw token, or None when the request carried none

        Returns:
            IdentityContext for the caller

        Raises:
            MissingCredential: If no credential was supplied
            ExpiredCredential: If the credential has expired
            InvalidSignature: If the credential cannot be verified
        """
        if credential is None or not credential.strip():
            raise MissingCredential()

        claims = self.token_service.verify(credential.strip())
        return IdentityContext(
            user_id=claims.user_id,
            role=claims.role,
            credential_version=claims.credential_version,
        )

    def authorize(
        self,
        identity: IdentityContext,
        required_roles: Iterable[Role],
        ownership_check: Optional[OwnershipCheck] = None,
    ) -> IdentityContext:
        """
        Check that the caller may perform an operation.

        Args:
            identity: Resolved caller
            required_roles: Roles allowed to perform the operation
            ownership_check: Extra predicate on the caller, e.g. store ownership

        Returns:
            The same identity, for chaining

        Raises:
            Forbidden: If the role is not allowed or the ownership predicate fails
        """
        allowed = {Role(role) for role in required_roles}
        if identity.role not in allowed:
            logger.info(
                f"Denied {identity.role.value} caller {identity.user_id}: "
                f"requires one of {sorted(r.value for r in allowed)}"
            )
            raise Forbidden(AuthMessages.FORBIDDEN, required_roles=sorted(r.value for r in allowed))

        if ownership_check is not None and not ownership_check(identity):
            logger.info(f"Denied caller {identity.user_id}: ownership check failed")
            raise Forbidden("Not your store")

        return identity

    def store_ownership(self, store_id: str) -> OwnershipCheck:
        """
        Build the predicate "caller owns store_id".

        The predicate is False both for someone else's store and for a store
        that does not exist, so a denied caller learns nothing about which
        case applied.

        Args:
            store_id: Store UUID

        Returns:
            Callable taking the caller's identity
        """
        if self.db is None:
            raise RuntimeError("store_ownership requires a database session")
        stores = StoreRepository(self.db)

        def check(identity: IdentityContext) -> bool:
            return stores.is_owned_by(store_id, identity.user_id)

        return check
