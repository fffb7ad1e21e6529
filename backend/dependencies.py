"""
Dependency injection providers for FastAPI.

This module provides factory functions for the clock, the token service, the
access control gate and the core services. Tests swap implementations with
app.dependency_overrides (e.g. a fixed clock instead of SystemClock).
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from database import get_db
from domain.entities import IdentityContext
from domain.value_objects import Role
from exceptions import ApplicationError
from services.access_control import AccessControl
from services.account_service import AccountService
from services.aggregate_queries import AggregateQueries
from services.interfaces import IClock, SystemClock
from services.owner_request_workflow import OwnerRequestWorkflow
from services.rating_ledger import RatingLedger
from services.token_service import TokenService
from utils.error_handlers import to_http_exception
from utils.logging_utils import set_logging_context

bearer_scheme = HTTPBearer(auto_error=False)

_system_clock = SystemClock()


def get_clock() -> IClock:
    """
    Factory function for the time source.

    Returns:
        IClock: Process-wide SystemClock
    """
    return _system_clock


def get_token_service(clock: IClock = Depends(get_clock)) -> TokenService:
    """
    Factory function for creating TokenService instances.

    Args:
        clock: Time source (injected)

    Returns:
        TokenService configured from config.settings
    """
    return TokenService(clock=clock)


def get_access_control(
    token_service: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db),
) -> AccessControl:
    return AccessControl(token_service, db)


async def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    access_control: AccessControl = Depends(get_access_control),
) -> IdentityContext:
    """
    Resolve the caller from the Authorization header.

    Raises:
        HTTPException: 401 when the credential is missing, expired or invalid
    """
    credential = credentials.credentials if credentials else None
    try:
        identity = access_control.authenticate(credential)
    except ApplicationError as e:
        raise to_http_exception(e, "Authentication")
    set_logging_context(user_id=identity.user_id, role=identity.role.value)
    return identity


def require_roles(*roles: Role):
    """
    Build a dependency that admits only callers holding one of roles.

    Example:
        @router.get("/admin/summary")
        def summary(identity: IdentityContext = Depends(require_roles(Role.ADMIN))):
            ...
    """
    def role_dependency(
        identity: IdentityContext = Depends(get_identity),
        access_control: AccessControl = Depends(get_access_control),
    ) -> IdentityContext:
        try:
            return access_control.authorize(identity, roles)
        except ApplicationError as e:
            raise to_http_exception(e, "Authorization")

    return role_dependency


def get_rating_ledger(
    db: Session = Depends(get_db),
    clock: IClock = Depends(get_clock),
) -> RatingLedger:
    return RatingLedger(db, clock)


def get_owner_request_workflow(
    db: Session = Depends(get_db),
    access_control: AccessControl = Depends(get_access_control),
    clock: IClock = Depends(get_clock),
) -> OwnerRequestWorkflow:
    return OwnerRequestWorkflow(db, access_control, clock)


def get_aggregate_queries(
    db: Session = Depends(get_db),
    access_control: AccessControl = Depends(get_access_control),
) -> AggregateQueries:
    return AggregateQueries(db, access_control)


def get_account_service(
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    access_control: AccessControl = Depends(get_access_control),
    clock: IClock = Depends(get_clock),
) -> AccountService:
    return AccountService(db, token_service, access_control, clock)
