"""
Owner-Request Workflow

State machine for promoting a normal user to store owner:

    (no record) --request--> pending --approve--> approved
                                     \\-reject---> rejected

A user gets one request record for the lifetime of the account. approved
and rejected are terminal; a rejected user cannot ask again and there is no
administrative reset.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from constants import OwnerRequestDefaults
from domain.entities import IdentityContext
from domain.value_objects import Decision, OwnerRequestStatus, Role
from exceptions import DuplicateRequestError, NotFoundError, NotPendingError
from models import OwnerRequest
from repositories.owner_request_repository import OwnerRequestRepository
from repositories.user_repository import UserRepository
from services.access_control import AccessControl
from services.interfaces import IClock, SystemClock
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)


class OwnerRequestWorkflow:
    """
    Creates and decides owner requests.

    Args:
        db: Database session for this request
        access_control: Gate used for the role guards
        clock: Time source for created_at/updated_at
    """

    def __init__(self, db: Session, access_control: AccessControl, clock: IClock | None = None):
        self.db = db
        self.access_control = access_control
        self.clock = clock or SystemClock()
        self.requests = OwnerRequestRepository(db)
        self.users = UserRepository(db)

    @log_operation("request_owner_upgrade")
    def request_owner_upgrade(self, identity: IdentityContext) -> OwnerRequest:
        """
        Open a pending owner request for the caller.

        Args:
            identity: Requesting user; must hold the normal role

        Returns:
            The new pending OwnerRequest

        Raises:
            Forbidden: If the caller is not a normal user
            DuplicateRequestError: If the caller already has a request in any status
            NotFoundError: If the caller's user record no longer exists
        """
        self.access_control.authorize(identity, [Role.NORMAL])

        now = self.clock.now()
        request = OwnerRequest(
            user_id=identity.user_id,
            status=OwnerRequestStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        try:
            self.requests.create(request)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            existing = self.requests.get_by_user(identity.user_id)
            if existing is None:
                # Not the unique index: the requesting account is gone.
                raise NotFoundError("User", identity.user_id)
            raise DuplicateRequestError(identity.user_id, existing.status)

        self.db.refresh(request)
        logger.info("Owner request opened", extra={"user_id": identity.user_id, "request_id": request.id})
        return request

    @log_operation("decide_owner_request")
    def decide_owner_request(
        self,
        identity: IdentityContext,
        request_id: str,
        decision: Decision,
        reason: Optional[str] = None,
    ) -> OwnerRequest:
        """
        Approve or reject a pending owner request.

        The status change is a conditional UPDATE guarded on status = pending.
        Approval promotes the requester to owner in the same transaction.

        Args:
            identity: Deciding admin
            request_id: Request UUID
            decision: approve or reject
            reason: Rejection reason; a default is stored when omitted or blank

        Returns:
            The updated OwnerRequest

        Raises:
            Forbidden: If the caller is not an admin
            NotFoundError: If the request does not exist
            NotPendingError: If the request has already been decided
        """
        self.access_control.authorize(identity, [Role.ADMIN])
        decision = Decision(decision)
        target = decision.target_status

        request = self.requests.get_by_id(request_id)
        if request is None:
            raise NotFoundError("Owner request", request_id)

        current = OwnerRequestStatus.from_string(request.status)
        if not current.can_transition_to(target):
            raise NotPendingError(request_id, current.value)

        stored_reason = None
        if decision is Decision.REJECT:
            stored_reason = (reason or "").strip() or OwnerRequestDefaults.REJECTION_REASON

        now = self.clock.now()
        try:
            changed = self.requests.transition(
                request_id, OwnerRequestStatus.PENDING, target, now, reason=stored_reason
            )
            if changed == 0:
                # Another admin decided it between our read and this update.
                self.db.rollback()
                latest = self.requests.get_by_id(request_id)
                raise NotPendingError(request_id, latest.status if latest else current.value)

            if decision is Decision.APPROVE:
                self.users.set_role(request.user_id, Role.OWNER, now)

            self.db.commit()
        except NotPendingError:
            raise
        except Exception:
            self.db.rollback()
            raise

        self.db.expire_all()
        decided = self.requests.get_with_user(request_id)
        logger.info(
            f"Owner request {target.value}",
            extra={"request_id": request_id, "user_id": decided.user_id, "admin_id": identity.user_id},
        )
        return decided

    def approve(self, identity: IdentityContext, request_id: str) -> OwnerRequest:
        return self.decide_owner_request(identity, request_id, Decision.APPROVE)

    def reject(self, identity: IdentityContext, request_id: str, reason: Optional[str] = None) -> OwnerRequest:
        return self.decide_owner_request(identity, request_id, Decision.REJECT, reason)

    def get_own_request(self, identity: IdentityContext) -> Optional[OwnerRequest]:
        """
        The caller's own owner request, or None if they never asked.

        Raises:
            Forbidden: If the caller is not a normal user
        """
        self.access_control.authorize(identity, [Role.NORMAL])
        return self.requests.get_by_user(identity.user_id)
