"""
Account Service

Sign-up, login, password change, and the administrative create paths for
users and stores. Roles are only ever assigned here (administrative create
or the fixed normal role at sign-up) and in the owner-request workflow.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.entities import IdentityContext
from domain.value_objects import Role
from dtos.internal import LoginResult
from exceptions import ConflictError, InvalidLogin, NotFoundError, ValidationError
from models import Store, User
from repositories.store_repository import StoreRepository
from repositories.user_repository import UserRepository
from services.access_control import AccessControl
from services.interfaces import IClock, SystemClock
from services.password_service import PasswordService
from services.token_service import TokenService
from utils.logging_utils import StructuredLogger, log_operation

logger = StructuredLogger(__name__)


class AccountService:
    """
    User and store creation plus credential issuance.

    Args:
        db: Database session for this request
        token_service: Issues credentials at login
        access_control: Gate for the admin-only create paths
        clock: Time source
    """

    def __init__(
        self,
        db: Session,
        token_service: TokenService,
        access_control: AccessControl,
        clock: IClock | None = None,
    ):
        self.db = db
        self.token_service = token_service
        self.access_control = access_control
        self.clock = clock or SystemClock()
        self.users = UserRepository(db)
        self.stores = StoreRepository(db)

    def _insert_user(self, name: str, email: str, password: str, address: Optional[str], role: Role) -> User:
        now = self.clock.now()
        user = User(
            name=name,
            email=email,
            address=address or '',
            password_hash=PasswordService.hash(password),
            role=role.value,
            credential_version=1,
            created_at=now,
            updated_at=now,
        )
        try:
            self.users.create(user)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already registered", {"email": email})
        self.db.refresh(user)
        return user

    @log_operation("signup")
    def signup(self, name: str, email: str, password: str, address: Optional[str] = None) -> User:
        """
        Register a new account. Self-registered accounts are always normal users.

        Raises:
            ConflictError: If the email is already registered
        """
        user = self._insert_user(name, email, password, address, Role.NORMAL)
        logger.info("User signed up", extra={"user_id": user.id})
        return user

    @log_operation("login")
    def login(self, email: str, password: str) -> LoginResult:
        """
        Check an email/password pair and issue a credential.

        Raises:
            InvalidLogin: If the email is unknown or the password is wrong
        """
        user = self.users.get_by_email(email)
        if user is None or not PasswordService.verify(password, user.password_hash):
            raise InvalidLogin()

        token = self.token_service.issue(user.id, Role(user.role), user.credential_version)
        return LoginResult(token=token, user=user)

    @log_operation("change_password")
    def change_password(self, identity: IdentityContext, old_password: str, new_password: str) -> User:
        """
        Replace the caller's password after checking the old one.

        Credentials issued before the change remain valid until they expire.

        Raises:
            NotFoundError: If the caller's account no longer exists
            ValidationError: If old_password is wrong
        """
        user = self.users.get_by_id(identity.user_id)
        if user is None:
            raise NotFoundError("User", identity.user_id)
        if not PasswordService.verify(old_password, user.password_hash):
            raise ValidationError("Old password incorrect")

        self.users.set_password_hash(user, PasswordService.hash(new_password), self.clock.now())
        self.db.commit()
        return user

    @log_operation("create_user")
    def create_user(
        self,
        identity: IdentityContext,
        name: str,
        email: str,
        password: str,
        role: Role,
        address: Optional[str] = None,
    ) -> User:
        """
        Administrative account creation with an explicit role.

        Raises:
            Forbidden: If the caller is not an admin
            ConflictError: If the email is already registered
        """
        self.access_control.authorize(identity, [Role.ADMIN])
        user = self._insert_user(name, email, password, address, Role(role))
        logger.info("User created by admin", extra={"user_id": user.id, "admin_id": identity.user_id})
        return user

    @log_operation("create_store")
    def create_store(
        self,
        identity: IdentityContext,
        name: str,
        email: Optional[str] = None,
        address: Optional[str] = None,
        owner_id: Optional[str] = None,
    ) -> Store:
        """
        Administrative store creation.

        Raises:
            Forbidden: If the caller is not an admin
            ValidationError: If owner_id is given but is not a store owner
        """
        self.access_control.authorize(identity, [Role.ADMIN])

        if owner_id:
            owner = self.users.get_by_id(owner_id)
            if owner is None or owner.role != Role.OWNER.value:
                raise ValidationError(
                    "owner_id must be a valid store owner",
                    invalid_fields={"owner_id": owner_id},
                )

        store = Store(
            name=name,
            email=email,
            address=address or '',
            owner_id=owner_id or None,
            created_at=self.clock.now(),
        )
        self.stores.create(store)
        self.db.commit()
        self.db.refresh(store)
        logger.info("Store created", extra={"store_id": store.id, "owner_id": owner_id})
        return store
