from database import engine as default_engine, Base, SessionLocal
from models import User, utcnow
from config.settings import BOOTSTRAP_ADMIN_EMAIL, BOOTSTRAP_ADMIN_PASSWORD
from domain.value_objects import Role
from repositories.user_repository import UserRepository
from services.password_service import PasswordService
from sqlalchemy.orm import sessionmaker
import logging

logger = logging.getLogger(__name__)

BOOTSTRAP_ADMIN_NAME = "Platform Administrator Account"


def _seed_admin(db, email: str, password: str) -> bool:
    """Create the bootstrap admin unless an admin already exists"""
    users = UserRepository(db)
    if users.has_role(Role.ADMIN):
        logger.debug("Admin account present - skipping bootstrap")
        return False
    if users.get_by_email(email) is not None:
        logger.warning(f"Bootstrap email {email} belongs to a non-admin account - not seeding")
        return False

    now = utcnow()
    users.create(User(
        name=BOOTSTRAP_ADMIN_NAME,
        email=email,
        address='',
        password_hash=PasswordService.hash(password),
        role=Role.ADMIN.value,
        credential_version=1,
        created_at=now,
        updated_at=now,
    ))
    db.commit()
    logger.info(f"✅ Bootstrap admin created: {email}")
    return True


def init_database(engine=None, admin_email: str = BOOTSTRAP_ADMIN_EMAIL,
                  admin_password: str = BOOTSTRAP_ADMIN_PASSWORD):
    """Create all tables and seed the bootstrap admin"""
    engine = engine or default_engine
    Base.metadata.create_all(bind=engine)

    session_factory = SessionLocal if engine is default_engine else sessionmaker(bind=engine)
    db = session_factory()
    try:
        _seed_admin(db, admin_email, admin_password)
        logger.info("✅ Database initialized successfully")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_database()
