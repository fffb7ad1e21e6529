from sqlalchemy.orm import sessionmaker

from domain.value_objects import Role
from init_db import init_database
from models import User
from services.password_service import PasswordService


def test_seeds_bootstrap_admin_once(engine):
    init_database(engine, admin_email="boss@example.com", admin_password="Boot@1234")
    init_database(engine, admin_email="boss@example.com", admin_password="Boot@1234")

    with sessionmaker(bind=engine)() as db:
        admins = db.query(User).filter(User.role == Role.ADMIN.value).all()
        assert [a.email for a in admins] == ["boss@example.com"]
        assert PasswordService.verify("Boot@1234", admins[0].password_hash)


def test_existing_admin_skips_seed(engine, make_user):
    make_user(Role.ADMIN, email="already@example.com")

    init_database(engine, admin_email="boss@example.com", admin_password="Boot@1234")

    with sessionmaker(bind=engine)() as db:
        assert db.query(User).filter(User.email == "boss@example.com").count() == 0
