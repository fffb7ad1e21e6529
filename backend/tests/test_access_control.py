import pytest

from domain.entities import IdentityContext
from domain.value_objects import Role
from exceptions import ExpiredCredential, Forbidden, InvalidSignature, MissingCredential


@pytest.mark.parametrize("credential", [None, "", "   "])
def test_missing_credential(access_control, credential):
    with pytest.raises(MissingCredential):
        access_control.authenticate(credential)


def test_authenticate_resolves_identity(access_control, token_service):
    token = token_service.issue("user-7", Role.OWNER, credential_version=2)

    identity = access_control.authenticate(token)

    assert identity == IdentityContext(user_id="user-7", role=Role.OWNER, credential_version=2)


def test_authenticate_expired(access_control, token_service, clock):
    token = token_service.issue("user-7", Role.NORMAL)
    clock.advance(hours=9)

    with pytest.raises(ExpiredCredential):
        access_control.authenticate(token)


def test_authenticate_invalid(access_control):
    with pytest.raises(InvalidSignature):
        access_control.authenticate("not-a-token")


def test_authorize_allows_listed_role(access_control):
    identity = IdentityContext(user_id="u", role=Role.ADMIN)

    assert access_control.authorize(identity, [Role.ADMIN, Role.OWNER]) is identity


@pytest.mark.parametrize("role", [Role.NORMAL, Role.OWNER])
def test_authorize_rejects_other_roles(access_control, role):
    identity = IdentityContext(user_id="u", role=role)

    with pytest.raises(Forbidden) as exc_info:
        access_control.authorize(identity, [Role.ADMIN])

    assert exc_info.value.details["required_roles"] == ["admin"]


class TestStoreOwnership:
    def test_owner_of_store_passes(self, access_control, make_user, make_store, identity_of):
        owner = make_user(Role.OWNER)
        store = make_store(owner)

        identity = identity_of(owner)
        access_control.authorize(identity, [Role.OWNER], access_control.store_ownership(store.id))

    def test_other_owners_store_forbidden(self, access_control, make_user, make_store, identity_of):
        owner = make_user(Role.OWNER)
        other = make_user(Role.OWNER)
        store = make_store(other)

        with pytest.raises(Forbidden):
            access_control.authorize(
                identity_of(owner), [Role.OWNER], access_control.store_ownership(store.id)
            )

    def test_nonexistent_store_forbidden_not_not_found(self, access_control, make_user, identity_of):
        owner = make_user(Role.OWNER)

        with pytest.raises(Forbidden):
            access_control.authorize(
                identity_of(owner), [Role.OWNER], access_control.store_ownership("no-such-store")
            )

    def test_unowned_store_forbidden(self, access_control, make_user, make_store, identity_of):
        owner = make_user(Role.OWNER)
        store = make_store(None)

        with pytest.raises(Forbidden):
            access_control.authorize(
                identity_of(owner), [Role.OWNER], access_control.store_ownership(store.id)
            )
