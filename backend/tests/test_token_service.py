from datetime import timedelta

import pytest
from jose import jwt

from domain.value_objects import Role
from exceptions import ExpiredCredential, InvalidSignature, Unauthenticated
from services.token_service import TokenService


def test_issue_then_verify_returns_claims(token_service):
    token = token_service.issue("user-1", Role.OWNER, credential_version=3)

    claims = token_service.verify(token)

    assert claims.user_id == "user-1"
    assert claims.role is Role.OWNER
    assert claims.credential_version == 3


def test_credential_valid_until_expiry(token_service, clock):
    token = token_service.issue("user-1", Role.NORMAL)

    clock.advance(hours=7, minutes=59)
    assert token_service.verify(token).user_id == "user-1"

    clock.advance(minutes=1)
    with pytest.raises(ExpiredCredential):
        token_service.verify(token)


def test_expired_is_unauthenticated(token_service, clock):
    token = token_service.issue("user-1", Role.ADMIN)
    clock.advance(days=1)

    with pytest.raises(Unauthenticated):
        token_service.verify(token)


def test_token_signed_with_other_secret_rejected(token_service, clock):
    forged = TokenService(secret="not-the-secret", ttl=timedelta(hours=8), clock=clock)
    token = forged.issue("user-1", Role.ADMIN)

    with pytest.raises(InvalidSignature):
        token_service.verify(token)


def test_tampered_payload_rejected(token_service):
    header, payload, signature = token_service.issue("user-1", Role.NORMAL).split(".")
    other_payload = token_service.issue("user-2", Role.ADMIN).split(".")[1]

    with pytest.raises(InvalidSignature):
        token_service.verify(".".join([header, other_payload, signature]))


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_rejected(token_service, token):
    with pytest.raises(InvalidSignature):
        token_service.verify(token)


def test_unknown_role_claim_rejected(token_service):
    token = jwt.encode(
        {"sub": "user-1", "role": "superuser", "ver": 1, "iat": 0, "exp": 4102444800},
        "test-secret",
        algorithm="HS256",
    )

    with pytest.raises(InvalidSignature):
        token_service.verify(token)


def test_missing_subject_rejected(token_service):
    token = jwt.encode({"role": "normal", "exp": 4102444800}, "test-secret", algorithm="HS256")

    with pytest.raises(InvalidSignature):
        token_service.verify(token)
