import pytest

from domain.value_objects import Role
from models import Rating


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestAuth:
    def test_signup_login_me(self, client):
        signup = client.post("/api/auth/signup", json={
            "name": "Alexandra Normal Test User",
            "email": "alex@example.com",
            "address": "3 High Street",
            "password": "Passw0rd!",
        })
        assert signup.status_code == 201
        assert signup.json()["role"] == "normal"
        assert "password_hash" not in signup.json()

        login = client.post("/api/auth/login", json={"email": "alex@example.com", "password": "Passw0rd!"})
        assert login.status_code == 200
        token = login.json()["token"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["user_id"] == signup.json()["id"]
        assert me.json()["role"] == "normal"

    def test_duplicate_email_conflicts(self, client, make_user):
        user = make_user(Role.NORMAL)

        response = client.post("/api/auth/signup", json={
            "name": "Someone Else Entirely Here",
            "email": user.email,
            "password": "Passw0rd!",
        })

        assert response.status_code == 409

    def test_short_name_rejected(self, client):
        response = client.post("/api/auth/signup", json={
            "name": "Too Short",
            "email": "short@example.com",
            "password": "Passw0rd!",
        })

        assert response.status_code == 422

    def test_wrong_password(self, client, make_user):
        user = make_user(Role.NORMAL)

        response = client.post("/api/auth/login", json={"email": user.email, "password": "wrong-one"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    def test_change_password(self, client, make_user, auth_headers, user_password):
        user = make_user(Role.NORMAL)

        response = client.post(
            "/api/auth/change-password",
            json={"old_password": user_password, "new_password": "N3wSecret!"},
            headers=auth_headers(user),
        )
        assert response.status_code == 200

        assert client.post("/api/auth/login", json={"email": user.email, "password": user_password}).status_code == 401
        assert client.post("/api/auth/login", json={"email": user.email, "password": "N3wSecret!"}).status_code == 200

    def test_change_password_wrong_old(self, client, make_user, auth_headers):
        user = make_user(Role.NORMAL)

        response = client.post(
            "/api/auth/change-password",
            json={"old_password": "not-it-at-all", "new_password": "N3wSecret!"},
            headers=auth_headers(user),
        )

        assert response.status_code == 400


class TestGate:
    def test_missing_token(self, client):
        response = client.get("/api/stores")

        assert response.status_code == 401
        assert response.json()["detail"] == "Missing token"

    def test_invalid_token(self, client):
        response = client.get("/api/stores", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_expired_token(self, client, make_user, auth_headers, clock):
        headers = auth_headers(make_user(Role.NORMAL))
        clock.advance(hours=8)

        response = client.get("/api/stores", headers=headers)

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    @pytest.mark.parametrize("role", [Role.NORMAL, Role.OWNER])
    def test_admin_routes_forbidden(self, client, make_user, auth_headers, role):
        response = client.get("/api/admin/summary", headers=auth_headers(make_user(role)))

        assert response.status_code == 403

    def test_admin_summary(self, client, make_user, make_store, auth_headers):
        admin = make_user(Role.ADMIN)
        make_store()

        response = client.get("/api/admin/summary", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json() == {
            "user_count": 1,
            "store_count": 1,
            "rating_count": 0,
            "pending_request_count": 0,
        }


class TestRatings:
    def test_create_then_update(self, client, make_user, make_store, auth_headers, clock, db_session):
        headers = auth_headers(make_user(Role.NORMAL))
        store = make_store()

        first = client.post(f"/api/stores/{store.id}/rating", json={"rating": 3}, headers=headers)
        assert first.status_code == 201
        assert first.json()["created"] is True

        clock.advance(seconds=30)
        second = client.post(f"/api/stores/{store.id}/rating", json={"rating": 5}, headers=headers)
        assert second.status_code == 200
        assert second.json()["created"] is False
        assert second.json()["id"] == first.json()["id"]
        assert second.json()["created_at"] == first.json()["created_at"]

        assert db_session.query(Rating).count() == 1

    @pytest.mark.parametrize("value", [0, 6])
    def test_out_of_range(self, client, make_user, make_store, auth_headers, value, db_session):
        store = make_store()

        response = client.post(
            f"/api/stores/{store.id}/rating", json={"rating": value}, headers=auth_headers(make_user())
        )

        assert response.status_code == 400
        assert db_session.query(Rating).count() == 0

    def test_unknown_store(self, client, make_user, auth_headers):
        response = client.post("/api/stores/nope/rating", json={"rating": 3}, headers=auth_headers(make_user()))

        assert response.status_code == 404

    def test_store_listing(self, client, make_user, make_store, auth_headers):
        me = make_user()
        store = make_store(name="Corner Shop")
        client.post(f"/api/stores/{store.id}/rating", json={"rating": 4}, headers=auth_headers(me))

        response = client.get("/api/stores", headers=auth_headers(me))

        assert response.status_code == 200
        assert response.json() == [{
            "id": store.id,
            "name": "Corner Shop",
            "address": "2 Market Road",
            "avg_rating": 4.0,
            "rating_count": 1,
            "user_rating": 4,
        }]


class TestStoreAggregateCaching:
    def test_etag_revalidation(self, client, make_user, make_store, auth_headers, clock):
        headers = auth_headers(make_user())
        store = make_store()
        client.post(f"/api/stores/{store.id}/rating", json={"rating": 2}, headers=headers)

        first = client.get(f"/api/stores/{store.id}/aggregate", headers=headers)
        assert first.status_code == 200
        assert first.json() == {"store_id": store.id, "avg_rating": 2.0, "rating_count": 1}
        assert first.headers["Cache-Control"] == "private, no-cache"
        etag = first.headers["ETag"]

        cached = client.get(f"/api/stores/{store.id}/aggregate", headers={**headers, "If-None-Match": etag})
        assert cached.status_code == 304

        clock.advance(seconds=1)
        client.post(f"/api/stores/{store.id}/rating", json={"rating": 4}, headers=headers)
        fresh = client.get(f"/api/stores/{store.id}/aggregate", headers={**headers, "If-None-Match": etag})
        assert fresh.status_code == 200
        assert fresh.headers["ETag"] != etag
        assert fresh.json()["avg_rating"] == 4.0

    def test_unknown_store(self, client, make_user, auth_headers):
        response = client.get("/api/stores/nope/aggregate", headers=auth_headers(make_user()))

        assert response.status_code == 404


class TestOwnerViews:
    def test_raters_for_own_store(self, client, make_user, make_store, auth_headers):
        owner = make_user(Role.OWNER)
        store = make_store(owner)
        rater = make_user()
        client.post(f"/api/stores/{store.id}/rating", json={"rating": 5}, headers=auth_headers(rater))

        response = client.get(f"/api/owner/store-raters/{store.id}", headers=auth_headers(owner))

        assert response.status_code == 200
        assert [(r["user_id"], r["rating"]) for r in response.json()] == [(rater.id, 5)]

    def test_raters_for_other_owners_store(self, client, make_user, make_store, auth_headers):
        store = make_store(make_user(Role.OWNER))

        response = client.get(f"/api/owner/store-raters/{store.id}", headers=auth_headers(make_user(Role.OWNER)))

        assert response.status_code == 403

    def test_raters_for_missing_store_is_forbidden(self, client, make_user, auth_headers):
        response = client.get("/api/owner/store-raters/nope", headers=auth_headers(make_user(Role.OWNER)))

        assert response.status_code == 403

    def test_owner_summary(self, client, make_user, make_store, auth_headers):
        owner = make_user(Role.OWNER)
        make_store(owner)

        response = client.get("/api/owner/summary", headers=auth_headers(owner))

        assert response.status_code == 200
        assert response.json()["avg_rating"] == 0.0


class TestOwnerRequestFlow:
    def test_request_approve_and_relogin(self, client, make_user, auth_headers, user_password):
        admin_headers = auth_headers(make_user(Role.ADMIN))
        user = make_user(Role.NORMAL)
        headers = auth_headers(user)

        created = client.post("/api/user/request-owner", headers=headers)
        assert created.status_code == 201
        request_id = created.json()["request"]["id"]
        assert created.json()["request"]["status"] == "pending"

        assert client.post("/api/user/request-owner", headers=headers).status_code == 409

        pending = client.get("/api/admin/owner-requests", headers=admin_headers)
        assert [r["id"] for r in pending.json()] == [request_id]
        assert pending.json()[0]["email"] == user.email

        approved = client.post(f"/api/admin/owner-requests/{request_id}/approve", headers=admin_headers)
        assert approved.status_code == 200
        assert approved.json()["request"]["status"] == "approved"

        again = client.post(f"/api/admin/owner-requests/{request_id}/reject", headers=admin_headers)
        assert again.status_code == 409

        login = client.post("/api/auth/login", json={"email": user.email, "password": user_password})
        assert login.json()["user"]["role"] == "owner"
        owner_headers = {"Authorization": f"Bearer {login.json()['token']}"}
        assert client.get("/api/owner/summary", headers=owner_headers).status_code == 200

    def test_reject_with_reason(self, client, make_user, auth_headers):
        admin_headers = auth_headers(make_user(Role.ADMIN))
        headers = auth_headers(make_user(Role.NORMAL))
        request_id = client.post("/api/user/request-owner", headers=headers).json()["request"]["id"]

        rejected = client.post(
            f"/api/admin/owner-requests/{request_id}/reject",
            json={"reason": "Please add store details"},
            headers=admin_headers,
        )
        assert rejected.status_code == 200
        assert rejected.json()["request"]["reason"] == "Please add store details"

        status = client.get("/api/user/owner-request-status", headers=headers)
        assert status.json()["request"]["status"] == "rejected"
        assert client.post("/api/user/request-owner", headers=headers).status_code == 409

    def test_status_without_request(self, client, make_user, auth_headers):
        response = client.get("/api/user/owner-request-status", headers=auth_headers(make_user()))

        assert response.status_code == 200
        assert response.json()["request"] is None

    def test_unknown_request(self, client, make_user, auth_headers):
        response = client.post(
            "/api/admin/owner-requests/nope/approve", headers=auth_headers(make_user(Role.ADMIN))
        )

        assert response.status_code == 404

    def test_filter_history_by_status(self, client, make_user, auth_headers):
        admin_headers = auth_headers(make_user(Role.ADMIN))
        request_id = client.post(
            "/api/user/request-owner", headers=auth_headers(make_user())
        ).json()["request"]["id"]
        client.post(f"/api/admin/owner-requests/{request_id}/reject", headers=admin_headers)

        rejected = client.get("/api/admin/owner-requests/all?status=rejected", headers=admin_headers)
        approved = client.get("/api/admin/owner-requests/all?status=approved", headers=admin_headers)

        assert [r["id"] for r in rejected.json()] == [request_id]
        assert approved.json() == []


class TestAdminCreate:
    def test_create_owner_and_store(self, client, make_user, auth_headers):
        admin_headers = auth_headers(make_user(Role.ADMIN))

        owner = client.post("/api/admin/users", json={
            "name": "Owen Owner Created By Admin",
            "email": "owen@example.com",
            "password": "Passw0rd!",
            "role": "owner",
        }, headers=admin_headers)
        assert owner.status_code == 201
        assert owner.json()["role"] == "owner"

        store = client.post("/api/admin/stores", json={
            "name": "Owen's Books",
            "owner_id": owner.json()["id"],
        }, headers=admin_headers)
        assert store.status_code == 201
        assert store.json()["owner_id"] == owner.json()["id"]

        aggregate = client.get(f"/api/admin/owners/{owner.json()['id']}/aggregate", headers=admin_headers)
        assert aggregate.status_code == 200
        assert aggregate.json()["avg_rating"] == 0.0

    def test_store_owner_must_be_owner(self, client, make_user, auth_headers):
        admin_headers = auth_headers(make_user(Role.ADMIN))
        normal = make_user(Role.NORMAL)

        response = client.post("/api/admin/stores", json={"name": "Nope", "owner_id": normal.id}, headers=admin_headers)

        assert response.status_code == 400
