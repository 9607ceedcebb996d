"""Admin user management, role gating and profile endpoints."""

from sitecms.services.token_service import TokenIssuer
from sitecms.utils.permissions import ADMIN_ROLES, Role, authorize
from tests.conftest import auth_headers, test_settings


def test_authorize_decision():
    assert authorize(ADMIN_ROLES, "admin")
    assert authorize(ADMIN_ROLES, Role.SUPER_ADMIN)
    assert not authorize(ADMIN_ROLES, "user")
    assert not authorize(ADMIN_ROLES, "owner")
    assert not authorize(ADMIN_ROLES, None)


def test_list_users_admin_only(client, seed_users):
    admin_headers = auth_headers(client, "admin@site.com")
    user_headers = auth_headers(client, "user@site.com")

    resp = client.get("/api/admin/users", headers=admin_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["pagination"] == {"page": 1, "pages": 1, "total": 3}
    assert all("password_hash" not in u for u in body["users"])

    forbidden = client.get("/api/admin/users", headers=user_headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["error"].startswith("Access denied. Required roles:")


def test_list_users_filters_and_pagination(client, seed_users):
    headers = auth_headers(client, "admin@site.com")

    admins = client.get("/api/admin/users?role=admin", headers=headers).json()
    assert [u["email"] for u in admins["users"]] == ["admin@site.com"]

    page = client.get("/api/admin/users?limit=2&page=2", headers=headers).json()
    assert page["pagination"] == {"page": 2, "pages": 2, "total": 3}
    assert len(page["users"]) == 1


def test_get_user_not_found(client, seed_users):
    headers = auth_headers(client, "admin@site.com")
    assert client.get("/api/admin/users/999", headers=headers).status_code == 404


def test_toggle_status_twice_restores_state(client, seed_users):
    headers = auth_headers(client, "admin@site.com")
    user_id = seed_users["user"].user_id

    first = client.put(f"/api/admin/users/{user_id}/toggle-status", headers=headers)
    assert first.status_code == 200
    assert first.json()["user"]["is_active"] is False
    assert first.json()["message"] == "User deactivated successfully"

    second = client.put(f"/api/admin/users/{user_id}/toggle-status", headers=headers)
    assert second.json()["user"]["is_active"] is True


def test_toggle_super_admin_forbidden(client, seed_users):
    admin_headers = auth_headers(client, "admin@site.com")
    root_headers = auth_headers(client, "root@site.com")
    super_id = seed_users["super_admin"].user_id

    for headers in (admin_headers, root_headers):
        resp = client.put(f"/api/admin/users/{super_id}/toggle-status", headers=headers)
        assert resp.status_code == 403
        assert resp.json() == {"error": "Cannot modify super-admin status"}


def test_toggle_own_status_rejected(client, seed_users):
    headers = auth_headers(client, "admin@site.com")
    resp = client.put(f"/api/admin/users/{seed_users['admin'].user_id}/toggle-status", headers=headers)
    assert resp.status_code == 400


def test_deactivated_user_token_stops_working(client, seed_users):
    admin_headers = auth_headers(client, "admin@site.com")
    user_headers = auth_headers(client, "user@site.com")
    client.put(f"/api/admin/users/{seed_users['user'].user_id}/toggle-status", headers=admin_headers)

    resp = client.get("/api/auth/me", headers=user_headers)
    assert resp.status_code == 401
    assert resp.json() == {"error": "Account is deactivated."}


def test_role_change_requires_super_admin(client, seed_users):
    admin_headers = auth_headers(client, "admin@site.com")
    root_headers = auth_headers(client, "root@site.com")
    user_id = seed_users["user"].user_id

    forbidden = client.put(f"/api/admin/users/{user_id}/role", headers=admin_headers, json={"role": "admin"})
    assert forbidden.status_code == 403

    ok = client.put(f"/api/admin/users/{user_id}/role", headers=root_headers, json={"role": "admin"})
    assert ok.status_code == 200
    assert ok.json()["user"]["role"] == "admin"

    promoted_headers = auth_headers(client, "user@site.com")
    assert client.get("/api/admin/users", headers=promoted_headers).status_code == 200


def test_role_change_validation(client, seed_users):
    root_headers = auth_headers(client, "root@site.com")
    user_id = seed_users["user"].user_id

    invalid = client.put(f"/api/admin/users/{user_id}/role", headers=root_headers, json={"role": "owner"})
    assert invalid.status_code == 400

    own = client.put(
        f"/api/admin/users/{seed_users['super_admin'].user_id}/role",
        headers=root_headers,
        json={"role": "user"},
    )
    assert own.status_code == 400

    missing = client.put("/api/admin/users/999/role", headers=root_headers, json={"role": "user"})
    assert missing.status_code == 404


def test_user_stats(client, seed_users):
    headers = auth_headers(client, "admin@site.com")
    resp = client.get("/api/admin/stats/users", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"total": 3, "recent": 3}


def test_public_profile_hides_private_fields(client, seed_users):
    resp = client.get(f"/api/users/profile/{seed_users['user'].user_id}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["is_self"] is False
    assert body["user"]["name"] == "Member"
    assert "email" not in body["user"]


def test_public_profile_for_self_shows_account(client, seed_users):
    headers = auth_headers(client, "user@site.com")
    resp = client.get(f"/api/users/profile/{seed_users['user'].user_id}", headers=headers)
    body = resp.json()
    assert body["is_self"] is True
    assert body["user"]["email"] == "user@site.com"


def test_public_profile_of_inactive_user_not_found(client, db, seed_users):
    seed_users["user"].is_active = False
    db.commit()
    resp = client.get(f"/api/users/profile/{seed_users['user'].user_id}")
    assert resp.status_code == 404


def test_my_profile_update(client, seed_users):
    headers = auth_headers(client, "user@site.com")
    resp = client.put(
        "/api/users/me/profile",
        headers=headers,
        json={"preferences": {"newsletter": False}},
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["preferences"]["newsletter"] is False

    me = client.get("/api/users/me/profile", headers=headers)
    assert me.json()["user"]["preferences"]["newsletter"] is False


def test_public_profile_with_garbage_token_is_anonymous(client, seed_users):
    resp = client.get(
        f"/api/users/profile/{seed_users['user'].user_id}",
        headers={"Authorization": "Bearer garbage"},
    )
    assert resp.status_code == 200
    assert resp.json()["is_self"] is False
    assert "email" not in resp.json()["user"]


def test_public_profile_with_expired_token_is_anonymous(client, seed_users):
    expired = TokenIssuer(
        test_settings.SECRET_KEY,
        issuer=test_settings.TOKEN_ISSUER,
        audience=test_settings.TOKEN_AUDIENCE,
        expire_minutes=-1,
    ).issue(seed_users["user"].user_id)

    resp = client.get(
        f"/api/users/profile/{seed_users['user'].user_id}",
        headers={"Authorization": f"Bearer {expired}"},
    )
    assert resp.status_code == 200
    assert resp.json()["is_self"] is False

    # the same token is still rejected where a session is required
    assert client.get("/api/users/me/profile", headers={"Authorization": f"Bearer {expired}"}).status_code == 401
