"""Integration tests for the user meta API (banner dismissal)."""

from uuid import uuid4

from src.api.auth_utils import create_nonce
from src.domain.entities import BANNER_DISMISSED_META_KEY, TOUR_HIDDEN_META_KEY


def _rest_headers(user) -> dict[str, str]:
    return {"X-REST-Nonce": create_nonce("wp_rest", str(user.id))}


def test_dismiss_banner(client, manager_user, user_meta_store, login):
    login("manager@example.com")

    resp = client.post(
        f"/api/users/{manager_user.id}",
        json={"meta": {BANNER_DISMISSED_META_KEY: "yes"}},
        headers=_rest_headers(manager_user),
    )

    assert resp.status_code == 200
    assert resp.json()["meta"][BANNER_DISMISSED_META_KEY] == "yes"
    assert user_meta_store.get(str(manager_user.id), BANNER_DISMISSED_META_KEY) == "yes"


def test_missing_rest_nonce_forbidden(client, manager_user, user_meta_store, login):
    login("manager@example.com")

    resp = client.post(
        f"/api/users/{manager_user.id}", json={"meta": {BANNER_DISMISSED_META_KEY: "yes"}}
    )

    assert resp.status_code == 403
    assert user_meta_store.get(str(manager_user.id), BANNER_DISMISSED_META_KEY) is None


def test_rest_nonce_for_other_action_forbidden(client, manager_user, login):
    login("manager@example.com")

    resp = client.post(
        f"/api/users/{manager_user.id}",
        json={"meta": {BANNER_DISMISSED_META_KEY: "yes"}},
        headers={"X-REST-Nonce": create_nonce("store-settings", str(manager_user.id))},
    )

    assert resp.status_code == 403


def test_unregistered_key_rejected(client, manager_user, user_meta_store, login):
    login("manager@example.com")

    resp = client.post(
        f"/api/users/{manager_user.id}",
        json={"meta": {BANNER_DISMISSED_META_KEY: "yes", "favourite_colour": "blue"}},
        headers=_rest_headers(manager_user),
    )

    assert resp.status_code == 400
    errors = resp.json()["detail"]["errors"]
    assert [e["field"] for e in errors] == ["favourite_colour"]
    assert errors[0]["code"] == "unregistered_meta_key"
    # Nothing written when any key is rejected
    assert user_meta_store.get(str(manager_user.id), BANNER_DISMISSED_META_KEY) is None


def test_non_string_value_rejected(client, manager_user, login):
    login("manager@example.com")

    resp = client.post(
        f"/api/users/{manager_user.id}",
        json={"meta": {TOUR_HIDDEN_META_KEY: True}},
        headers=_rest_headers(manager_user),
    )

    assert resp.status_code == 400
    assert resp.json()["detail"]["errors"][0]["code"] == "invalid_meta_value"


def test_customer_has_no_registered_fields(client, customer_user, login):
    login("customer@example.com")

    resp = client.post(
        f"/api/users/{customer_user.id}",
        json={"meta": {BANNER_DISMISSED_META_KEY: "yes"}},
        headers=_rest_headers(customer_user),
    )

    assert resp.status_code == 400


def test_manager_cannot_edit_other_user(client, manager_user, admin_user, login):
    login("manager@example.com")

    resp = client.post(
        f"/api/users/{admin_user.id}",
        json={"meta": {BANNER_DISMISSED_META_KEY: "yes"}},
        headers=_rest_headers(manager_user),
    )

    assert resp.status_code == 403


def test_admin_can_edit_other_user(client, manager_user, admin_user, user_meta_store, login):
    login("admin@example.com")

    resp = client.post(
        f"/api/users/{manager_user.id}",
        json={"meta": {TOUR_HIDDEN_META_KEY: "yes"}},
        headers=_rest_headers(admin_user),
    )

    assert resp.status_code == 200
    assert user_meta_store.get(str(manager_user.id), TOUR_HIDDEN_META_KEY) == "yes"


def test_unknown_user_not_found(client, admin_user, login):
    login("admin@example.com")

    resp = client.post(
        f"/api/users/{uuid4()}",
        json={"meta": {TOUR_HIDDEN_META_KEY: "yes"}},
        headers=_rest_headers(admin_user),
    )

    assert resp.status_code == 404


def test_get_meta(client, manager_user, user_meta_store, login):
    user_meta_store.set(str(manager_user.id), TOUR_HIDDEN_META_KEY, "yes")
    login("manager@example.com")

    resp = client.get(f"/api/users/{manager_user.id}/meta")

    assert resp.status_code == 200
    assert resp.json()["meta"] == {
        TOUR_HIDDEN_META_KEY: "yes",
        BANNER_DISMISSED_META_KEY: None,
    }


def test_get_meta_requires_login(client, manager_user):
    client.cookies.clear()
    assert client.get(f"/api/users/{manager_user.id}/meta").status_code == 401
