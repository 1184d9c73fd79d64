"""Tests for /api/user account settings endpoints"""
from app.core.auth import verify_password
from app.db.mongodb import COLLECTIONS
from app.services.mongo_service import UserService

from conftest import TEST_PASSWORD


def test_settings_require_auth(client):
    assert client.get("/api/user/settings").status_code == 401


def test_get_settings_defaults(client, auth_headers, test_user):
    body = client.get("/api/user/settings", headers=auth_headers).json()
    assert body["profile"] == {
        "userId": test_user, "fullName": "Test User", "email": "test@example.com",
        "skills": None, "interests": None,
    }
    assert body["notifications"]["emailNotifications"] is True
    assert body["notifications"]["marketingEmails"] is False
    assert body["privacy"]["profileVisibility"] == "public"


def test_update_profile(client, auth_headers, test_user):
    r = client.put(
        "/api/user/profile",
        json={"fullName": "Renamed User", "email": "New@Example.com", "skills": "Python, SQL"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["success"] is True

    user = UserService().get_by_id(test_user)
    assert user["full_name"] == "Renamed User"
    assert user["email"] == "new@example.com"
    assert user["profile"]["skills"] == "Python, SQL"


def test_update_profile_email_taken(client, auth_headers, other_user):
    r = client.put(
        "/api/user/profile",
        json={"fullName": "Test User", "email": "other@example.com"},
        headers=auth_headers,
    )
    assert r.status_code == 409


def test_update_profile_validation(client, auth_headers):
    r = client.put("/api/user/profile", json={"fullName": "A", "email": "not-an-email"}, headers=auth_headers)
    assert r.status_code == 400
    assert {e["loc"][-1] for e in r.json()["errors"]} == {"fullName", "email"}


def test_change_password(client, auth_headers, test_user):
    r = client.put(
        "/api/user/password",
        json={"currentPassword": TEST_PASSWORD, "newPassword": "Newpass1@", "confirmNewPassword": "Newpass1@"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert verify_password("Newpass1@", UserService().get_by_id(test_user)["password_hash"])


def test_change_password_wrong_current(client, auth_headers):
    r = client.put(
        "/api/user/password",
        json={"currentPassword": "wrong", "newPassword": "Newpass1@", "confirmNewPassword": "Newpass1@"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Current password is incorrect"


def test_change_password_rules(client, auth_headers):
    for new_password in ["Short1@", "nouppercase1@", "NoNumber@@", "NoSpecial11"]:
        r = client.put(
            "/api/user/password",
            json={"currentPassword": TEST_PASSWORD, "newPassword": new_password, "confirmNewPassword": new_password},
            headers=auth_headers,
        )
        assert r.status_code == 400, new_password


def test_change_password_mismatch(client, auth_headers):
    r = client.put(
        "/api/user/password",
        json={"currentPassword": TEST_PASSWORD, "newPassword": "Newpass1@", "confirmNewPassword": "Newpass1!"},
        headers=auth_headers,
    )
    assert r.status_code == 400


def test_update_notifications(client, auth_headers):
    payload = {
        "emailNotifications": False, "jobAlerts": True, "applicationUpdates": False,
        "newsletter": True, "marketingEmails": False,
    }
    assert client.put("/api/user/notifications", json=payload, headers=auth_headers).status_code == 200
    assert client.get("/api/user/settings", headers=auth_headers).json()["notifications"] == payload


def test_update_notifications_requires_all_flags(client, auth_headers):
    r = client.put("/api/user/notifications", json={"jobAlerts": True}, headers=auth_headers)
    assert r.status_code == 400


def test_update_privacy(client, auth_headers):
    payload = {"profileVisibility": "connections", "showEmail": True, "showResume": False, "dataSharing": False}
    assert client.put("/api/user/privacy", json=payload, headers=auth_headers).status_code == 200
    assert client.get("/api/user/settings", headers=auth_headers).json()["privacy"] == payload


def test_update_privacy_bad_visibility(client, auth_headers):
    payload = {"profileVisibility": "friends", "showEmail": True, "showResume": False, "dataSharing": False}
    assert client.put("/api/user/privacy", json=payload, headers=auth_headers).status_code == 400


def test_delete_requires_confirmation(client, auth_headers, test_user):
    r = client.request("DELETE", "/api/user/delete", json={"confirmation": "delete"}, headers=auth_headers)
    assert r.status_code == 400
    assert UserService().get_by_id(test_user) is not None


def test_delete_account_cascades(client, auth_headers, other_headers, test_user, jobs, review_payload, mongo_db):
    client.post("/api/reviews", json=review_payload, headers=auth_headers)
    client.post("/api/reviews", json=review_payload, headers=other_headers)
    client.post("/api/applications", json={"jobId": "job1"}, headers=auth_headers)

    r = client.request(
        "DELETE", "/api/user/delete",
        json={"confirmation": "DELETE", "reason": "Found a job"},
        headers=auth_headers,
    )
    assert r.status_code == 200

    assert UserService().get_by_id(test_user) is None
    assert mongo_db[COLLECTIONS["reviews"]].count_documents({}) == 1
    assert mongo_db[COLLECTIONS["applications"]].count_documents({"user_id": test_user}) == 0

    # Token of a deleted account no longer authenticates
    assert client.get("/api/user/settings", headers=auth_headers).status_code == 401
