from bizhub.models import Client, User
from bizhub.utils.roles import ROLE_USER


def test_owner_updates_profile(client, store, make_user, auth):
    owner = make_user(role=ROLE_USER)

    res = client.put(
        "/api/profile",
        json={"name": "New Name", "phone": "+254711000111", "address": "5 Market Road", "role": "admin"},
        headers=auth(owner),
    )
    assert res.status_code == 200
    user = res.get_json()["user"]
    assert user["name"] == "New Name"
    assert user["address"] == "5 Market Road"
    assert user["role"] == ROLE_USER
    assert "password_hash" not in user

    store.session.expire_all()
    assert store.find_by_id(User, owner.id).phone == "+254711000111"


def test_owner_email_conflict_is_400(client, make_user, auth):
    make_user(email="taken@example.com")
    owner = make_user()

    res = client.put("/api/profile", json={"email": "TAKEN@example.com"}, headers=auth(owner))
    assert res.status_code == 400
    assert res.get_json()["message"] == "User already exists with this email"


def test_owner_can_keep_own_email(client, make_user, auth):
    owner = make_user(email="me@example.com")
    res = client.put("/api/profile", json={"email": "Me@Example.com"}, headers=auth(owner))
    assert res.status_code == 200
    assert res.get_json()["user"]["email"] == "me@example.com"


def test_profile_requires_token(client):
    assert client.put("/api/profile", json={"name": "x"}).status_code == 401
    assert client.put("/api/user/1", json={"name": "x"}).status_code == 401


def test_client_updates_profile(client, store, make_client, auth):
    fan = make_client()

    res = client.put(
        f"/api/user/{fan.id}",
        json={"name": "Fan Club", "bio": "Coffee lover", "website": "https://fan.example.com", "profile_image": "https://img.example.com/a.png"},
        headers=auth(fan),
    )
    assert res.status_code == 200
    body = res.get_json()
    assert body["message"] == "Profile updated successfully"
    assert body["user"]["bio"] == "Coffee lover"
    assert "password_hash" not in body["user"]

    store.session.expire_all()
    updated = store.find_by_id(Client, fan.id)
    assert updated.name == "Fan Club"
    assert updated.profile_image == "https://img.example.com/a.png"


def test_client_email_conflict_and_validation(client, make_client, auth):
    make_client(email="other@example.com")
    fan = make_client()

    res = client.put(f"/api/user/{fan.id}", json={"email": "other@example.com"}, headers=auth(fan))
    assert res.status_code == 400
    assert res.get_json()["message"] == "Email already registered"

    res = client.put(f"/api/user/{fan.id}", json={"email": "not-an-email"}, headers=auth(fan))
    assert res.status_code == 400
    assert "email" in res.get_json()["errors"]


def test_client_cannot_edit_someone_else(client, make_client, make_user, auth):
    fan, other = make_client(), make_client()

    assert client.put(f"/api/user/{other.id}", json={"name": "x"}, headers=auth(fan)).status_code == 403
    assert client.put(f"/api/user/{fan.id}", json={"name": "x"}, headers=auth(make_user())).status_code == 403
