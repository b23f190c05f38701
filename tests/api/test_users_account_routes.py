from tests.api.conftest import basic_auth, bearer


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_register_user(client, app_and_deps):
    uow = app_and_deps[1]
    r = client.post(
        "/users",
        json={
            "firstname": "Bola",
            "lastname": "Tinubu",
            "email": "Bola@Example.com",
            "phone": "08099999999",
            "address": "2 Shelf Road",
            "password": "Str0ng!pass",
        },
    )
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["email"] == "bola@example.com"
    assert data["is_admin"] is False
    assert uow.db_users.created_hash == "hashed-Str0ng!pass"


def test_register_duplicate_is_409(client):
    r = client.post(
        "/users",
        json={
            "firstname": "Al",
            "lastname": "Ice",
            "email": "a@b.com",
            "phone": "08099999999",
            "address": "x",
            "password": "Str0ng!pass",
        },
    )
    assert r.status_code == 409


def test_register_weak_password_is_400(client):
    r = client.post(
        "/users",
        json={
            "firstname": "Al",
            "lastname": "Ice",
            "email": "new@b.com",
            "phone": "08099999999",
            "address": "x",
            "password": "alllowercase",
        },
    )
    assert r.status_code == 400


def test_login_and_profile(client):
    r = client.post("/users/login", headers=basic_auth("A@B.com", "Passw0rd!"))
    assert r.status_code == 200, r.text
    token = r.json()["token"]

    r2 = client.get("/users/profile", headers=bearer(token))
    assert r2.status_code == 200
    assert r2.json()["data"]["id"] == 42


def test_login_invalid_credentials(client):
    r = client.post("/users/login", headers=basic_auth("a@b.com", "wrong"))
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid credentials"


def test_profile_requires_token(client):
    assert client.get("/users/profile").status_code == 401
    r = client.get("/users/profile", headers=bearer("nope"))
    assert r.status_code == 401
    assert r.json()["detail"] == "invalid or expired token"


def test_list_users_admin_only(client, alice_token, admin_token):
    assert client.get("/users/allUsers", headers=bearer(alice_token)).status_code == 401

    r = client.get("/users/allUsers", headers=bearer(admin_token))
    assert r.status_code == 200
    assert [u["id"] for u in r.json()["data"]] == [1, 42]


def test_update_user(client, alice_token):
    r = client.put(
        "/users/update",
        headers=bearer(alice_token),
        json={"id": 42, "email": "New@B.com", "phone": "08000000000", "address": "3 Rd"},
    )
    assert r.status_code == 202, r.text
    assert r.json()["data"]["email"] == "new@b.com"


def test_update_other_user_is_401(client, alice_token):
    r = client.put(
        "/users/update",
        headers=bearer(alice_token),
        json={"id": 1, "email": "x@b.com", "phone": "08000000000", "address": "3 Rd"},
    )
    assert r.status_code == 401


def test_update_password(client, app_and_deps, alice_token):
    uow = app_and_deps[1]
    r = client.put(
        "/users/update/password",
        headers=bearer(alice_token),
        json={"id": 42, "password": "N3w!Password"},
    )
    assert r.status_code == 202, r.text
    assert uow.db_users.hashes[42] == "hashed-N3w!Password"


def test_update_password_weak_is_400(client, alice_token):
    r = client.put(
        "/users/update/password",
        headers=bearer(alice_token),
        json={"id": 42, "password": "longbutweak"},
    )
    assert r.status_code == 400


def test_deactivate(client, app_and_deps, alice_token):
    uow = app_and_deps[1]
    r = client.request(
        "DELETE", "/users/deactivate", headers=bearer(alice_token), json={"id": 42}
    )
    assert r.status_code == 202, r.text
    assert 42 not in uow.db_users.users


def test_deactivate_someone_else_is_401(client, alice_token):
    r = client.request(
        "DELETE", "/users/deactivate", headers=bearer(alice_token), json={"id": 1}
    )
    assert r.status_code == 401


def test_get_email(client, alice_token):
    r = client.get("/users/get_email", params={"email": "A@B.com"}, headers=bearer(alice_token))
    assert r.status_code == 200
    assert r.json()["data"]["id"] == 42

    assert client.get("/users/get_email", headers=bearer(alice_token)).status_code == 404
    r404 = client.get(
        "/users/get_email", params={"email": "ghost@b.com"}, headers=bearer(alice_token)
    )
    assert r404.status_code == 404
