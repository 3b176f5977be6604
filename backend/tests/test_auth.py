"""Registration, login and token handling."""

from conftest import bearer, register


class TestStaffAuth:

    def test_register_returns_token(self, client):
        body = register(client, "Manager@Cargo.kz", role="admin")
        assert body["user"]["email"] == "manager@cargo.kz"
        assert body["user"]["role"] == "admin"
        assert body["token"]

    def test_register_duplicate(self, client):
        register(client, "staff@cargo.kz")
        resp = client.post("/api/auth/register", json={"email": "staff@cargo.kz", "password": "secret123"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "User already exists"

    def test_register_short_password(self, client):
        resp = client.post("/api/auth/register", json={"email": "a@cargo.kz", "password": "123"})
        assert resp.status_code == 422

    def test_register_rejects_unknown_role(self, client):
        resp = client.post("/api/auth/register", json={"email": "a@cargo.kz", "password": "secret123", "role": "client"})
        assert resp.status_code == 422

    def test_login(self, client):
        register(client, "staff@cargo.kz")
        resp = client.post("/api/auth/login", json={"email": "staff@cargo.kz", "password": "secret123"})
        assert resp.status_code == 200
        token = resp.json()["token"]

        me = client.get("/api/auth/me", headers=bearer(token))
        assert me.status_code == 200
        assert me.json()["email"] == "staff@cargo.kz"

    def test_login_wrong_password(self, client):
        register(client, "staff@cargo.kz")
        resp = client.post("/api/auth/login", json={"email": "staff@cargo.kz", "password": "nope-nope"})
        assert resp.status_code == 401

    def test_login_unknown_user(self, client):
        resp = client.post("/api/auth/login", json={"email": "ghost@cargo.kz", "password": "secret123"})
        assert resp.status_code == 401


class TestTokens:

    def test_missing_token(self, client):
        resp = client.get("/api/items")
        assert resp.status_code in (401, 403)

    def test_garbage_token(self, client):
        resp = client.get("/api/items", headers=bearer("simple-token-1-123"))
        assert resp.status_code == 401


class TestClientLogin:

    def test_first_login_creates_client_account(self, client, make_client):
        created = make_client(code="KZ-7", phone="+7 701 555 0199")
        resp = client.post("/api/auth/client-login", json={"clientCode": "KZ-7", "phoneLast4": "0199"})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["user"]["role"] == "client"
        assert body["user"]["clientId"] == created["id"]
        assert body["user"]["email"] == "KZ-7@client.local"
        assert body["client"]["clientCode"] == "KZ-7"

        again = client.post("/api/auth/client-login", json={"clientCode": "KZ-7", "phoneLast4": "0199"})
        assert again.json()["user"]["id"] == body["user"]["id"]

    def test_wrong_phone_digits(self, client, make_client):
        make_client(code="KZ-7", phone="+77015550199")
        resp = client.post("/api/auth/client-login", json={"clientCode": "KZ-7", "phoneLast4": "1111"})
        assert resp.status_code == 401

    def test_unknown_code(self, client):
        resp = client.post("/api/auth/client-login", json={"clientCode": "NOPE", "phoneLast4": "1111"})
        assert resp.status_code == 401
