"""Client CRUD endpoints."""

from models.item import Item


class TestCreateClient:

    def test_create(self, make_client):
        body = make_client(code="C001", name="Aigerim", phone="+77011234567", email="aigerim@cargo.kz")
        assert body["id"]
        assert body["clientCode"] == "C001"
        assert body["email"] == "aigerim@cargo.kz"

    def test_duplicate_code(self, client, staff_headers, make_client):
        make_client(code="C001")
        resp = client.post("/api/clients", json={"clientCode": "C001", "name": "Other", "phone": "1"},
                           headers=staff_headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Client code already exists"

    def test_missing_phone(self, client, staff_headers):
        resp = client.post("/api/clients", json={"clientCode": "C9", "name": "X"}, headers=staff_headers)
        assert resp.status_code == 422

    def test_invalid_email(self, client, staff_headers):
        resp = client.post("/api/clients", json={"clientCode": "C9", "name": "X", "phone": "1", "email": "nope"},
                           headers=staff_headers)
        assert resp.status_code == 422


class TestListClients:

    def test_items_count_and_pagination(self, client, staff_headers, make_client, make_item):
        a = make_client(code="A1", name="Alpha")
        make_client(code="B1", name="Beta")
        make_item(a["id"])
        make_item(a["id"])

        resp = client.get("/api/clients", headers=staff_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 2
        assert body["totalPages"] == 1
        counts = {c["clientCode"]: c["itemsCount"] for c in body["items"]}
        assert counts == {"A1": 2, "B1": 0}

        page = client.get("/api/clients", params={"page": 2, "page_size": 1}, headers=staff_headers).json()
        assert len(page["items"]) == 1
        assert page["totalPages"] == 2

    def test_search(self, client, staff_headers, make_client):
        make_client(code="A1", name="Alpha", phone="111")
        make_client(code="B1", name="Beta", phone="222")
        for term in ("alp", "A1", "111"):
            body = client.get("/api/clients", params={"search": term}, headers=staff_headers).json()
            assert [c["clientCode"] for c in body["items"]] == ["A1"]

    def test_limit_sets_page_size(self, client, staff_headers, make_client):
        for code in ("A1", "B1", "C1"):
            make_client(code=code)
        body = client.get("/api/clients", params={"limit": 2}, headers=staff_headers).json()
        assert len(body["items"]) == 2
        assert (body["pageSize"], body["totalPages"]) == (2, 2)


class TestClientDetail:

    def test_detail_includes_items(self, client, staff_headers, make_client, make_item):
        c = make_client()
        first = make_item(c["id"], product_code="FIRST")
        second = make_item(c["id"], product_code="SECOND")

        resp = client.get(f"/api/clients/{c['id']}", headers=staff_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["itemsCount"] == 2
        assert [i["id"] for i in body["items"]] == [second["id"], first["id"]]

    def test_not_found(self, client, staff_headers):
        assert client.get("/api/clients/999", headers=staff_headers).status_code == 404


class TestUpdateClient:

    def test_update(self, client, staff_headers, make_client):
        c = make_client(code="C001")
        resp = client.put(f"/api/clients/{c['id']}",
                          json={"clientCode": "C001", "name": "Renamed", "phone": "+77000000000"},
                          headers=staff_headers)
        assert resp.status_code == 200
        assert resp.json()["name"] == "Renamed"

    def test_update_to_taken_code(self, client, staff_headers, make_client):
        make_client(code="C001")
        other = make_client(code="C002")
        resp = client.put(f"/api/clients/{other['id']}",
                          json={"clientCode": "C001", "name": "X", "phone": "1"},
                          headers=staff_headers)
        assert resp.status_code == 400

    def test_update_missing(self, client, staff_headers):
        resp = client.put("/api/clients/999", json={"clientCode": "Z", "name": "X", "phone": "1"},
                          headers=staff_headers)
        assert resp.status_code == 404


class TestDeleteClient:

    def test_delete_removes_items(self, client, staff_headers, make_client, make_item, db_session):
        c = make_client()
        item = make_item(c["id"])

        resp = client.delete(f"/api/clients/{c['id']}", headers=staff_headers)
        assert resp.status_code == 204

        assert client.get(f"/api/clients/{c['id']}", headers=staff_headers).status_code == 404
        assert client.get(f"/api/items/{item['id']}", headers=staff_headers).status_code == 404
        assert db_session.query(Item).count() == 0

    def test_delete_missing(self, client, staff_headers):
        assert client.delete("/api/clients/999", headers=staff_headers).status_code == 404
