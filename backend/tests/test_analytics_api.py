"""GET /api/analytics over stored items."""

from conftest import bearer


def _seed(make_client, make_item):
    a = make_client(code="A1", name="A", phone="+77010001111")
    b = make_client(code="B1", name="B", phone="+77010002222")
    make_item(a["id"], "2024-01-15", amountKzt=100, costPrice=40)
    make_item(a["id"], "2024-02-10", amountKzt=200, costPrice=50)
    make_item(b["id"], "2024-02-20", amountKzt=300, weight=12.5)
    return a, b


def test_empty(client, staff_headers):
    body = client.get("/api/analytics", headers=staff_headers).json()
    assert body["summary"] == {
        "totalRevenue": 0, "totalCost": 0, "totalProfit": 0, "averageMargin": 0,
        "totalItems": 0, "totalWeight": 0, "uniqueClients": 0,
    }
    assert body["topClients"] == []
    assert body["monthlyData"] == []


def test_full_report(client, staff_headers, make_client, make_item):
    _seed(make_client, make_item)
    body = client.get("/api/analytics", headers=staff_headers).json()

    summary = body["summary"]
    assert summary["totalRevenue"] == 600
    assert summary["totalCost"] == 90
    assert summary["totalProfit"] == 510
    assert summary["totalWeight"] == 12.5
    assert summary["uniqueClients"] == 2
    # margins were derived for the two items with a cost: 60 and 150
    assert summary["averageMargin"] == 105

    # A1 and B1 both total 300, ties go to the lower client id
    assert [c["clientCode"] for c in body["topClients"]] == ["A1", "B1"]
    assert [c["itemsCount"] for c in body["topClients"]] == [2, 1]

    assert body["monthlyData"] == [
        {"month": "2024-01", "revenue": 100, "profit": 60, "itemsCount": 1},
        {"month": "2024-02", "revenue": 500, "profit": 450, "itemsCount": 2},
    ]


def test_date_range(client, staff_headers, make_client, make_item):
    _seed(make_client, make_item)
    body = client.get("/api/analytics", params={"start_date": "2024-02-01", "end_date": "2024-02-20"},
                      headers=staff_headers).json()
    assert body["summary"]["totalItems"] == 2
    assert body["summary"]["totalRevenue"] == 500
    assert [m["month"] for m in body["monthlyData"]] == ["2024-02"]


def test_camel_case_date_range(client, staff_headers, make_client, make_item):
    _seed(make_client, make_item)
    body = client.get("/api/analytics", params={"startDate": "2024-02-01", "endDate": "2024-02-15"},
                      headers=staff_headers).json()
    assert body["summary"]["totalItems"] == 1
    assert body["summary"]["totalRevenue"] == 200
    assert client.get("/api/analytics", params={"startDate": "soon"}, headers=staff_headers).status_code == 400


def test_bad_dates(client, staff_headers):
    assert client.get("/api/analytics", params={"start_date": "yesterday"}, headers=staff_headers).status_code == 400
    resp = client.get("/api/analytics", params={"start_date": "2024-03-01", "end_date": "2024-01-01"},
                      headers=staff_headers)
    assert resp.status_code == 400


def test_client_account_sees_own_numbers(client, make_client, make_item):
    _seed(make_client, make_item)
    login = client.post("/api/auth/client-login", json={"clientCode": "A1", "phoneLast4": "1111"}).json()

    body = client.get("/api/analytics", headers=bearer(login["token"])).json()
    assert body["summary"]["totalRevenue"] == 300
    assert body["summary"]["uniqueClients"] == 1
    assert [c["clientCode"] for c in body["topClients"]] == ["A1"]
