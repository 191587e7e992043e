def _CreateLedger(client, name="Smith") -> dict:
    response = client.post("/api/ledgers", json={"Name": name})
    assert response.status_code == 201
    return response.json()


def _CreateKid(client, ledger_id, name="Emma", emoji="👧") -> dict:
    response = client.post(f"/api/ledgers/{ledger_id}/kids", json={"Name": name, "Emoji": emoji})
    assert response.status_code == 201
    return response.json()


def _CreateAccount(client, ledger_id, kid_id, name, balance=0) -> dict:
    response = client.post(
        f"/api/ledgers/{ledger_id}/kids/{kid_id}/accounts",
        json={"Name": name, "Balance": balance},
    )
    assert response.status_code == 201
    return response.json()


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["X-Request-Id"]


def test_full_ledger_flow(client):
    ledger = _CreateLedger(client)
    kid = _CreateKid(client, ledger["Id"])
    savings = _CreateAccount(client, ledger["Id"], kid["Id"], "Savings", 10)
    spending = _CreateAccount(client, ledger["Id"], kid["Id"], "Spending")

    response = client.post(
        f"/api/ledgers/{ledger['Id']}/accounts/{spending['Id']}/reorder",
        json={"AfterId": savings["Id"]},
    )
    assert response.status_code == 200

    response = client.post(
        f"/api/ledgers/{ledger['Id']}/accounts/{savings['Id']}/balance",
        json={"Amount": 5, "Operation": "add"},
    )
    assert response.status_code == 200
    assert response.json()["Balance"] == 15

    response = client.get(f"/api/ledgers/{ledger['Id']}")
    assert response.status_code == 200
    body = response.json()
    assert body["Name"] == "Smith"
    assert [entry["Name"] for entry in body["Kids"]] == ["Emma"]
    assert [account["Name"] for account in body["Kids"][0]["Accounts"]] == ["Spending", "Savings"]


def test_unknown_ledger_is_not_found(client):
    assert client.get("/api/ledgers/nope").status_code == 404
    assert client.patch("/api/ledgers/nope", json={"Name": "x"}).status_code == 404
    assert client.delete("/api/ledgers/nope").status_code == 404
    response = client.post("/api/ledgers/nope/kids", json={"Name": "Emma", "Emoji": "👧"})
    assert response.status_code == 404


def test_kid_from_other_ledger_is_not_found(client):
    smith = _CreateLedger(client, "Smith")
    jones = _CreateLedger(client, "Jones")
    kid = _CreateKid(client, smith["Id"])

    response = client.patch(f"/api/ledgers/{jones['Id']}/kids/{kid['Id']}", json={"Name": "Mallory"})
    assert response.status_code == 404
    response = client.delete(f"/api/ledgers/{jones['Id']}/kids/{kid['Id']}")
    assert response.status_code == 404


def test_update_and_delete_kid(client):
    ledger = _CreateLedger(client)
    kid = _CreateKid(client, ledger["Id"])

    response = client.patch(f"/api/ledgers/{ledger['Id']}/kids/{kid['Id']}", json={"Emoji": "🦄"})
    assert response.status_code == 200
    assert response.json()["Name"] == "Emma"
    assert response.json()["Emoji"] == "🦄"

    assert client.delete(f"/api/ledgers/{ledger['Id']}/kids/{kid['Id']}").status_code == 204
    assert client.delete(f"/api/ledgers/{ledger['Id']}/kids/{kid['Id']}").status_code == 404


def test_reorder_with_unknown_neighbor_is_bad_request(client):
    ledger = _CreateLedger(client)
    kid = _CreateKid(client, ledger["Id"])
    response = client.post(
        f"/api/ledgers/{ledger['Id']}/kids/{kid['Id']}/reorder",
        json={"BeforeId": 999},
    )
    assert response.status_code == 400
    assert response.json()["detail"].startswith("Reorder neighbor not found")


def test_balance_validation(client):
    ledger = _CreateLedger(client)
    kid = _CreateKid(client, ledger["Id"])
    account = _CreateAccount(client, ledger["Id"], kid["Id"], "Savings")
    url = f"/api/ledgers/{ledger['Id']}/accounts/{account['Id']}/balance"

    assert client.post(url, json={"Amount": 0, "Operation": "add"}).status_code == 422
    assert client.post(url, json={"Amount": 5, "Operation": "steal"}).status_code == 422
    response = client.post(url, json={"Amount": 5, "Operation": "remove"})
    assert response.status_code == 200
    assert response.json()["Balance"] == -5


def test_blank_names_are_rejected(client):
    ledger = _CreateLedger(client)
    response = client.post(f"/api/ledgers/{ledger['Id']}/kids", json={"Name": "   ", "Emoji": "👧"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Name is required"


def test_oversized_amounts_are_bad_requests(client):
    ledger = _CreateLedger(client)
    kid = _CreateKid(client, ledger["Id"])
    account = _CreateAccount(client, ledger["Id"], kid["Id"], "Savings", 10)
    url = f"/api/ledgers/{ledger['Id']}/accounts/{account['Id']}/balance"

    response = client.post(url, json={"Amount": 1e30, "Operation": "add"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Amount is too large"

    response = client.post(url, json={"Amount": 1.005, "Operation": "add"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Amount has more than 2 decimal places"

    response = client.post(
        f"/api/ledgers/{ledger['Id']}/kids/{kid['Id']}/accounts",
        json={"Name": "Spending", "Balance": 1e30},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Balance is too large"
