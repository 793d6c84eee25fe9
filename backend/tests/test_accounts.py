MISSING_ID = "0123456789abcdef01234567"

CASH = {"number": 1000, "name": "Cash", "description": "Bank Account", "type": "Asset"}


def test_create_account(auth_client):
    response = auth_client.post("/accounts", json=CASH)
    assert response.status_code == 201

    body = response.json()
    assert len(body["_id"]) == 24
    assert body["number"] == 1000
    assert body["description"] == "Bank Account"


def test_account_type_is_free_text(auth_client):
    response = auth_client.post("/accounts", json={"number": 7000, "name": "Suspense", "type": "Memo"})
    assert response.status_code == 201
    assert response.json()["type"] == "Memo"


def test_account_number_is_required(auth_client):
    response = auth_client.post("/accounts", json={"name": "No number"})
    assert response.status_code == 400
    assert response.json()["detail"][0]["field"] == "number"


def test_duplicate_number_rejected_and_existing_unchanged(auth_client):
    original = auth_client.post("/accounts", json=CASH).json()

    response = auth_client.post("/accounts", json={"number": 1000, "name": "Petty Cash", "type": "Asset"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Account number already exists"

    accounts = auth_client.get("/accounts").json()
    assert len(accounts) == 1
    assert accounts[0]["_id"] == original["_id"]
    assert accounts[0]["name"] == "Cash"


def test_list_sorted_by_number(auth_client):
    for number, name in [(4000, "Sales Revenue"), (1000, "Cash"), (2000, "Accounts Payable")]:
        auth_client.post("/accounts", json={"number": number, "name": name})

    numbers = [account["number"] for account in auth_client.get("/accounts").json()]
    assert numbers == [1000, 2000, 4000]


def test_list_filtered_by_type(auth_client):
    auth_client.post("/accounts", json=CASH)
    auth_client.post("/accounts", json={"number": 2000, "name": "Accounts Payable", "type": "Liability"})

    accounts = auth_client.get("/accounts", params={"type": "Liability"}).json()
    assert [account["number"] for account in accounts] == [2000]


def test_get_account(auth_client):
    created = auth_client.post("/accounts", json=CASH).json()

    response = auth_client.get(f"/accounts/{created['_id']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Cash"


def test_update_account(auth_client):
    created = auth_client.post("/accounts", json=CASH).json()

    response = auth_client.put(f"/accounts/{created['_id']}", json={"name": "Operating Cash"})
    assert response.status_code == 200
    assert response.json()["name"] == "Operating Cash"
    assert response.json()["number"] == 1000


def test_update_to_own_number_is_allowed(auth_client):
    created = auth_client.post("/accounts", json=CASH).json()

    response = auth_client.put(f"/accounts/{created['_id']}", json={"number": 1000, "name": "Cash at Bank"})
    assert response.status_code == 200


def test_update_to_another_accounts_number_is_rejected(auth_client):
    auth_client.post("/accounts", json=CASH)
    payable = auth_client.post("/accounts", json={"number": 2000, "name": "Accounts Payable"}).json()

    response = auth_client.put(f"/accounts/{payable['_id']}", json={"number": 1000})
    assert response.status_code == 400
    assert auth_client.get(f"/accounts/{payable['_id']}").json()["number"] == 2000


def test_update_missing_account(auth_client):
    response = auth_client.put(f"/accounts/{MISSING_ID}", json={"name": "x"})
    assert response.status_code == 404


def test_delete_account(auth_client):
    created = auth_client.post("/accounts", json=CASH).json()

    assert auth_client.delete(f"/accounts/{created['_id']}").status_code == 204
    assert auth_client.get("/accounts").json() == []


def test_delete_missing_account(auth_client):
    response = auth_client.delete(f"/accounts/{MISSING_ID}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Account not found"


def test_malformed_account_id(auth_client):
    response = auth_client.delete("/accounts/not-an-id")
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid account ID format"


def test_initialize_default_accounts_is_idempotent(auth_client):
    auth_client.post("/accounts", json=CASH)

    first = auth_client.post("/accounts/initialize-defaults")
    assert first.status_code == 201
    assert 1000 not in first.json()["created"]
    assert 6000 in first.json()["created"]

    second = auth_client.post("/accounts/initialize-defaults")
    assert second.json()["created"] == []
    assert len(auth_client.get("/accounts").json()) == 8


def test_accounts_require_sign_in(client):
    assert client.get("/accounts").status_code == 401


def test_update_with_null_number_is_rejected(auth_client):
    created = auth_client.post("/accounts", json=CASH).json()

    response = auth_client.put(f"/accounts/{created['_id']}", json={"number": None, "name": "Cash at Bank"})
    assert response.status_code == 400
    assert response.json()["detail"][0]["field"] == "number"
    assert auth_client.get(f"/accounts/{created['_id']}").json()["number"] == 1000
