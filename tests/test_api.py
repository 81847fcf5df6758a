async def _login(api_client, username: str = "user", password: str = "password123") -> None:
    resp = await api_client.post("/api/login/authenticate", json={"username": username, "password": password})
    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "username": "user"}


async def test_responses_include_x_request_id(api_client) -> None:
    resp = await api_client.get("/health")
    assert resp.status_code == 200
    assert resp.headers.get("x-request-id")


async def test_login_rejects_bad_password(api_client) -> None:
    resp = await api_client.post("/api/login/authenticate", json={"username": "user", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid username or password."


async def test_customer_routes_require_login(api_client) -> None:
    resp = await api_client.get("/api/customer/1")
    assert resp.status_code == 401


async def test_customer_routes_require_api_key(api_client) -> None:
    await _login(api_client)
    resp = await api_client.get("/api/customer/1", headers={"ApiKey": "wrong"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid or missing API key"


async def test_logout_drops_session(api_client) -> None:
    await _login(api_client)
    await api_client.post("/api/login/logout")
    api_client.cookies.clear()
    resp = await api_client.get("/api/customer/1")
    assert resp.status_code == 401


async def test_get_customer_by_id(api_client) -> None:
    await _login(api_client)
    resp = await api_client.get("/api/customer/4")
    assert resp.status_code == 200
    assert resp.json() == {"id": 4, "name": "George"}


async def test_get_unknown_customer_is_404(api_client) -> None:
    await _login(api_client)
    resp = await api_client.get("/api/customer/99")
    assert resp.status_code == 404


async def test_list_customers_pages_and_sorts(api_client) -> None:
    await _login(api_client)
    resp = await api_client.get("/api/customer", params={"fromRow": 1, "pageSize": 2, "sortBy": "name"})
    assert resp.status_code == 200
    assert [c["name"] for c in resp.json()] == ["Bob", "Emma"]

    resp = await api_client.get("/api/customer")
    assert [c["id"] for c in resp.json()] == [1, 2, 3, 4, 5, 6]


async def test_list_customers_empty_page_is_204(api_client) -> None:
    await _login(api_client)
    resp = await api_client.get("/api/customer", params={"pageSize": 0})
    assert resp.status_code == 204


async def test_list_customers_invalid_range_is_400(api_client) -> None:
    await _login(api_client)
    resp = await api_client.get("/api/customer", params={"fromRow": 6, "pageSize": 1})
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("Invalid range 6 ..")


async def test_list_customers_invalid_sort_is_400(api_client) -> None:
    await _login(api_client)
    resp = await api_client.get("/api/customer", params={"sortBy": "noSuchField"})
    assert resp.status_code == 400


async def test_add_customer_returns_201_and_is_readable(api_client) -> None:
    await _login(api_client)
    resp = await api_client.put("/api/customer", json={"id": 0, "name": "Leo"})
    assert resp.status_code == 201
    assert resp.json() == {"id": 7, "name": "Leo"}

    fetched = await api_client.get("/api/customer/7")
    assert fetched.json()["name"] == "Leo"


async def test_add_customer_with_id_is_400(api_client) -> None:
    await _login(api_client)
    resp = await api_client.put("/api/customer", json={"id": 3, "name": "Leo"})
    assert resp.status_code == 400


async def test_add_customer_without_name_reports_reason(api_client) -> None:
    await _login(api_client)
    resp = await api_client.put("/api/customer", json={"name": "  "})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Name is required"


async def test_update_customer(api_client) -> None:
    await _login(api_client)
    resp = await api_client.post("/api/customer", json={"id": 2, "name": "Barbara"})
    assert resp.status_code == 200
    assert resp.json() == {"id": 2, "name": "Barbara"}


async def test_update_unknown_customer_is_404(api_client) -> None:
    await _login(api_client)
    resp = await api_client.post("/api/customer", json={"id": 99, "name": "X"})
    assert resp.status_code == 404


async def test_expired_timeout_is_408(api_client, monkeypatch) -> None:
    from grocery_api.config import get_settings

    monkeypatch.setenv("MINIMUM_REQUEST_TIMEOUT_MS", "0")
    get_settings.cache_clear()

    await _login(api_client)
    resp = await api_client.get("/api/customer/1", params={"timeout": 0})
    assert resp.status_code == 408

    resp = await api_client.get("/api/customer/1", params={"timeout": 60000})
    assert resp.status_code == 200


async def test_null_name_reports_reason_on_add_and_update(api_client) -> None:
    await _login(api_client)
    added = await api_client.put("/api/customer", json={"id": 0, "name": None})
    assert added.status_code == 400
    assert added.json()["detail"] == "Name is required"

    updated = await api_client.post("/api/customer", json={"id": 2, "name": None})
    assert updated.status_code == 400
    assert updated.json()["detail"] == "Name is required"


async def test_negative_timeout_is_raised_to_minimum(api_client) -> None:
    await _login(api_client)
    resp = await api_client.get("/api/customer/1", params={"timeout": -5})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Bob"
