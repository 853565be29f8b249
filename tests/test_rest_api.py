"""REST surface: status codes, envelopes and error bodies."""

import time

from tests.conftest import ENTITY, OTHER_ENTITY, SLOW_STORE_SECONDS, vendor_payload

BASE = "/api/v1/vendors"


async def _create(client, **overrides) -> dict:
    resp = await client.post(BASE, json=vendor_payload(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


async def test_request_id_is_echoed(client):
    resp = await client.get("/health", headers={"X-Request-ID": "req-42"})
    assert resp.headers["X-Request-ID"] == "req-42"

    resp = await client.get("/health")
    assert resp.headers["X-Request-ID"]


async def test_create_vendor(client):
    data = await _create(client, vendor_code="v001", country="us", currency="usd", status="active")

    assert data["vendor_code"] == "V001"
    assert data["country"] == "US"
    assert data["currency"] == "USD"
    assert data["status"] == "pending_approval"
    assert data["current_balance"] == 0
    assert data["created_by"] is None


async def test_create_attributes_authenticated_caller(client, auth_headers):
    resp = await client.post(BASE, json=vendor_payload(), headers=auth_headers)
    assert resp.status_code == 201
    assert resp.json()["data"]["created_by"] == "user-alice"


async def test_create_with_bad_token_is_unauthorized(client):
    resp = await client.post(BASE, json=vendor_payload(), headers={"Authorization": "Bearer bogus"})
    assert resp.status_code == 401
    assert resp.json()["error"]["code"] == "UNAUTHORIZED"


async def test_create_invalid_field(client):
    resp = await client.post(BASE, json=vendor_payload(currency="US"))

    assert resp.status_code == 400
    assert resp.json() == {
        "error": {
            "code": "INVALID_INPUT",
            "message": "currency: currency must be 3-letter ISO code",
            "field": "currency",
        }
    }


async def test_create_duplicate_code(client):
    await _create(client, vendor_code="V001")
    resp = await client.post(BASE, json=vendor_payload(vendor_code="v001"))

    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "ALREADY_EXISTS"


async def test_create_missing_required_field(client):
    payload = vendor_payload()
    del payload["vendor_name"]
    resp = await client.post(BASE, json=payload)
    assert resp.status_code == 422


async def test_get_by_id_and_code(client):
    created = await _create(client, vendor_code="acme")

    resp = await client.get(f"{BASE}/{created['id']}", params={"entity_id": ENTITY})
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == created["id"]

    resp = await client.get(f"{BASE}/code/acme", params={"entity_id": ENTITY})
    assert resp.status_code == 200
    assert resp.json()["data"]["id"] == created["id"]


async def test_get_in_other_entity_is_not_found(client):
    created = await _create(client)
    resp = await client.get(f"{BASE}/{created['id']}", params={"entity_id": OTHER_ENTITY})

    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


async def test_list_paginates_and_clamps(client):
    for i in range(3):
        await _create(client, vendor_code=f"V{i}", vendor_name=f"Vendor {i}")

    resp = await client.get(BASE, params={"entity_id": ENTITY, "page": 2, "page_size": 2})
    body = resp.json()
    assert resp.status_code == 200
    assert [v["vendor_name"] for v in body["data"]] == ["Vendor 2"]
    assert body["meta"] == {"total": 3, "page": 2, "page_size": 2, "pages": 2}

    resp = await client.get(BASE, params={"entity_id": ENTITY, "page": 0, "page_size": 500})
    assert resp.json()["meta"] == {"total": 3, "page": 1, "page_size": 50, "pages": 1}


async def test_list_active_only_overrides_status(client):
    active = await _create(client, vendor_code="A1")
    await _create(client, vendor_code="P1")
    await client.post(f"{BASE}/{active['id']}/activate", params={"entity_id": ENTITY})

    resp = await client.get(
        BASE, params={"entity_id": ENTITY, "status": "suspended", "active_only": "true"}
    )
    assert [v["id"] for v in resp.json()["data"]] == [active["id"]]


async def test_list_requires_entity(client):
    resp = await client.get(BASE)
    assert resp.status_code == 422


async def test_update_vendor(client):
    created = await _create(client)
    payload = vendor_payload(vendor_name="Renamed", status="suspended", credit_limit=100)

    resp = await client.put(f"{BASE}/{created['id']}", json=payload)
    data = resp.json()["data"]
    assert resp.status_code == 200
    assert data["vendor_name"] == "Renamed"
    assert data["status"] == "suspended"
    assert data["credit_limit"] == 100


async def test_delete_vendor(client):
    created = await _create(client)

    resp = await client.delete(f"{BASE}/{created['id']}", params={"entity_id": ENTITY})
    assert resp.status_code == 204

    resp = await client.get(f"{BASE}/{created['id']}", params={"entity_id": ENTITY})
    assert resp.status_code == 404


async def test_delete_blocked_by_open_obligations(client, obligations):
    created = await _create(client)
    obligations.blocked.add(created["id"])

    resp = await client.delete(f"{BASE}/{created['id']}", params={"entity_id": ENTITY})
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONFLICT"


async def test_status_transitions_and_validation(client):
    created = await _create(client, credit_limit=5_000_000)
    vendor_url = f"{BASE}/{created['id']}"
    params = {"entity_id": ENTITY}

    resp = await client.get(f"{vendor_url}/validate", params=params)
    assert resp.json() == {
        "valid": False, "message": "vendor status is 'pending_approval', must be active",
    }

    resp = await client.post(f"{vendor_url}/activate", params=params)
    assert resp.json()["data"]["status"] == "active"
    resp = await client.get(f"{vendor_url}/validate", params=params)
    assert resp.json() == {"valid": True, "message": ""}

    resp = await client.post(f"{vendor_url}/balance", json={"entity_id": ENTITY, "amount": 5_000_000})
    assert resp.json() == {"status": "updated"}
    resp = await client.get(f"{vendor_url}/validate", params=params)
    assert resp.json() == {
        "valid": False,
        "message": "vendor has exceeded credit limit: balance=5000000, limit=5000000",
    }

    resp = await client.post(f"{vendor_url}/deactivate", params=params)
    assert resp.json()["data"]["status"] == "inactive"


async def test_validate_missing_vendor(client):
    resp = await client.get(f"{BASE}/nope/validate", params={"entity_id": ENTITY})
    assert resp.status_code == 200
    assert resp.json() == {"valid": False, "message": "vendor not found"}


async def test_balance_cannot_go_negative(client):
    created = await _create(client)
    url = f"{BASE}/{created['id']}/balance"
    await client.post(url, json={"entity_id": ENTITY, "amount": 50})

    resp = await client.post(url, json={"entity_id": ENTITY, "amount": -100})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "CONSTRAINT_VIOLATION"

    resp = await client.get(f"{BASE}/{created['id']}", params={"entity_id": ENTITY})
    assert resp.json()["data"]["current_balance"] == 50


async def test_contacts(client):
    created = await _create(client)
    url = f"{BASE}/{created['id']}/contacts"
    contact = {"contact_type": "billing", "first_name": "Ada", "last_name": "Ng", "email": "ada@acme.test"}

    resp = await client.post(url, json=contact)
    assert resp.status_code == 201
    assert resp.json()["data"]["vendor_id"] == created["id"]

    resp = await client.post(url, json=contact)
    assert resp.status_code == 409

    resp = await client.get(url)
    assert [c["first_name"] for c in resp.json()["data"]] == ["Ada"]


async def test_contact_invalid_type(client):
    created = await _create(client)
    resp = await client.post(
        f"{BASE}/{created['id']}/contacts",
        json={"contact_type": "sales", "first_name": "Ada", "last_name": "Ng"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["field"] == "contact_type"


async def test_payment_terms(client):
    resp = await client.get("/api/v1/payment-terms")
    terms = resp.json()["data"]

    assert resp.status_code == 200
    assert len(terms) == 8
    assert terms[-1]["code"] == "NET90"


async def test_unknown_route(client):
    resp = await client.get("/api/v1/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"


async def test_deadline_cancels_request_and_discards_write(client, deadline_client, slow_balance_update):
    created = await _create(client)

    start = time.monotonic()
    resp = await deadline_client.post(
        f"{BASE}/{created['id']}/balance", json={"entity_id": ENTITY, "amount": 700}
    )
    elapsed = time.monotonic() - start

    assert resp.status_code == 504
    assert resp.json()["error"]["code"] == "TIMEOUT"
    assert elapsed < SLOW_STORE_SECONDS

    resp = await client.get(f"{BASE}/{created['id']}", params={"entity_id": ENTITY})
    assert resp.json()["data"]["current_balance"] == 0
