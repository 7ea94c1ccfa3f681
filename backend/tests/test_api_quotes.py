from decimal import Decimal


QUOTE = {
    "customer_name": "Dana Reyes",
    "customer_email": "dana@example.com",
    "customer_phone": "555-0100",
    "square_footage": 1500,
    "service_frequency": "weekly",
    "add_ons": ["pethaircleanup"],
}


def test_calculate_does_not_store(client, catalog):
    res = client.post(
        "/api/v1/quotes/calculate",
        json={"square_footage": 1500, "service_frequency": "weekly", "add_ons": ["Pet Hair Cleanup"]},
    )
    assert res.status_code == 200
    data = res.json()
    assert {k: Decimal(v) for k, v in data.items()} == {
        "base_price": Decimal("120"),
        "surcharges": Decimal("25"),
        "discounts": Decimal("14.5"),
        "total_price": Decimal("130.5"),
    }
    assert client.get("/api/v1/quotes").json() == []


def test_calculate_rejects_missing_square_footage(client):
    res = client.post("/api/v1/quotes/calculate", json={"add_ons": []})
    assert res.status_code == 422
    assert res.json()["detail"]["message"] == "Invalid request"
    assert "square_footage" in res.json()["detail"]["field_errors"]


def test_create_quote_end_to_end(client, catalog):
    res = client.post("/api/v1/quotes", json=QUOTE)
    assert res.status_code == 201
    quote = res.json()
    assert quote["status"] == "pending"
    assert quote["currency"] == "USD"
    assert Decimal(quote["total_price"]) == Decimal("130.50")
    assert quote["add_ons"] == ["pethaircleanup"]
    assert quote["prospect_id"] is not None

    prospects = client.get("/api/v1/clients", params={"status": "prospect"}).json()
    assert [p["id"] for p in prospects] == [quote["prospect_id"]]
    assert prospects[0]["source"] == "quote_generator"

    proposal = client.get(f"/api/v1/proposals/{quote['proposal_id']}").json()
    assert proposal["status"] == "Draft"
    assert proposal["client_name"] == "Dana Reyes"
    assert Decimal(proposal["total"]) == Decimal("145")
    assert [item["service"] for item in proposal["line_items"]] == [
        "Weekly Cleaning Service (1500 sq ft)",
        "Pet Hair Cleanup",
    ]

    events = client.get("/api/v1/outbox", params={"status": "delivered"}).json()
    assert len(events) == 1
    assert events[0]["topic"] == "quote.created"


def test_create_quote_missing_fields(client, catalog):
    res = client.post("/api/v1/quotes", json={"customer_name": "Dana", "square_footage": 900})
    assert res.status_code == 422
    detail = res.json()["detail"]
    assert detail["message"] == "Customer name, email, and square footage are required"
    assert detail["field_errors"] == {"customer_email": "required"}


def test_patch_reprices_and_delete(client, catalog):
    created = client.post(
        "/api/v1/quotes", json={**QUOTE, "square_footage": 500, "service_frequency": None, "add_ons": []}
    ).json()
    assert Decimal(created["base_price"]) == Decimal("80")

    res = client.patch(f"/api/v1/quotes/{created['id']}", json={"square_footage": 2500})
    assert res.status_code == 200
    assert Decimal(res.json()["base_price"]) == Decimal("160")
    assert res.json()["customer_name"] == "Dana Reyes"

    res = client.delete(f"/api/v1/quotes/{created['id']}")
    assert res.status_code == 204
    res = client.get(f"/api/v1/quotes/{created['id']}")
    assert res.status_code == 404
    assert res.json()["detail"]["message"] == f"Quote with ID {created['id']} not found"


def test_patch_cannot_clear_name(client, catalog):
    created = client.post("/api/v1/quotes", json=QUOTE).json()
    res = client.patch(f"/api/v1/quotes/{created['id']}", json={"customer_name": None})
    assert res.status_code == 422
    assert res.json()["detail"]["field_errors"] == {"customer_name": "required"}


def test_invalid_quote_id(client):
    res = client.get("/api/v1/quotes/abc")
    assert res.status_code == 400
    assert res.json()["detail"] == {
        "message": "Quote ID must be a valid integer",
        "field_errors": {"quote_id": "invalid"},
    }


def test_status_filter_and_recent(client, catalog):
    for email in ("a@example.com", "b@example.com", "c@example.com"):
        client.post("/api/v1/quotes", json={**QUOTE, "customer_email": email})
    quotes = client.get("/api/v1/quotes").json()
    client.patch(f"/api/v1/quotes/{quotes[0]['id']}", json={"status": "accepted"})

    accepted = client.get("/api/v1/quotes", params={"status": "accepted"}).json()
    assert [q["customer_email"] for q in accepted] == ["a@example.com"]
    assert len(client.get("/api/v1/quotes", params={"status": "pending"}).json()) == 2

    recent = client.get("/api/v1/quotes/recent", params={"limit": 2}).json()
    assert [q["customer_email"] for q in recent] == ["c@example.com", "b@example.com"]


def test_unknown_status_filter_is_rejected(client):
    res = client.get("/api/v1/quotes", params={"status": "archived"})
    assert res.status_code == 422
