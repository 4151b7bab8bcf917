from booking_api.models import Settings


def test_health_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json()["status"] == "ok"


def test_settings_created_once_with_defaults(client):
    first = client.get("/api/settings").get_json()
    second = client.get("/api/settings").get_json()

    assert first == second
    assert first["name"] == "Laurent Restaurant"
    assert first["maxPartySize"] == 12
    assert first["tableCount"] == 20
    assert first["operatingHours"]["sunday"] == "12:00 PM - 9:00 PM"
    assert Settings.query.count() == 1


def test_settings_partial_update(client):
    r = client.put("/api/settings", json={
        "name": "Chez Laurent",
        "maxPartySize": 8,
        "operatingHours": {"sunday": "Closed"},
    })
    assert r.status_code == 200

    body = client.get("/api/settings").get_json()
    assert body["name"] == "Chez Laurent"
    assert body["maxPartySize"] == 8
    assert body["tableCount"] == 20
    assert body["operatingHours"]["sunday"] == "Closed"
    assert body["operatingHours"]["weekdays"] == "11:00 AM - 10:00 PM"
    assert Settings.query.count() == 1


def test_settings_reject_invalid_values(client):
    r = client.put("/api/settings", json={"tableCount": 0})
    assert r.status_code == 422


def test_lower_party_cap_applies_to_bookings(client, make_booking):
    client.put("/api/settings", json={"maxPartySize": 4})
    assert make_booking(guests=5).status_code == 422
    assert make_booking(guests=4).status_code == 201
