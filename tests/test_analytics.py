def test_analytics_without_bookings(client):
    body = client.get("/api/analytics").get_json()
    assert body == {"totalBookings": 0, "averagePartySize": 0, "peakHours": ["No data available"]}


def test_analytics_counts_confirmed_bookings(client, make_booking):
    make_booking(date="2025-09-01", time="19:30", guests=2, status="confirmed")
    make_booking(date="2025-09-02", time="19:30", guests=3, status="confirmed")
    make_booking(date="2025-09-03", time="12:00", guests=6, status="confirmed")
    make_booking(date="2025-09-04", time="08:00", guests=10)

    body = client.get("/api/analytics").get_json()
    assert body["totalBookings"] == 4
    assert body["averagePartySize"] == 3.7
    assert body["peakHours"][0] == "7:30 PM"
    assert set(body["peakHours"]) == {"7:30 PM", "12:00 PM"}
