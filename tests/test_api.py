"""
HTTP tests for the JSON API and the landing page, using TestClient.
"""
import pytest

pytestmark = pytest.mark.integration

API = "/api"


def confirm(client, booking_id):
    response = client.put(f"{API}/bookings/{booking_id}/status", json={"status": "confirmed"})
    assert response.status_code == 200
    return response.json()


class TestHealthAndRouting:
    def test_health(self, client):
        response = client.get(f"{API}/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert "timestamp" in body and "uptime" in body
        assert "X-Request-ID" in response.headers

    def test_unknown_route(self, client):
        response = client.get(f"{API}/nope")
        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}


class TestSettings:
    def test_get_creates_defaults(self, client):
        body = client.get(f"{API}/settings").json()
        assert body["pricePerNight"] == 250
        assert body["cleaningFee"] == 50
        assert body["taxRate"] == pytest.approx(0.12)
        assert body["maxGuests"] == 8
        assert body["minStayNights"] == 2
        assert body["unavailableDates"] == []
        assert body["seasonalPricing"] == []

    def test_put_upserts(self, client):
        response = client.put(
            f"{API}/settings",
            json={
                "pricePerNight": 275,
                "unavailableDates": ["2025-12-24", "2025-12-25"],
                "seasonalPricing": [
                    {
                        "startDate": "2025-11-15",
                        "endDate": "2026-01-15",
                        "pricePerNight": 350,
                        "description": "Holiday Season",
                    }
                ],
            },
        )
        assert response.status_code == 200
        body = response.json()
        assert body["pricePerNight"] == 275
        assert body["cleaningFee"] == 50
        assert body["unavailableDates"] == ["2025-12-24", "2025-12-25"]
        assert body["seasonalPricing"][0]["description"] == "Holiday Season"

        assert client.get(f"{API}/settings").json()["pricePerNight"] == 275

    def test_put_rejects_negative_price(self, client):
        response = client.put(f"{API}/settings", json={"pricePerNight": -1})
        assert response.status_code == 400
        assert "pricePerNight" in response.json()["error"]


class TestAvailability:
    def test_free_range(self, client):
        response = client.post(
            f"{API}/bookings/check-availability",
            json={"checkIn": "2025-09-15", "checkOut": "2025-09-18"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["available"] is True
        assert body["conflictingCount"] == 0
        assert body["hasBlackout"] is False

    def test_checkout_before_checkin(self, client):
        response = client.post(
            f"{API}/bookings/check-availability",
            json={"checkIn": "2025-09-18", "checkOut": "2025-09-18"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Check-out must be after check-in"}

    def test_missing_dates(self, client):
        response = client.post(f"{API}/bookings/check-availability", json={"checkIn": "2025-09-18"})
        assert response.status_code == 400
        assert response.json() == {"error": "Check-in and check-out are required"}

    def test_malformed_date(self, client):
        response = client.post(
            f"{API}/bookings/check-availability",
            json={"checkIn": "not-a-date", "checkOut": "2025-09-18"},
        )
        assert response.status_code == 400
        assert "checkIn" in response.json()["error"]

    def test_blackout_and_booking_conflicts(self, client, sample_booking_payload):
        client.put(f"{API}/settings", json={"unavailableDates": ["2025-09-20"]})
        client.post(f"{API}/bookings", json=sample_booking_payload)

        body = client.post(
            f"{API}/bookings/check-availability",
            json={"checkIn": "2025-09-17", "checkOut": "2025-09-21"},
        ).json()
        assert body["available"] is False
        assert body["conflictingCount"] == 1
        assert body["hasBlackout"] is True
        assert body["conflictingBookings"] == 1
        assert body["unavailableDates"] is True

    def test_same_answer_twice(self, client, sample_booking_payload):
        client.post(f"{API}/bookings", json=sample_booking_payload)
        request = {"checkIn": "2025-09-16", "checkOut": "2025-09-19"}

        first = client.post(f"{API}/bookings/check-availability", json=request).json()
        second = client.post(f"{API}/bookings/check-availability", json=request).json()
        assert first == second


class TestCalendar:
    def test_month_map(self, client, sample_booking_payload):
        client.post(f"{API}/bookings", json=sample_booking_payload)
        client.put(f"{API}/settings", json={"unavailableDates": ["2025-09-25"]})

        response = client.get(f"{API}/bookings/calendar/2025/9")
        assert response.status_code == 200
        days = response.json()

        assert len(days) == 30
        assert days["2025-09-14"] == {"available": True, "booked": False, "unavailable": False}
        assert days["2025-09-15"] == {"available": False, "booked": True, "unavailable": False}
        assert days["2025-09-17"]["booked"] is True
        assert days["2025-09-18"]["available"] is True
        assert days["2025-09-25"] == {"available": False, "booked": False, "unavailable": True}

    def test_invalid_month(self, client):
        response = client.get(f"{API}/bookings/calendar/2025/13")
        assert response.status_code == 400
        assert "error" in response.json()


class TestPrice:
    def test_default_quote(self, client):
        response = client.post(
            f"{API}/bookings/calculate-price",
            json={"checkIn": "2025-09-15", "checkOut": "2025-09-18", "guests": 2},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["nights"] == 3
        assert body["pricePerNight"] == 250
        assert body["subtotal"] == 750
        assert body["cleaningFee"] == 50
        assert body["taxes"] == pytest.approx(90)
        assert body["total"] == pytest.approx(890)
        assert body["breakdown"]["accommodation"] == 750
        assert body["breakdown"]["total"] == pytest.approx(890)

    def test_missing_guests(self, client):
        response = client.post(
            f"{API}/bookings/calculate-price",
            json={"checkIn": "2025-09-15", "checkOut": "2025-09-18"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_uses_current_settings(self, client):
        client.put(f"{API}/settings", json={"pricePerNight": 100, "cleaningFee": 20, "taxRate": 0.1})
        body = client.post(
            f"{API}/bookings/calculate-price",
            json={"checkIn": "2025-09-15", "checkOut": "2025-09-17", "guests": 5},
        ).json()
        assert body["total"] == pytest.approx(200 + 20 + 20)


class TestBookings:
    def test_create_returns_summary(self, client, sample_booking_payload):
        response = client.post(f"{API}/bookings", json=sample_booking_payload)
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Booking created successfully"
        booking = body["booking"]
        assert set(booking) == {"id", "guestName", "checkIn", "checkOut", "guests", "totalPrice", "status"}
        assert booking["guestName"] == "Test Guest"
        assert booking["checkIn"] == "2025-09-15"
        assert booking["totalPrice"] == pytest.approx(890)
        assert booking["status"] == "pending"

    def test_stored_record(self, client, sample_booking_payload):
        booking_id = client.post(f"{API}/bookings", json=sample_booking_payload).json()["booking"]["id"]

        response = client.get(f"{API}/bookings/{booking_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "guest@example.com"
        assert body["paymentStatus"] == "pending"
        assert body["specialRequests"] == "Late arrival"
        assert "createdAt" in body and "updatedAt" in body

    def test_overlap_with_confirmed_booking(self, client, sample_booking_payload):
        first = client.post(f"{API}/bookings", json=sample_booking_payload).json()["booking"]
        confirm(client, first["id"])

        overlapping = dict(sample_booking_payload, checkIn="2025-09-17", checkOut="2025-09-20")
        response = client.post(f"{API}/bookings", json=overlapping)

        assert response.status_code == 400
        assert response.json() == {"error": "Dates are not available"}
        assert client.get(f"{API}/bookings").json()["total"] == 1

    def test_same_day_turnover(self, client, sample_booking_payload):
        client.post(f"{API}/bookings", json=sample_booking_payload)
        follow_on = dict(sample_booking_payload, checkIn="2025-09-18", checkOut="2025-09-20")
        assert client.post(f"{API}/bookings", json=follow_on).status_code == 201

    def test_missing_fields(self, client, sample_booking_payload):
        payload = dict(sample_booking_payload)
        del payload["phone"]
        response = client.post(f"{API}/bookings", json=payload)
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_too_many_guests(self, client, sample_booking_payload):
        response = client.post(f"{API}/bookings", json=dict(sample_booking_payload, guests=9))
        assert response.status_code == 400
        assert "guests" in response.json()["error"]

    def test_invalid_email(self, client, sample_booking_payload):
        response = client.post(f"{API}/bookings", json=dict(sample_booking_payload, email="nope"))
        assert response.status_code == 400

    def test_list_paginates(self, client, sample_booking_payload):
        for start, end in (("2025-10-01", "2025-10-03"), ("2025-10-05", "2025-10-07"), ("2025-10-09", "2025-10-11")):
            client.post(f"{API}/bookings", json=dict(sample_booking_payload, checkIn=start, checkOut=end))

        body = client.get(f"{API}/bookings", params={"page": 1, "limit": 2}).json()
        assert body["total"] == 3
        assert body["totalPages"] == 2
        assert body["currentPage"] == 1
        assert [b["checkIn"] for b in body["bookings"]] == ["2025-10-09", "2025-10-05"]

        body = client.get(f"{API}/bookings", params={"page": 2, "limit": 2}).json()
        assert [b["checkIn"] for b in body["bookings"]] == ["2025-10-01"]

    def test_list_filters_by_status(self, client, sample_booking_payload):
        first = client.post(f"{API}/bookings", json=sample_booking_payload).json()["booking"]
        client.post(f"{API}/bookings", json=dict(sample_booking_payload, checkIn="2025-10-01", checkOut="2025-10-03"))
        confirm(client, first["id"])

        body = client.get(f"{API}/bookings", params={"status": "confirmed"}).json()
        assert body["total"] == 1
        assert body["bookings"][0]["id"] == first["id"]

    def test_unknown_booking(self, client):
        response = client.get(f"{API}/bookings/4242")
        assert response.status_code == 404
        assert response.json() == {"error": "Booking not found"}

        response = client.put(f"{API}/bookings/4242/status", json={"status": "confirmed"})
        assert response.status_code == 404

    def test_status_update(self, client, sample_booking_payload):
        booking_id = client.post(f"{API}/bookings", json=sample_booking_payload).json()["booking"]["id"]

        assert confirm(client, booking_id)["status"] == "confirmed"
        response = client.put(f"{API}/bookings/{booking_id}/status", json={"status": "pending"})
        assert response.json()["status"] == "pending"

    def test_status_must_be_known(self, client, sample_booking_payload):
        booking_id = client.post(f"{API}/bookings", json=sample_booking_payload).json()["booking"]["id"]
        response = client.put(f"{API}/bookings/{booking_id}/status", json={"status": "archived"})
        assert response.status_code == 400


class TestGallery:
    def test_create_and_list(self, client):
        images = [
            {"title": "Bedroom", "category": "bedroom", "order": 2, "imageUrl": "/images/bedroom.jpg"},
            {"title": "Exterior", "category": "exterior", "order": 1},
            {"title": "Hidden", "category": "view", "order": 0, "isActive": False},
        ]
        for image in images:
            response = client.post(f"{API}/gallery", json=image)
            assert response.status_code == 201

        listed = client.get(f"{API}/gallery").json()
        assert [i["title"] for i in listed] == ["Exterior", "Bedroom"]
        assert listed[1]["imageUrl"] == "/images/bedroom.jpg"

        by_category = client.get(f"{API}/gallery", params={"category": "bedroom"}).json()
        assert [i["title"] for i in by_category] == ["Bedroom"]

    def test_default_category(self, client):
        body = client.post(f"{API}/gallery", json={"title": "Living room"}).json()
        assert body["category"] == "interior"
        assert body["isActive"] is True

    def test_unknown_category(self, client):
        response = client.post(f"{API}/gallery", json={"title": "Garage", "category": "garage"})
        assert response.status_code == 400


class TestContact:
    def test_accepts_inquiry(self, client):
        response = client.post(
            f"{API}/contact",
            json={"name": "Ann", "email": "ann@example.com", "message": "Pets allowed?"},
        )
        assert response.status_code == 200
        assert "Thank you" in response.json()["message"]

    def test_requires_fields(self, client):
        response = client.post(f"{API}/contact", json={"name": "Ann"})
        assert response.status_code == 400
        assert response.json() == {"error": "Name, email, and message are required"}


class TestLandingPage:
    def test_renders_gallery(self, client):
        client.post(f"{API}/gallery", json={"title": "Mountain View", "category": "view"})

        response = client.get("/")
        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "Villa Niva" in response.text
        assert "Mountain View" in response.text
        assert 'data-api-base="/api"' in response.text

    def test_static_script(self, client):
        response = client.get("/static/booking.js")
        assert response.status_code == 200
