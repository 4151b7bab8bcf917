import pytest

from booking_api.app import create_app
from booking_api.extensions import db

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture()
def app(tmp_path):
    """
    Fresh app + SQLite database per test.

    The app context stays pushed for the whole test so services can be
    called directly alongside the HTTP client.
    """
    app = create_app(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'test.db'}",
        UPLOAD_FOLDER=str(tmp_path / "uploads"),
        ADMIN_TOKEN=ADMIN_TOKEN,
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture()
def make_booking(client):
    """POSTs a booking, filling in whatever the test doesn't care about."""
    def _make(**overrides):
        payload = {
            "customerName": "Jane Doe",
            "customerEmail": "jane@example.com",
            "customerPhone": "555-0100",
            "date": "2025-09-01",
            "time": "19:30",
            "guests": 2,
            "tableNumber": 4,
        }
        payload.update(overrides)
        return client.post("/api/bookings", json=payload)
    return _make
