"""
PyTest Configuration for the Listing Service
Provides fixtures for testing with database rollback and a mock object storage.

Uses SQLite for tests, so it runs locally without an external DB or storage.
"""
import os

# ── SQLite for tests (no external DB required) ──
TEST_DATABASE_URL = os.getenv('TEST_DATABASE_URL', 'sqlite:///./test.db')

# The app engine is built at import time; the lifespan's create_all must not touch the real database
os.environ['DATABASE_URL'] = TEST_DATABASE_URL

import json
import pytest
import httpx
from urllib.parse import unquote
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient
from config.database import Base, get_db
from shared_utils.storage_client import StorageClient, get_storage_client
from main import app

# SQLite needs check_same_thread=False for FastAPI's threaded test client
connect_args = {"check_same_thread": False} if "sqlite" in TEST_DATABASE_URL else {}
test_engine = create_engine(TEST_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

STORAGE_BASE_URL = "http://storage.test"
STORAGE_BUCKET = "test-bucket"


# Enable foreign keys for SQLite
@event.listens_for(test_engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    if "sqlite" in TEST_DATABASE_URL:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class FakeStorage:
    """In-memory stand-in for the storage REST API, served via httpx.MockTransport"""

    def __init__(self):
        self.objects = {}
        self.uploads = []
        self.deletes = []
        self.fail_markers = set()   # uploads whose path contains a marker get a 500
        self.fail_deletes = False

    def _object_path(self, request: httpx.Request) -> str:
        prefix = f"/storage/v1/object/{STORAGE_BUCKET}/"
        return unquote(request.url.path)[len(prefix):]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = self._object_path(request)

        if request.method == "POST":
            self.uploads.append(path)
            if any(marker in path for marker in self.fail_markers):
                return httpx.Response(500, json={"error": "storage unavailable"})
            if path in self.objects and request.headers.get("x-upsert") == "false":
                return httpx.Response(409, json={"error": "Duplicate", "message": "The resource already exists"})
            self.objects[path] = {
                "content_type": request.headers.get("content-type"),
                "content": request.content,
            }
            return httpx.Response(200, json={"Key": f"{STORAGE_BUCKET}/{path}"})

        if request.method == "DELETE":
            self.deletes.append(path)
            if self.fail_deletes:
                return httpx.Response(500, json={"error": "storage unavailable"})
            self.objects.pop(path, None)
            return httpx.Response(200, json={"message": "Successfully deleted"})

        return httpx.Response(405)

    def client(self) -> StorageClient:
        return StorageClient(
            base_url=STORAGE_BASE_URL,
            bucket=STORAGE_BUCKET,
            service_key="test-service-key",
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test with automatic rollback.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture(scope="function")
def client(db_session, fake_storage):
    """
    FastAPI TestClient with overridden database and storage dependencies.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_client] = fake_storage.client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """
    Bearer token for the submitting user.
    """
    import jwt
    from config.settings import JWT_SECRET, JWT_ALGORITHM

    token = jwt.encode({"sub": "test_user_id"}, JWT_SECRET, algorithm=JWT_ALGORITHM)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def operating_hours():
    """Monday-Friday open, weekend closed"""
    weekdays = [{"closed": False, "openTime": "09:00", "closeTime": "22:00"} for _ in range(5)]
    weekend = [{"closed": True, "openTime": "", "closeTime": ""} for _ in range(2)]
    return weekdays + weekend


@pytest.fixture
def listing_form(operating_hours):
    """Form fields of a complete, valid futsal listing submission."""
    return {
        "businessName": "Golden Boot Futsal",
        "numberOfFields": "3",
        "streetAddress": "12 Pyay Road",
        "town": "Kamayut",
        "province": "Yangon",
        "nearestBusStop": "Hledan",
        "nearestTrainStation": "Kamayut Station",
        "googleMapLocation": "https://maps.example.com/?q=16.82,96.13",
        "facebook": "https://facebook.com/goldenboot",
        "tiktok": "https://tiktok.com/@goldenboot",
        "infoWebsite": "https://goldenboot.example.com",
        "priceCurrency": "MMK",
        "posLitePrice": "50000",
        "serviceListingPrice": "120000",
        "posLiteOption": "decline",
        "phoneNumber": "+95912345678",
        "bookingStartTime": "08:00",
        "bookingEndTime": "23:00",
        "description": "Three indoor pitches with floodlights.",
        "facilities": json.dumps(["Parking", "Showers"]),
        "rules": json.dumps(["No metal studs"]),
        "popularProducts": "Energy drinks",
        "maxCapacity": "10",
        "fieldType": "indoor",
        "fieldDetails": json.dumps([
            {"name": "Field 1", "price": "1000"},
            {"name": "Field 2", "price": "1500"},
            {"name": "Field 3", "price": "1200"},
        ]),
        "operatingHours": json.dumps(operating_hours),
        "paymentMethods": json.dumps({
            "cash": False, "wechat": False, "kpay": False, "paylah": False,
        }),
    }


@pytest.fixture
def image_files():
    return [
        ("image_0", ("front.jpg", b"\xff\xd8front", "image/jpeg")),
        ("image_1", ("pitch.png", b"\x89PNGpitch", "image/png")),
        ("image_2", ("lobby.jpg", b"\xff\xd8lobby", "image/jpeg")),
    ]


# Pytest configuration
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "unit: mark test as unit test")
