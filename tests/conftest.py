import os
import shutil
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="devcamper-tests-")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DB_URL_STRING"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["ENVIRONMENT"] = "test"
os.environ["FILE_UPLOAD_PATH"] = os.path.join(_tmp_dir, "uploads")

import pytest
from fastapi.testclient import TestClient

from devcamper.database.session import Base, SessionLocal, engine
from devcamper.main import app
from devcamper.models import User
from devcamper.utils.errorResponse import UpstreamFailure
from devcamper.utils.geocoder import GeoLocation, get_geocoder
from devcamper.utils.sendEmail import get_mailer

BOSTON = GeoLocation(
    latitude=42.3601,
    longitude=-71.0589,
    formatted_address="233 Bay State Rd, Boston, MA 02215, US",
    street="233 Bay State Rd",
    city="Boston",
    state="MA",
    zipcode="02215",
    country="US",
)
CAMBRIDGE = GeoLocation(
    latitude=42.3736,
    longitude=-71.1097,
    formatted_address="1 Brattle St, Cambridge, MA 02138, US",
    street="1 Brattle St",
    city="Cambridge",
    state="MA",
    zipcode="02138",
    country="US",
)
NEW_YORK = GeoLocation(
    latitude=40.7128,
    longitude=-74.0060,
    formatted_address="45 Upper College Rd, New York, NY 10001, US",
    street="45 Upper College Rd",
    city="New York",
    state="NY",
    zipcode="10001",
    country="US",
)


class FakeGeocoder:
    def __init__(self):
        self.locations = {
            "233 Bay State Rd Boston MA 02215": BOSTON,
            "02215": BOSTON,
            "1 Brattle St Cambridge MA 02138": CAMBRIDGE,
            "45 Upper College Rd New York NY 10001": NEW_YORK,
        }
        self.calls = []

    def geocode(self, address):
        self.calls.append(address)
        if address not in self.locations:
            raise UpstreamFailure(f"Could not geocode address {address}")
        return self.locations[address]


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, message):
        if self.fail:
            raise RuntimeError("SMTP connection refused")
        self.sent.append(message)


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    shutil.rmtree(os.environ["FILE_UPLOAD_PATH"], ignore_errors=True)
    yield


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def client(geocoder, mailer):
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def bootcamp_payload(name="Devworks Bootcamp", address="233 Bay State Rd Boston MA 02215", **extra):
    payload = {
        "name": name,
        "description": "Devworks is a full stack JavaScript Bootcamp located in the heart of Boston",
        "website": "https://devworks.com",
        "phone": "(111) 111-1111",
        "email": "enroll@devworks.com",
        "address": address,
        "careers": ["Web Development", "UI/UX", "Business"],
        "housing": True,
        "jobAssistance": True,
        "jobGuarantee": False,
        "acceptGi": True,
    }
    payload.update(extra)
    return payload


def course_payload(title="Front End Web Development", tuition=8000, **extra):
    payload = {
        "title": title,
        "description": "This course will provide you with all of the essentials to become a successful frontend web developer.",
        "weeks": 8,
        "tuition": tuition,
        "minimumSkill": "beginner",
        "scholarshipAvailable": True,
    }
    payload.update(extra)
    return payload


@pytest.fixture
def register(client):
    """Register a user and return ``(user_id, token)``; ``role="admin"`` is promoted in the store."""

    def _register(name="John Doe", email="john@example.com", password="123456", role="publisher"):
        requested_role = "publisher" if role == "admin" else role
        response = client.post(
            "/api/v1/auth/register",
            json={"name": name, "email": email, "password": password, "role": requested_role},
        )
        assert response.status_code == 200, response.text
        token = response.json()["token"]
        client.cookies.clear()

        session = SessionLocal()
        try:
            user = session.query(User).filter(User.email == email).one()
            if role == "admin":
                user.role = "admin"
                session.commit()
            return user.id, token
        finally:
            session.close()

    return _register


@pytest.fixture
def create_bootcamp(client):
    def _create(token, **kwargs):
        response = client.post(
            "/api/v1/bootcamps", json=bootcamp_payload(**kwargs), headers=auth_header(token)
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create


@pytest.fixture
def add_course(client):
    def _add(token, bootcamp_id, **kwargs):
        response = client.post(
            f"/api/v1/bootcamps/{bootcamp_id}/courses",
            json=course_payload(**kwargs),
            headers=auth_header(token),
        )
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _add
