import pytest

from moodjournal import create_app
from moodjournal.domains.journal.models import Mood
from moodjournal.extensions import db
from moodjournal.tests.factories import make_token, make_user


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


@pytest.fixture()
def app(tmp_path):
    """
    Create a per-test app backed by a fresh in-memory database.

    No app context stays pushed while the test runs: each test-client request
    gets its own context (and its own Flask-Login user cache), and tests open
    ``app.app_context()`` explicitly for direct database work.
    """
    app = create_app(
        "testing",
        {
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        },
    )
    with app.app_context():
        db.create_all()
        # Seed moods for FK-dependent tests
        db.session.add_all([Mood(category="happy"), Mood(category="sad")])
        db.session.commit()
    try:
        yield app
    finally:
        with app.app_context():
            db.session.remove()
            db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture
def mood_ids(app):
    with app.app_context():
        return {m.category: m.id for m in Mood.query.all()}


@pytest.fixture
def writer(app):
    """A user with a live token."""
    with app.app_context():
        user = make_user()
        return {"user": user, "user_id": user.id, "token": make_token(user)}


@pytest.fixture
def other_writer(app):
    """A second user for isolation tests."""
    with app.app_context():
        user = make_user(email="other@example.org", name="Other")
        return {"user": user, "user_id": user.id, "token": make_token(user)}
