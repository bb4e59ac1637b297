"""
Pytest fixtures for the salon app tests.
"""

import pytest
from flask_login import FlaskLoginClient

from salon_app.main import create_app
from salon_app.extensions import db
from salon_app.models.user import User


@pytest.fixture
def app():
    """Application bound to a fresh in-memory database."""
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "WTF_CSRF_ENABLED": False,
        "ALERT_SCHEDULER_ENABLED": False,
        "SECRET_KEY": "test",
    })
    app.test_client_class = FlaskLoginClient

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def admin_user(app):
    user = User(username="admin", email="admin@example.com", role="admin")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def staff_user(app):
    user = User(username="staff", email="staff@example.com", role="staff")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def client(app, staff_user):
    """Test client logged in as a staff member."""
    return app.test_client(user=staff_user)


@pytest.fixture
def admin_client(app, admin_user):
    """Test client logged in as an admin."""
    return app.test_client(user=admin_user)


@pytest.fixture
def anonymous_client(app):
    return app.test_client()
