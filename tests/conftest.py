from datetime import date
from decimal import Decimal

import pytest

from smartledger import create_app
from smartledger.config import TestConfig
from smartledger.extensions import db
from smartledger.models import User
from smartledger.stores import categories, ledger


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make(email="ana@example.com", name="Ana", password="secret"):
        user = User(name=name, email=email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user.id
    return _make


@pytest.fixture
def owner(make_user):
    return make_user()


@pytest.fixture
def make_category(app):
    def _make(owner_id, name):
        return categories.create(owner_id, name).id
    return _make


@pytest.fixture
def add_tx(app):
    def _add(owner_id, category_id, amount, on_date, kind="expense", note=""):
        if isinstance(on_date, str):
            on_date = date.fromisoformat(on_date)
        return ledger.create(owner_id, category_id, kind, Decimal(str(amount)), on_date, note).id
    return _add


@pytest.fixture
def auth_client(client):
    resp = client.post("/api/auth/register", json={"name": "Ana", "email": "ana@example.com", "password": "secret"})
    assert resp.status_code == 201
    resp = client.post("/api/auth/login", json={"email": "ana@example.com", "password": "secret"})
    assert resp.status_code == 200
    return client
