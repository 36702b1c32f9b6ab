"""Shared fixtures: a throwaway sqlite database, a temp widget catalog and a fake Kit gateway."""

import json
import uuid
from datetime import timedelta

import pytest

from app import create_app
from settings import Settings
from models import db, WidgetClaim, SUBMITTED
from utils import generate_claim_token, utcnow

WIDGETS = [
    {
        "id": "theme-1",
        "name": "Neon Pulse",
        "description": "Glowing neon chat bubbles.",
        "thumbnail": "https://cdn.example.com/neon.png",
        "zip": "neon-pulse.zip",
    },
    {
        "id": "theme-2",
        "name": "Retro Arcade",
        "description": "Pixel-art chat box.",
        "thumbnail": "https://cdn.example.com/retro.png",
        "zip": "retro-arcade.zip",
    },
]

ZIP_BYTES = b"PK\x03\x04" + b"widget-bytes" * 1000


class FakeGateway:
    """Stands in for KitClient and records every subscription call."""

    def __init__(self, subscriber_id="sub-1", error=None):
        self.subscriber_id = subscriber_id
        self.error = error
        self.calls = []

    def register_or_update(self, email, token, widget_id):
        self.calls.append((email, token, widget_id))
        if self.error is not None:
            raise self.error
        return self.subscriber_id


@pytest.fixture
def widgets_path(tmp_path):
    path = tmp_path / "widgets.json"
    path.write_text(json.dumps(WIDGETS), encoding="utf-8")
    return path


@pytest.fixture
def assets_dir(tmp_path):
    zips = tmp_path / "assets" / "zips"
    zips.mkdir(parents=True)
    (zips / "neon-pulse.zip").write_bytes(ZIP_BYTES)
    return tmp_path / "assets"


@pytest.fixture
def settings(tmp_path, widgets_path, assets_dir):
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'claims.db'}",
        secret_key="test-secret",
        widgets_path=str(widgets_path),
        assets_dir=str(assets_dir),
        ip_salt="test-salt",
    )


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(settings, gateway):
    app = create_app(settings, gateway=gateway)
    app.config['TESTING'] = True

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def service(app):
    return app.extensions['widget_claims'].claims


@pytest.fixture
def make_claim(app):
    """Insert a claim row directly, bypassing Submit"""

    def _make_claim(email="a@example.com", widget_id="theme-1", status=SUBMITTED,
                    ip_hash="hash", age=timedelta(0), subscriber_id=None, **fields):
        claim = WidgetClaim(
            id=str(uuid.uuid4()),
            email=email,
            widget_id=widget_id,
            status=status,
            kit_subscriber_id=subscriber_id,
            claim_token=generate_claim_token(),
            ip_hash=ip_hash,
            created_at=utcnow() - age,
            **fields
        )
        db.session.add(claim)
        db.session.commit()
        return claim

    return _make_claim

