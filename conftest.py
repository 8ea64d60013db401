"""Test configuration: import path plus app/client fixtures."""

import os
import sys

import pytest

# Add the repository root (the directory containing this file) to ``sys.path``
# if it is not already present, so ``app``, ``models`` and friends import the
# same way they do under ``flask run``.
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)


@pytest.fixture
def app(tmp_path):
    from app import create_app
    from extensions import db

    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'test.db'}",
        'INVITE_TOOL_STATE_PATH': str(tmp_path / 'invite_tool_state.json'),
        'SHARE_BASE_URL': 'https://wedding.example',
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()
