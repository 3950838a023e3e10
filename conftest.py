"""
pytest 公共夹具
"""

import pytest

from app import create_app
from core.backend import delete_backend
from models import db, ProjectDraft


@pytest.fixture
def make_app(tmp_path):
    """按需创建测试应用，测试结束后清理数据库和后端注册"""
    created = []

    def _make_app(**overrides):
        overrides.setdefault('UPLOAD_FOLDER', str(tmp_path / 'uploads'))
        application = create_app('testing', **overrides)
        created.append(application)
        return application

    yield _make_app

    for application in created:
        with application.app_context():
            db.session.remove()
            db.drop_all()
        delete_backend(application.config['BACKEND_PROJECT_ID'])


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def backend(app):
    with app.app_context():
        yield app.extensions['backend']


@pytest.fixture
def draft():
    return ProjectDraft(
        name='Borehole A',
        category='Water & Sanitation',
        constituency='Kawempe North',
        budget=5_000_000,
        end='2025-12-31',
        description='Community borehole',
    )
