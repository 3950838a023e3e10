"""
项目记录存储适配器测试
"""

from datetime import datetime, timezone

import pytest

from core.exceptions import BackendUnavailable, WriteRejected
from models import db, Document
from services import ProjectStore


def test_list_all_empty(backend):
    assert ProjectStore(backend).list_all() == []


def test_create_then_list_returns_new_planned_project(backend, draft):
    store = ProjectStore(backend)
    now = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)

    project_id = store.create(draft, now=now)
    projects = store.list_all()

    assert len(projects) == 1
    project = projects[0]
    assert project.id == project_id
    assert project.name == 'Borehole A'
    assert project.constituency == 'Kawempe North'
    assert project.budget == 5_000_000
    assert project.status == 'Planned'
    assert project.progress == 0
    assert project.spent == 0
    assert project.start == now
    assert project.end == datetime(2025, 12, 31, tzinfo=timezone.utc)
    assert project.description == 'Community borehole'


def test_identifier_is_not_stored_in_payload(backend, draft):
    project_id = ProjectStore(backend).create(draft)

    document = Document.query.filter_by(doc_id=project_id).one()
    assert document.collection == 'projects'
    assert 'id' not in document.data


def test_each_create_gets_a_unique_id(backend, draft):
    store = ProjectStore(backend)
    first = store.create(draft)
    second = store.create(draft)

    assert first != second
    assert sorted(p.id for p in store.list_all()) == sorted([first, second])


def test_read_only_store_rejects_write(backend, draft):
    backend.store.read_only = True
    store = ProjectStore(backend)

    with pytest.raises(WriteRejected) as exc_info:
        store.create(draft)

    assert exc_info.value.status_code == 502
    assert store.list_all() == []


def test_list_all_raises_when_store_unreachable(backend):
    db.drop_all()

    with pytest.raises(BackendUnavailable):
        ProjectStore(backend).list_all()


def test_other_collections_are_ignored(backend, draft):
    backend.store.collection('audit').add({'name': 'not a project'})
    ProjectStore(backend).create(draft)

    assert [p.name for p in ProjectStore(backend).list_all()] == ['Borehole A']
