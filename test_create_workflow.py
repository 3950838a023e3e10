"""
新建项目流程测试
"""

import pytest

from core.exceptions import InvalidTransition, WriteRejected
from models import UGANDAN_CONSTITUENCIES
from services import CreateProjectWorkflow, SubmitOutcome, WorkflowState


class FakeStore:
    """记录写入调用的内存存储"""

    def __init__(self, error=None):
        self.error = error
        self.created = []

    def create(self, draft, now=None):
        if self.error is not None:
            raise self.error
        self.created.append(draft.to_dict())
        return f'doc-{len(self.created)}'


VALID_FIELDS = {
    'name': 'Borehole A',
    'category': 'Water & Sanitation',
    'constituency': 'Kawempe North',
    'budget': 5_000_000,
    'end': '2025-12-31',
}


def open_workflow(store, **kwargs):
    workflow = CreateProjectWorkflow(store, constituencies=UGANDAN_CONSTITUENCIES, **kwargs)
    workflow.open()
    return workflow


def test_starts_idle_and_opens_with_defaults():
    workflow = CreateProjectWorkflow(FakeStore(), constituencies=UGANDAN_CONSTITUENCIES)
    assert workflow.state == WorkflowState.IDLE
    assert not workflow.is_open

    workflow.open()

    assert workflow.state == WorkflowState.EDITING
    assert workflow.draft.to_dict() == {
        'name': '',
        'category': 'Infrastructure',
        'constituency': UGANDAN_CONSTITUENCIES[0]['name'],
        'budget': 0,
        'end': '',
        'description': '',
    }


def test_zero_budget_performs_no_write_and_stays_open():
    store = FakeStore()
    workflow = open_workflow(store)
    workflow.update(**dict(VALID_FIELDS, budget=0))

    outcome = workflow.submit()

    assert outcome.status == SubmitOutcome.INVALID
    assert 'budget' in outcome.errors
    assert store.created == []
    assert workflow.state == WorkflowState.EDITING


def test_missing_name_and_bad_date_are_reported():
    workflow = open_workflow(FakeStore())
    workflow.update(**dict(VALID_FIELDS, name='  ', end='31/12/2025'))

    outcome = workflow.submit()

    assert set(outcome.errors) == {'name', 'end'}


def test_unknown_constituency_is_reported():
    workflow = open_workflow(FakeStore())
    workflow.update(**dict(VALID_FIELDS, constituency='Atlantis'))

    assert 'constituency' in workflow.submit().errors


def test_successful_submit_closes_and_resets():
    store = FakeStore()
    created_ids = []
    workflow = open_workflow(store, on_created=created_ids.append)
    workflow.update(**VALID_FIELDS)

    outcome = workflow.submit()

    assert outcome.ok
    assert outcome.project_id == 'doc-1'
    assert created_ids == ['doc-1']
    assert store.created[0]['name'] == 'Borehole A'
    assert workflow.state == WorkflowState.IDLE
    assert workflow.draft.name == ''


def test_rejected_write_returns_to_editing_with_draft_kept():
    store = FakeStore(error=WriteRejected('Permission denied'))
    workflow = open_workflow(store)
    workflow.update(**VALID_FIELDS)

    outcome = workflow.submit()

    assert outcome.status == SubmitOutcome.FAILED
    assert outcome.action == 'retry'
    assert workflow.state == WorkflowState.EDITING
    assert workflow.error is outcome.error
    assert workflow.draft.name == 'Borehole A'


def test_budget_strings_are_coerced():
    workflow = open_workflow(FakeStore())
    workflow.update(budget='5000000')
    assert workflow.draft.budget == 5_000_000

    workflow.update(budget='lots')
    assert 'budget' in workflow.draft.validate()


def test_unknown_field_is_refused():
    workflow = open_workflow(FakeStore())
    with pytest.raises(ValueError):
        workflow.update(status='Completed')


def test_cancel_resets_draft():
    workflow = open_workflow(FakeStore())
    workflow.update(name='Half typed')

    workflow.cancel()

    assert workflow.state == WorkflowState.IDLE
    assert workflow.draft.name == ''


def test_submit_while_idle_is_invalid():
    workflow = CreateProjectWorkflow(FakeStore())
    with pytest.raises(InvalidTransition):
        workflow.submit()


@pytest.mark.parametrize('budget', [float('inf'), float('nan'), '1e400', 'nan', -5, True])
def test_non_finite_or_non_positive_budget_is_invalid(budget):
    store = FakeStore()
    workflow = open_workflow(store)
    workflow.update(**dict(VALID_FIELDS, budget=budget))

    outcome = workflow.submit()

    assert outcome.status == SubmitOutcome.INVALID
    assert 'budget' in outcome.errors
    assert store.created == []


def test_non_text_name_and_description_are_invalid():
    workflow = open_workflow(FakeStore())
    workflow.update(**dict(VALID_FIELDS, name=123, description=['notes']))

    assert set(workflow.submit().errors) == {'name', 'description'}
