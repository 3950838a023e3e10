"""
新建项目流程

状态：Idle（弹窗关闭）-> Editing（弹窗打开）-> Submitting（写入中）
写入成功回到 Idle 并重置草稿；写入失败回到 Editing，保留草稿并记录错误。
"""

import logging
from enum import Enum

from core.exceptions import BackendError, InvalidTransition
from models import ProjectDraft

logger = logging.getLogger(__name__)


class WorkflowState(Enum):
    IDLE = 'idle'
    EDITING = 'editing'
    SUBMITTING = 'submitting'


class SubmitOutcome:
    """提交结果"""

    CREATED = 'created'
    INVALID = 'invalid'
    FAILED = 'failed'

    def __init__(self, status, project_id=None, errors=None, error=None):
        self.status = status
        self.project_id = project_id
        self.errors = errors or {}
        self.error = error

    @property
    def ok(self):
        return self.status == self.CREATED

    @property
    def action(self):
        return self.error.action if self.error is not None else None

    def __repr__(self):
        return f'<SubmitOutcome {self.status}>'


class CreateProjectWorkflow:
    """新建项目弹窗的状态机"""

    def __init__(self, store, constituencies=None, on_created=None):
        self.store = store
        self.constituencies = constituencies or []
        self.on_created = on_created
        self.state = WorkflowState.IDLE
        self.draft = ProjectDraft.defaults(self.constituencies)
        self.errors = {}
        self.error = None

    @property
    def is_open(self):
        return self.state != WorkflowState.IDLE

    def _require(self, action, *states):
        if self.state not in states:
            raise InvalidTransition(action, self.state)

    def _reset(self):
        self.draft = ProjectDraft.defaults(self.constituencies)
        self.errors = {}
        self.error = None

    def open(self):
        self._require('open', WorkflowState.IDLE)
        self._reset()
        self.state = WorkflowState.EDITING

    def update(self, **fields):
        self._require('update', WorkflowState.EDITING)
        self.draft.update(**fields)

    def cancel(self):
        self._require('cancel', WorkflowState.EDITING)
        self._reset()
        self.state = WorkflowState.IDLE

    def submit(self, now=None):
        """提交草稿，校验失败时不做任何写入"""
        self._require('submit', WorkflowState.EDITING)

        known = [c['name'] for c in self.constituencies] if self.constituencies else None
        self.errors = self.draft.validate(known)
        if self.errors:
            logger.info("Project draft rejected: %s", ', '.join(sorted(self.errors)))
            return SubmitOutcome(SubmitOutcome.INVALID, errors=self.errors)

        self.state = WorkflowState.SUBMITTING
        try:
            project_id = self.store.create(self.draft, now=now)
        except BackendError as e:
            self.state = WorkflowState.EDITING
            self.error = e
            logger.warning("Project create failed: %s", e.message)
            return SubmitOutcome(SubmitOutcome.FAILED, error=e)

        # 记录已写入：先关闭弹窗，再刷新列表
        self.state = WorkflowState.IDLE
        self._reset()
        if self.on_created is not None:
            self.on_created(project_id)
        return SubmitOutcome(SubmitOutcome.CREATED, project_id=project_id)
