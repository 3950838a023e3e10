"""
业务服务包

记录存储适配器、筛选统计、新建流程与项目看板
"""

from .project_store import ProjectStore, PROJECTS_COLLECTION
from .project_stats import (
    STATUS_FILTER_ALL,
    STATUS_FILTER_OPTIONS,
    ProjectSummary,
    aggregate,
    filter_projects,
    format_currency,
)
from .create_workflow import CreateProjectWorkflow, SubmitOutcome, WorkflowState
from .board import ProjectBoard, VIEW_CARDS, VIEW_TABLE, VIEW_MODES

__all__ = [
    'ProjectStore',
    'PROJECTS_COLLECTION',
    'STATUS_FILTER_ALL',
    'STATUS_FILTER_OPTIONS',
    'ProjectSummary',
    'aggregate',
    'filter_projects',
    'format_currency',
    'CreateProjectWorkflow',
    'SubmitOutcome',
    'WorkflowState',
    'ProjectBoard',
    'VIEW_CARDS',
    'VIEW_TABLE',
    'VIEW_MODES',
]
