"""
Constituency Projects - 数据模型包

包含数据库实例、文档表和项目记录的定义。
"""

from .base import db
from .document import Document
from .project import (
    Project,
    ProjectDraft,
    ProjectStatus,
    ProjectCategory,
    PROJECT_STATUSES,
    PROJECT_CATEGORIES,
    parse_end_date,
)
from .constituency import UGANDAN_CONSTITUENCIES, constituency_names

__all__ = [
    'db',
    'Document',
    'Project',
    'ProjectDraft',
    'ProjectStatus',
    'ProjectCategory',
    'PROJECT_STATUSES',
    'PROJECT_CATEGORIES',
    'parse_end_date',
    'UGANDAN_CONSTITUENCIES',
    'constituency_names',
]
