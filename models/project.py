"""
项目记录模型

项目以文档形式保存在 "projects" 集合中，标识符不属于负载，
读取时由记录存储适配器附加。
"""

import math
from datetime import datetime, timezone
from enum import Enum


class ProjectStatus(Enum):
    """项目状态枚举"""
    PLANNED = 'Planned'
    ACTIVE = 'Active'
    COMPLETED = 'Completed'
    ON_HOLD = 'On Hold'


class ProjectCategory(Enum):
    """项目类别枚举"""
    INFRASTRUCTURE = 'Infrastructure'
    EDUCATION = 'Education'
    HEALTH = 'Health'
    WATER_SANITATION = 'Water & Sanitation'
    YOUTH = 'Youth'
    ECONOMIC = 'Economic'


PROJECT_STATUSES = [status.value for status in ProjectStatus]
PROJECT_CATEGORIES = [category.value for category in ProjectCategory]

DRAFT_FIELDS = ('name', 'category', 'constituency', 'budget', 'end', 'description')


def parse_end_date(value):
    """把 YYYY-MM-DD 日期字符串解析为当天 UTC 零点"""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not value:
        raise ValueError("End date is required")
    return datetime.strptime(str(value).strip(), '%Y-%m-%d').replace(tzinfo=timezone.utc)


def _as_number(value):
    if value is None or value == '':
        return 0
    if isinstance(value, bool):
        raise ValueError("Budget must be a number")
    if isinstance(value, (int, float)):
        return value
    number = float(value)
    return int(number) if number.is_integer() else number


def _is_positive_amount(value):
    """有限且大于 0 的数值（排除 bool、inf、nan）"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _as_datetime(value):
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


class Project:
    """项目记录"""

    def __init__(self, id, name, category, constituency, budget=0, spent=0,
                 progress=0, status=ProjectStatus.PLANNED.value, start=None,
                 end=None, description=''):
        self.id = id
        self.name = name
        self.category = category
        self.constituency = constituency
        self.budget = budget
        self.spent = spent
        self.progress = progress
        self.status = status
        self.start = start
        self.end = end
        self.description = description

    @classmethod
    def from_document(cls, doc_id, data):
        """合并文档标识符与负载字段"""
        return cls(
            id=doc_id,
            name=data.get('name', ''),
            category=data.get('category', ''),
            constituency=data.get('constituency', ''),
            budget=data.get('budget') or 0,
            spent=data.get('spent') or 0,
            progress=data.get('progress') or 0,
            status=data.get('status', ProjectStatus.PLANNED.value),
            start=_as_datetime(data.get('start')),
            end=_as_datetime(data.get('end')),
            description=data.get('description', ''),
        )

    def to_dict(self):
        """转换为字典格式"""
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'constituency': self.constituency,
            'budget': self.budget,
            'spent': self.spent,
            'progress': self.progress,
            'status': self.status,
            'start': self.start.isoformat() if self.start else None,
            'end': self.end.isoformat() if self.end else None,
            'description': self.description,
        }

    def __eq__(self, other):
        return isinstance(other, Project) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f'<Project {self.id} {self.name!r}>'


class ProjectDraft:
    """创建表单中尚未提交的项目字段"""

    def __init__(self, name='', category=ProjectCategory.INFRASTRUCTURE.value,
                 constituency='', budget=0, end='', description=''):
        self.name = name
        self.category = category
        self.constituency = constituency
        self.budget = budget
        self.end = end
        self.description = description

    @classmethod
    def defaults(cls, constituencies=None):
        """表单默认值：选区默认取列表第一项"""
        constituency = constituencies[0]['name'] if constituencies else ''
        return cls(constituency=constituency)

    def update(self, **fields):
        unknown = set(fields) - set(DRAFT_FIELDS)
        if unknown:
            raise ValueError(f"Unknown draft fields: {', '.join(sorted(unknown))}")
        for key, value in fields.items():
            if key == 'budget':
                try:
                    value = _as_number(value)
                except (TypeError, ValueError):
                    # 原值保留，由 validate() 报告
                    pass
            elif value is None:
                value = ''
            setattr(self, key, value)
        return self

    def validate(self, known_constituencies=None):
        """
        校验草稿，返回 {字段: 错误消息}，为空表示可提交

        known_constituencies 为 None 时不校验选区是否存在
        """
        errors = {}
        if not isinstance(self.name, str) or not self.name.strip():
            errors['name'] = 'Project name is required'
        if self.category not in PROJECT_CATEGORIES:
            errors['category'] = f'Category must be one of: {", ".join(PROJECT_CATEGORIES)}'
        if not isinstance(self.constituency, str) or not self.constituency.strip():
            errors['constituency'] = 'Constituency is required'
        elif known_constituencies is not None and self.constituency not in known_constituencies:
            errors['constituency'] = f'Unknown constituency: {self.constituency}'
        if not _is_positive_amount(self.budget):
            errors['budget'] = 'Budget must be a finite number greater than 0'
        if not isinstance(self.description, str):
            errors['description'] = 'Description must be text'
        try:
            parse_end_date(self.end)
        except ValueError:
            errors['end'] = 'End date must be a valid YYYY-MM-DD date'
        return errors

    def to_document(self, now=None):
        """生成新文档负载，进度/支出/状态取初始值"""
        now = now or datetime.now(timezone.utc)
        return {
            'name': self.name,
            'category': self.category,
            'constituency': self.constituency,
            'budget': self.budget,
            'description': self.description,
            'spent': 0,
            'progress': 0,
            'status': ProjectStatus.PLANNED.value,
            'start': now,
            'end': parse_end_date(self.end),
        }

    def to_dict(self):
        return {field: getattr(self, field) for field in DRAFT_FIELDS}
