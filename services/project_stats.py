"""
项目筛选与统计

均为纯函数，每次输入变化时重新计算。
"""

import math
from decimal import Decimal, ROUND_HALF_UP

from models import ProjectStatus, PROJECT_STATUSES

STATUS_FILTER_ALL = 'All'
STATUS_FILTER_OPTIONS = [
    STATUS_FILTER_ALL,
    ProjectStatus.ACTIVE.value,
    ProjectStatus.COMPLETED.value,
    ProjectStatus.PLANNED.value,
    ProjectStatus.ON_HOLD.value,
]


def filter_projects(records, search_text='', status_filter=STATUS_FILTER_ALL):
    """名称或选区包含搜索词（忽略大小写），且状态匹配"""
    needle = (search_text or '').lower()
    status_filter = status_filter or STATUS_FILTER_ALL

    def matches(record):
        match_search = needle in str(record.name or '').lower() or needle in str(record.constituency or '').lower()
        match_status = status_filter == STATUS_FILTER_ALL or record.status == status_filter
        return match_search and match_status

    return [record for record in records if matches(record)]


class ProjectSummary:
    """项目汇总统计"""

    def __init__(self, total_count, total_budget, by_status):
        self.total_count = total_count
        self.total_budget = total_budget
        self.by_status = by_status

    @property
    def active_count(self):
        return self.by_status.get(ProjectStatus.ACTIVE.value, 0)

    @property
    def completed_count(self):
        return self.by_status.get(ProjectStatus.COMPLETED.value, 0)

    def to_dict(self):
        return {
            'total_count': self.total_count,
            'total_budget': self.total_budget,
            'active_count': self.active_count,
            'completed_count': self.completed_count,
            'by_status': dict(self.by_status),
        }


def aggregate(records):
    """对完整记录集做汇总"""
    by_status = {status: 0 for status in PROJECT_STATUSES}
    total_budget = 0
    for record in records:
        total_budget += _finite_amount(record.budget)
        if record.status in by_status:
            by_status[record.status] += 1
    return ProjectSummary(len(records), total_budget, by_status)


def _finite_amount(value):
    """非数值或非有限的金额按 0 处理（外部写入的文档未必经过校验）"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value if math.isfinite(value) else 0


def _round_half_up(value, places):
    quantum = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def format_currency(value, code='UGX'):
    """
    金额显示

    >= 10亿显示一位小数的 B，>= 100万显示取整的 M，其余按千分位显示整数。
    """
    value = _finite_amount(value)
    if value >= 1_000_000_000:
        return f"{code} {_round_half_up(value / 1_000_000_000, 1)}B"
    if value >= 1_000_000:
        return f"{code} {_round_half_up(value / 1_000_000, 0)}M"
    return f"{code} {_round_half_up(value, 0):,.0f}"
