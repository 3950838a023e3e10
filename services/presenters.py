"""
项目卡片/表格的展示数据
"""

from .project_stats import format_currency

STATUS_BADGES = {
    'Active': 'badge-progress',
    'Completed': 'badge-resolved',
    'Planned': 'badge-new',
    'On Hold': 'bg-gray-100 text-gray-700 border border-gray-200',
}

CATEGORY_BADGES = {
    'Infrastructure': 'bg-blue-100 text-blue-800',
    'Education': 'bg-green-100 text-green-800',
    'Health': 'bg-red-100 text-red-800',
    'Water & Sanitation': 'bg-cyan-100 text-cyan-800',
    'Youth': 'bg-purple-100 text-purple-800',
    'Economic': 'bg-amber-100 text-amber-800',
}

DEFAULT_CATEGORY_BADGE = 'bg-muted text-muted-foreground'


def _date(value):
    return value.date().isoformat() if value else None


def project_card(project):
    return {
        'id': project.id,
        'name': project.name,
        'constituency': project.constituency,
        'category': project.category,
        'category_badge': CATEGORY_BADGES.get(project.category, DEFAULT_CATEGORY_BADGE),
        'status': project.status,
        'status_badge': STATUS_BADGES.get(project.status, ''),
        'progress': project.progress,
        'progress_tone': 'success' if project.progress == 100 else 'primary',
    }


def project_table_row(project, currency_code='UGX'):
    return {
        'id': project.id,
        'name': project.name,
        'constituency': project.constituency,
        'category': project.category,
        'category_badge': CATEGORY_BADGES.get(project.category, DEFAULT_CATEGORY_BADGE),
        'budget': project.budget,
        'budget_display': format_currency(project.budget, currency_code),
        'progress': project.progress,
        'status': project.status,
        'status_badge': STATUS_BADGES.get(project.status, ''),
        'end': _date(project.end),
    }


def stat_tiles(summary, currency_code='UGX'):
    """顶部统计卡片"""
    return [
        {'label': 'Total Projects', 'value': summary.total_count},
        {'label': 'Active', 'value': summary.active_count},
        {'label': 'Completed', 'value': summary.completed_count},
        {'label': 'Total Budget', 'value': format_currency(summary.total_budget, currency_code)},
    ]
