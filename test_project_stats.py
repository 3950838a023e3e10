"""
筛选与统计测试
"""

from models import Project
from services import aggregate, filter_projects, format_currency


def make_project(id, name, constituency, status='Planned', budget=0):
    return Project(id=id, name=name, category='Health', constituency=constituency,
                   budget=budget, status=status)


RECORDS = [
    make_project('p1', 'Borehole A', 'Kawempe North', 'Active', 5_000_000),
    make_project('p2', 'Health Centre III', 'Gulu East City', 'Completed', 120_000_000),
    make_project('p3', 'Youth Skills Hub', 'Nakawa East', 'Planned', 40_000_000),
    make_project('p4', 'Market Shed', 'Kawempe South', 'On Hold', 15_000_000),
    make_project('p5', 'Road Upgrade', 'Arua Central', 'Active', 900_000_000),
]


def ids(records):
    return [r.id for r in records]


def test_empty_search_and_all_status_returns_everything():
    assert ids(filter_projects(RECORDS, '', 'All')) == ['p1', 'p2', 'p3', 'p4', 'p5']


def test_search_matches_name_case_insensitively():
    assert ids(filter_projects(RECORDS, 'BOREHOLE', 'All')) == ['p1']


def test_search_matches_constituency():
    assert ids(filter_projects(RECORDS, 'kawempe', 'All')) == ['p1', 'p4']


def test_status_filter_only():
    assert ids(filter_projects(RECORDS, '', 'Active')) == ['p1', 'p5']
    assert ids(filter_projects(RECORDS, '', 'On Hold')) == ['p4']


def test_search_and_status_combined():
    assert ids(filter_projects(RECORDS, 'kawempe', 'On Hold')) == ['p4']
    assert filter_projects(RECORDS, 'kawempe', 'Completed') == []


def test_filter_does_not_mutate_input():
    records = list(RECORDS)
    filter_projects(records, 'road', 'Active')
    assert records == RECORDS


def test_aggregate_totals():
    summary = aggregate(RECORDS)
    assert summary.total_count == 5
    assert summary.total_budget == sum(r.budget for r in RECORDS)
    assert summary.active_count == 2
    assert summary.completed_count == 1
    assert summary.by_status == {'Planned': 1, 'Active': 2, 'Completed': 1, 'On Hold': 1}


def test_aggregate_empty_set():
    summary = aggregate([])
    assert summary.total_budget == 0
    assert summary.total_count == 0
    assert summary.active_count == 0
    assert summary.completed_count == 0


def test_aggregate_treats_missing_budget_as_zero():
    records = [make_project('p1', 'A', 'X', budget=None), make_project('p2', 'B', 'Y', budget=10)]
    assert aggregate(records).total_budget == 10


def test_format_currency_thresholds():
    assert format_currency(999) == 'UGX 999'
    assert format_currency(12_500) == 'UGX 12,500'
    assert format_currency(2_500_000) == 'UGX 3M'
    assert format_currency(1_200_000_000) == 'UGX 1.2B'
    assert format_currency(3_000_000_000) == 'UGX 3.0B'


def test_format_currency_zero_and_code():
    assert format_currency(0) == 'UGX 0'
    assert format_currency(None) == 'UGX 0'
    assert format_currency(1_000_000, 'KES') == 'KES 1M'


def test_search_tolerates_non_text_fields():
    records = [
        make_project('x1', 123, None),
        make_project('x2', None, {'region': 'north'}),
    ] + RECORDS

    assert ids(filter_projects(records, '12', 'All')) == ['x1']
    assert ids(filter_projects(records, 'north', 'All')) == ['x2', 'p1']


def test_non_finite_amounts_format_as_zero():
    assert format_currency(float('inf')) == 'UGX 0'
    assert format_currency(float('-inf')) == 'UGX 0'
    assert format_currency(float('nan')) == 'UGX 0'
    assert format_currency('5000000') == 'UGX 0'


def test_aggregate_skips_unusable_budgets():
    records = [
        make_project('x1', 'Bad', 'Nowhere', budget=float('nan')),
        make_project('x2', 'Text', 'Nowhere', budget='lots'),
        make_project('x3', 'Good', 'Nowhere', budget=1_000_000),
    ]
    assert aggregate(records).total_budget == 1_000_000
