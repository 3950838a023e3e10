"""
项目看板

持有内存中的项目记录集以及搜索词、状态筛选、视图模式。
每次读取都整体替换记录集；新建成功后重新读取整个集合，不做本地合并。
"""

import logging

from models import UGANDAN_CONSTITUENCIES
from .create_workflow import CreateProjectWorkflow
from .presenters import project_card, project_table_row, stat_tiles
from .project_stats import STATUS_FILTER_ALL, STATUS_FILTER_OPTIONS, aggregate, filter_projects

logger = logging.getLogger(__name__)

VIEW_CARDS = 'cards'
VIEW_TABLE = 'table'
VIEW_MODES = (VIEW_CARDS, VIEW_TABLE)


class ProjectBoard:
    """项目看板"""

    def __init__(self, store, constituencies=None, currency_code='UGX'):
        self.store = store
        self.constituencies = UGANDAN_CONSTITUENCIES if constituencies is None else constituencies
        self.currency_code = currency_code
        self.records = []
        self.search = ''
        self._status_filter = STATUS_FILTER_ALL
        self._view = VIEW_CARDS
        self.workflow = CreateProjectWorkflow(
            store,
            constituencies=self.constituencies,
            on_created=lambda project_id: self.refresh(),
        )

    @property
    def status_filter(self):
        return self._status_filter

    @status_filter.setter
    def status_filter(self, value):
        value = value or STATUS_FILTER_ALL
        if value not in STATUS_FILTER_OPTIONS:
            raise ValueError(f"Invalid status filter: {value}")
        self._status_filter = value

    @property
    def view(self):
        return self._view

    @view.setter
    def view(self, value):
        value = value or VIEW_CARDS
        if value not in VIEW_MODES:
            raise ValueError(f"Invalid view: {value}")
        self._view = value

    def load(self):
        """读取整个集合并替换记录集"""
        self.records = self.store.list_all()
        logger.debug("Board loaded %d projects", len(self.records))
        return self.records

    refresh = load

    def visible(self):
        return filter_projects(self.records, self.search, self.status_filter)

    def summary(self):
        return aggregate(self.records)

    def stat_tiles(self):
        return stat_tiles(self.summary(), self.currency_code)

    def render(self):
        """当前视图的展示数据"""
        visible = self.visible()
        if self.view == VIEW_TABLE:
            items = [project_table_row(p, self.currency_code) for p in visible]
        else:
            items = [project_card(p) for p in visible]
        return {
            'view': self.view,
            'filters': {
                'search': self.search,
                'status': self.status_filter,
            },
            'stats': self.stat_tiles(),
            'total': len(self.records),
            'visible': len(visible),
            'items': items,
        }
