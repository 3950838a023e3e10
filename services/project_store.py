"""
项目记录存储适配器

在文档存储的 "projects" 集合与内存中的 Project 之间转换。
"""

import logging

from models import Project

logger = logging.getLogger(__name__)

PROJECTS_COLLECTION = 'projects'


class ProjectStore:
    """项目记录存储"""

    def __init__(self, backend, collection=PROJECTS_COLLECTION):
        self.backend = backend
        self.collection = collection

    def list_all(self):
        """
        读取集合中的全部项目

        Raises:
            BackendUnavailable: 无法连接文档存储（调用方不做本地重试）
        """
        snapshots = self.backend.store.collection(self.collection).stream()
        projects = [Project.from_document(snapshot.id, snapshot.to_dict()) for snapshot in snapshots]
        logger.debug("Fetched %d projects from %s", len(projects), self.collection)
        return projects

    def create(self, draft, now=None):
        """
        写入新项目，返回新文档标识符

        不做任何校验，校验由调用方在提交前完成。

        Raises:
            WriteRejected: 文档存储拒绝写入
        """
        doc_id = self.backend.store.collection(self.collection).add(draft.to_document(now))
        logger.info("Created project %s (%s)", doc_id, draft.name)
        return doc_id
