"""
数据库基础配置和通用模型
"""

from datetime import datetime
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import Column, Integer, DateTime

# 创建数据库实例
db = SQLAlchemy()


class BaseModel(db.Model):
    """基础模型类，包含通用字段"""

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True, comment='主键ID')
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, comment='创建时间')

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.id}>'
