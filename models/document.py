"""
文档模型

schema-less 文档存储的本地实现：每一行是某个集合中的一个文档，
doc_id 为存储分配的不透明标识符，data 为 JSON 负载。
"""

from sqlalchemy import Column, String, JSON, UniqueConstraint
from .base import BaseModel


class Document(BaseModel):
    """文档"""
    __tablename__ = 'documents'
    __table_args__ = (
        UniqueConstraint('collection', 'doc_id', name='uq_documents_collection_doc_id'),
    )

    collection = Column(String(100), nullable=False, index=True, comment='集合名称')
    doc_id = Column(String(64), nullable=False, comment='文档标识符')
    data = Column(JSON, nullable=False, default=dict, comment='文档负载')

    def __repr__(self):
        return f'<Document {self.collection}/{self.doc_id}>'
