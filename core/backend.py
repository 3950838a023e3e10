"""
后端连接

进程内只为每个后端名称创建一个 BackendClient（先检查后创建，加锁），
热重载或第二个应用实例会复用已注册的客户端。客户端暴露三个能力句柄：

- auth:    认证服务（JWT）
- store:   文档存储（documents 表上的 schema-less 集合）
- storage: 文件存储（UPLOAD_FOLDER/<storage_bucket>）
"""

import logging
import os
import threading
import uuid
from datetime import datetime

from flask import current_app
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from models import db, Document
from .auth import AuthService
from .exceptions import BackendUnavailable, WriteRejected

logger = logging.getLogger(__name__)

_TIMESTAMP_KEY = '__timestamp__'


def _encode(value):
    """把负载中的 datetime 编码为可存入 JSON 的标记对象"""
    if isinstance(value, datetime):
        return {_TIMESTAMP_KEY: value.isoformat()}
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    return value


def _decode(value):
    if isinstance(value, dict):
        if set(value) == {_TIMESTAMP_KEY}:
            return datetime.fromisoformat(value[_TIMESTAMP_KEY])
        return {key: _decode(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_decode(item) for item in value]
    return value


class BackendSettings:
    """后端连接参数"""

    REQUIRED = ('api_key', 'auth_domain', 'project_id', 'storage_bucket', 'messaging_sender_id', 'app_id')

    def __init__(self, api_key=None, auth_domain=None, project_id=None, storage_bucket=None,
                 messaging_sender_id=None, app_id=None, measurement_id=None):
        self.api_key = api_key
        self.auth_domain = auth_domain
        self.project_id = project_id
        self.storage_bucket = storage_bucket
        self.messaging_sender_id = messaging_sender_id
        self.app_id = app_id
        self.measurement_id = measurement_id

    @classmethod
    def from_config(cls, config):
        return cls(
            api_key=config.get('BACKEND_API_KEY'),
            auth_domain=config.get('BACKEND_AUTH_DOMAIN'),
            project_id=config.get('BACKEND_PROJECT_ID'),
            storage_bucket=config.get('BACKEND_STORAGE_BUCKET'),
            messaging_sender_id=config.get('BACKEND_MESSAGING_SENDER_ID'),
            app_id=config.get('BACKEND_APP_ID'),
            measurement_id=config.get('BACKEND_MEASUREMENT_ID'),
        )

    def missing(self):
        """缺失的必需参数"""
        return [name for name in self.REQUIRED if not getattr(self, name)]


class DocumentSnapshot:
    """读取到的单个文档"""

    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return _decode(self._data)

    def __repr__(self):
        return f'<DocumentSnapshot {self.id}>'


class CollectionReference:
    """集合引用"""

    def __init__(self, store, name):
        self.store = store
        self.name = name

    def stream(self):
        """读取集合中的全部文档，不保证顺序"""
        try:
            rows = Document.query.filter_by(collection=self.name).all()
        except DBAPIError as e:
            db.session.rollback()
            logger.error("Failed to read collection %s: %s", self.name, e)
            raise BackendUnavailable(f"Could not read collection '{self.name}'", cause=e) from e
        return [DocumentSnapshot(row.doc_id, row.data) for row in rows]

    def add(self, data):
        """写入新文档，返回存储分配的标识符"""
        if self.store.read_only:
            logger.warning("Rejected write to read-only collection %s", self.name)
            raise WriteRejected(f"Permission denied: collection '{self.name}' is read-only")

        doc_id = uuid.uuid4().hex
        document = Document(collection=self.name, doc_id=doc_id, data=_encode(dict(data)))
        try:
            db.session.add(document)
            db.session.commit()
        except OperationalError as e:
            db.session.rollback()
            logger.error("Document store unreachable while writing to %s: %s", self.name, e)
            raise BackendUnavailable(f"Could not write to collection '{self.name}'", cause=e) from e
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Write to %s rejected: %s", self.name, e)
            raise WriteRejected(f"Write to collection '{self.name}' was rejected", cause=e) from e
        return doc_id


class DocumentStore:
    """文档存储句柄"""

    def __init__(self, read_only=False):
        self.read_only = read_only

    def collection(self, name):
        return CollectionReference(self, name)

    def ping(self):
        try:
            db.session.execute(text('SELECT 1'))
        except DBAPIError as e:
            db.session.rollback()
            raise BackendUnavailable("Document store is unreachable", cause=e) from e
        return True


class FileStorage:
    """文件存储句柄，所有路径限制在存储桶目录内"""

    def __init__(self, root):
        self.root = os.path.abspath(root)

    def _resolve(self, path):
        full_path = os.path.abspath(os.path.join(self.root, path))
        if os.path.commonpath([full_path, self.root]) != self.root or full_path == self.root:
            raise ValueError(f"Invalid storage path: {path}")
        return full_path

    def save(self, path, data):
        full_path = self._resolve(path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        if isinstance(data, str):
            data = data.encode('utf-8')
        with open(full_path, 'wb') as f:
            f.write(data)
        return path

    def read(self, path):
        with open(self._resolve(path), 'rb') as f:
            return f.read()

    def exists(self, path):
        return os.path.isfile(self._resolve(path))


class BackendClient:
    """后端连接句柄"""

    def __init__(self, name, settings, upload_folder='uploads', read_only=False):
        self.name = name
        self.settings = settings
        self.auth = AuthService(auth_domain=settings.auth_domain)
        self.store = DocumentStore(read_only=read_only)
        self.storage = FileStorage(os.path.join(upload_folder, settings.storage_bucket))

    @property
    def analytics_enabled(self):
        return bool(self.settings.measurement_id)

    def init_app(self, app):
        self.auth.init_app(app)
        app.extensions['backend'] = self

    def __repr__(self):
        return f'<BackendClient {self.name}>'


_backends = {}
_backends_lock = threading.Lock()


def initialize_backend(app, name=None):
    """初始化（或复用）后端连接并挂到应用上"""
    settings = BackendSettings.from_config(app.config)
    missing = settings.missing()
    if missing:
        raise BackendUnavailable(f"Missing backend settings: {', '.join(missing)}")

    name = name or settings.project_id
    with _backends_lock:
        client = _backends.get(name)
        if client is None:
            client = BackendClient(
                name,
                settings,
                upload_folder=app.config.get('UPLOAD_FOLDER', 'uploads'),
                read_only=app.config.get('DOCUMENT_STORE_READ_ONLY', False),
            )
            _backends[name] = client
            logger.info("Backend %s initialized", name)
        else:
            logger.debug("Reusing backend %s", name)

    client.init_app(app)
    return client


def get_backend(name=None):
    """
    获取已注册的后端连接

    name 为空时取当前应用配置的 BACKEND_PROJECT_ID
    """
    if name is None:
        name = current_app.config.get('BACKEND_PROJECT_ID')
    client = _backends.get(name)
    if client is None:
        raise BackendUnavailable(f"Backend '{name}' is not initialized")
    return client


def delete_backend(name):
    """注销后端连接"""
    with _backends_lock:
        return _backends.pop(name, None) is not None


def current_backend():
    """当前应用绑定的后端连接"""
    client = current_app.extensions.get('backend')
    if client is None:
        raise BackendUnavailable("Backend is not initialized")
    return client
