#!/usr/bin/env python3
"""
Constituency Projects - Flask 应用入口

主要功能:
- Flask 应用初始化
- 后端连接（文档存储、认证、文件存储）
- API 路由注册
- 命令行命令
"""

import os
import click
from flask import Flask
from flask_cors import CORS
from flask_migrate import Migrate
from werkzeug.security import generate_password_hash

from models import db
from core.config import config
from core.middleware import setup_all_middleware
from core.backend import initialize_backend, current_backend
from core.exceptions import BackendUnavailable

API_PREFIX = '/api/v1'


def create_app(config_name=None, **overrides):
    """应用工厂函数"""
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.config.update(overrides)

    # 初始化配置
    config[config_name].init_app(app)

    # 初始化扩展
    db.init_app(app)

    CORS(app,
         origins=app.config['CORS_ORIGINS'],
         supports_credentials=True,
         allow_headers=['Content-Type', 'Authorization'],
         methods=['GET', 'POST', 'OPTIONS'])

    # 数据库迁移
    Migrate(app, db)

    # 中间件：日志、请求日志、错误处理
    setup_all_middleware(app)

    # 后端连接（热重载时复用已有连接）
    initialize_backend(app)

    with app.app_context():
        db.create_all()

    # 注册蓝图
    register_blueprints(app)

    # 注册命令
    register_commands(app)

    return app


def register_blueprints(app):
    """注册蓝图"""
    from api.base import api_response
    from api.auth import auth_bp
    from api.projects import projects_bp

    @app.route('/')
    def index():
        return api_response(
            data={
                'service': 'Constituency Projects API',
                'version': '1.0.0',
                'status': 'running'
            },
            message='Welcome to Constituency Projects API'
        )

    @app.route('/health')
    @app.route(f'{API_PREFIX}/health')
    def health_check():
        """健康检查"""
        backend = current_backend()
        try:
            backend.store.ping()
            store_status = 'connected'
        except BackendUnavailable as e:
            store_status = f'error: {e.message}'

        healthy = store_status == 'connected'
        return api_response(
            data={
                'status': 'healthy' if healthy else 'degraded',
                'service': 'Constituency Projects API',
                'version': '1.0.0',
                'backend': backend.name,
                'document_store': store_status,
                'analytics_enabled': backend.analytics_enabled,
            },
            message='Service is healthy' if healthy else 'Document store is unreachable'
        )

    app.register_blueprint(auth_bp, url_prefix=f'{API_PREFIX}/auth')
    app.register_blueprint(projects_bp, url_prefix=f'{API_PREFIX}/projects')

    app.logger.info("Registered auth and projects blueprints")


def register_commands(app):
    """注册命令行命令"""

    @app.cli.command('init-db')
    def init_db():
        """初始化数据库"""
        db.create_all()
        click.echo('Database initialized.')

    @app.cli.command('reset-db')
    def reset_db():
        """重置数据库"""
        db.drop_all()
        db.create_all()
        click.echo('Database reset.')

    @app.cli.command('project-summary')
    def project_summary():
        """打印项目汇总统计"""
        from services import ProjectBoard, ProjectStore

        board = ProjectBoard(ProjectStore(current_backend()), currency_code=app.config['CURRENCY_CODE'])
        board.load()
        for tile in board.stat_tiles():
            click.echo(f"{tile['label']}: {tile['value']}")

    @app.cli.command('hash-password')
    @click.argument('password')
    def hash_password(password):
        """生成 ADMIN_PASSWORD_HASH"""
        click.echo(generate_password_hash(password))


if __name__ == '__main__':
    app = create_app()

    port = int(os.environ.get('PORT', 5000))
    host = os.environ.get('HOST', '127.0.0.1')

    print(f"🚀 启动 Constituency Projects 服务器...")
    print(f"📍 地址: http://{host}:{port}")
    print(f"🗄️ 数据库: {app.config['SQLALCHEMY_DATABASE_URI']}")

    app.run(host=host, port=port, debug=app.config['DEBUG'])
