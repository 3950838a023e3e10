"""
API 蓝图包

包含所有 API 相关的蓝图和工具函数
"""

from .base import api_response, api_error, APIException
from .projects import projects_bp
from .auth import auth_bp

__all__ = [
    'api_response',
    'api_error',
    'APIException',
    'projects_bp',
    'auth_bp',
]
