"""
认证 API 蓝图
"""

from flask import Blueprint

from core.backend import current_backend
from .base import api_response, api_error, validate_json_request

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['POST'])
def login():
    """管理员登录，返回访问令牌"""
    data = validate_json_request(required_fields=['username', 'password'])

    auth = current_backend().auth
    if not auth.authenticate(data['username'], data['password']):
        return api_error("Invalid username or password", 401, error_code="INVALID_CREDENTIALS")

    return api_response({
        'access_token': auth.issue_token(data['username']),
        'token_type': 'Bearer',
    }, "Login successful")
