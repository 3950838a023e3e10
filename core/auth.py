"""
认证相关功能

AuthService 是后端连接暴露的认证能力句柄，基于 Flask-JWT-Extended 签发令牌，
管理员凭据使用 werkzeug 密码哈希校验。
"""

from functools import wraps
from flask import g, current_app
from flask_jwt_extended import JWTManager, create_access_token, get_jwt_identity, verify_jwt_in_request
from werkzeug.security import check_password_hash


class AuthService:
    """认证服务"""

    def __init__(self, auth_domain=None):
        self.auth_domain = auth_domain

    def init_app(self, app):
        """在应用上注册 JWT（同一应用重复调用时复用已有的 JWTManager）"""
        if self.auth_domain:
            app.config.setdefault('JWT_ENCODE_ISSUER', self.auth_domain)
            app.config.setdefault('JWT_DECODE_ISSUER', self.auth_domain)

        jwt_manager = app.extensions.get('flask-jwt-extended')
        if jwt_manager is None:
            jwt_manager = JWTManager(app)
            self._register_jwt_handlers(jwt_manager)
        return jwt_manager

    def _register_jwt_handlers(self, jwt_manager):
        """注册JWT错误处理器，使用统一的API错误响应格式"""
        from api.base import api_error

        @jwt_manager.expired_token_loader
        def expired_token_callback(jwt_header, jwt_payload):
            return api_error(
                message="Session expired, please log in again",
                status_code=401,
                error_code="TOKEN_EXPIRED"
            )

        @jwt_manager.invalid_token_loader
        def invalid_token_callback(error):
            return api_error(
                message="Invalid authentication token",
                status_code=401,
                error_code="INVALID_TOKEN",
                details=str(error)
            )

        @jwt_manager.unauthorized_loader
        def missing_token_callback(error):
            return api_error(
                message="Authentication token is missing",
                status_code=401,
                error_code="AUTHORIZATION_REQUIRED"
            )

    def authenticate(self, username, password):
        """校验管理员凭据"""
        expected_username = current_app.config.get('ADMIN_USERNAME')
        password_hash = current_app.config.get('ADMIN_PASSWORD_HASH')
        if not password_hash or not username or not password:
            return False
        if username != expected_username:
            return False
        return check_password_hash(password_hash, password)

    def issue_token(self, identity):
        """签发访问令牌"""
        return create_access_token(identity=str(identity), additional_claims={'role': 'admin'})


def require_auth(f):
    """JWT认证装饰器（AUTH_REQUIRED 关闭时放行）"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_app.config.get('AUTH_REQUIRED', True):
            verify_jwt_in_request()
            g.current_user = get_jwt_identity()
        else:
            g.current_user = None
        return f(*args, **kwargs)

    return decorated_function


def get_current_user():
    """获取当前认证的用户"""
    return getattr(g, 'current_user', None)
