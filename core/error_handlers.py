"""
错误处理器中间件

处理HTTP错误状态码、API异常和后端异常
"""

from flask import request

from api.base import api_error, APIException
from .exceptions import BackendError


def setup_error_handlers(app):
    """配置错误处理器"""

    @app.errorhandler(APIException)
    def handle_api_exception(error):
        """业务异常"""
        app.logger.warning(f"API Exception: {request.url} - {error.message}")
        return error.to_response()

    @app.errorhandler(BackendError)
    def handle_backend_error(error):
        """后端异常：返回可重试的错误"""
        app.logger.error(f"Backend Error: {request.method} {request.url} - {error.message}")
        return api_error(
            message=error.message,
            status_code=error.status_code,
            error_code=error.error_code,
            details=error.to_details()
        )

    @app.errorhandler(400)
    def bad_request(error):
        """400 错误处理"""
        app.logger.warning(f"Bad Request: {request.url} - {error}")
        return api_error('The request could not be understood by the server', 400)

    @app.errorhandler(401)
    def unauthorized(error):
        """401 错误处理"""
        app.logger.warning(f"Unauthorized: {request.url} - {error}")
        return api_error('Authentication is required', 401)

    @app.errorhandler(403)
    def forbidden(error):
        """403 错误处理"""
        app.logger.warning(f"Forbidden: {request.url} - {error}")
        return api_error('You do not have permission to access this resource', 403)

    @app.errorhandler(404)
    def not_found(error):
        """404 错误处理"""
        app.logger.info(f"Not Found: {request.url}")
        return api_error('The requested resource was not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        """405 错误处理"""
        app.logger.warning(f"Method Not Allowed: {request.method} {request.url}")
        return api_error(f'The {request.method} method is not allowed for this endpoint', 405)

    @app.errorhandler(422)
    def unprocessable_entity(error):
        """422 错误处理"""
        app.logger.warning(f"Unprocessable Entity: {request.url} - {error}")
        return api_error('The request was well-formed but contains semantic errors', 422)

    @app.errorhandler(500)
    def internal_error(error):
        """500 错误处理"""
        from models import db
        db.session.rollback()
        app.logger.error(f"Internal Server Error: {request.url} - {error}")
        return api_error('An unexpected error occurred', 500)
