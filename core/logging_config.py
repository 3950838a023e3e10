"""
日志配置和请求日志中间件

包含应用日志配置和HTTP请求/响应日志记录功能
"""

import time
import logging
from datetime import datetime
from flask import request, g

SENSITIVE_KEYS = ('password', 'token', 'secret', 'key')


def setup_logging(app):
    """配置日志系统"""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    if not app.debug:
        # 生产环境日志配置
        logging.basicConfig(
            level=level,
            format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        )
    else:
        # 开发环境日志配置
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s %(levelname)s: %(message)s'
        )


def mask_sensitive(data):
    """过滤敏感字段，截断过长的字符串"""
    filtered_data = {}
    for key, value in data.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            filtered_data[key] = '***'
        elif isinstance(value, str) and len(value) > 100:
            filtered_data[key] = value[:100] + '...'
        else:
            filtered_data[key] = value
    return filtered_data


def setup_request_logging(app):
    """配置请求日志中间件"""

    @app.before_request
    def before_request():
        """请求开始前的处理"""
        g.start_time = time.time()
        g.request_id = f"{int(time.time() * 1000)}-{id(request)}"

        request_info = {
            'request_id': g.request_id,
            'method': request.method,
            'path': request.path,
            'remote_addr': request.remote_addr,
            'user_agent': request.headers.get('User-Agent', 'Unknown'),
            'authorization': 'Bearer ***' if request.headers.get('Authorization') else 'None',
            'timestamp': datetime.utcnow().isoformat(),
            'query_args': dict(request.args) if request.args else {},
        }

        app.logger.info(f"[REQUEST_START] {g.request_id} {request.method} {request.path}", extra=request_info)

        # 如果是 JSON 请求，记录请求体（但不记录敏感信息）
        if request.is_json and request.method in ['POST', 'PUT', 'PATCH']:
            json_data = request.get_json(silent=True)
            if isinstance(json_data, dict) and json_data:
                app.logger.debug(f"[REQUEST_BODY] {g.request_id}", extra={
                    'request_id': g.request_id,
                    'json_data': mask_sensitive(json_data),
                })
            elif json_data is None:
                app.logger.warning(f"[REQUEST_BODY_ERROR] {g.request_id} Failed to parse JSON")

    @app.after_request
    def after_request(response):
        """请求结束后的处理"""
        if hasattr(g, 'start_time'):
            duration = time.time() - g.start_time

            response_info = {
                'request_id': g.request_id,
                'method': request.method,
                'path': request.path,
                'status_code': response.status_code,
                'duration_ms': round(duration * 1000, 2),
            }

            # 根据状态码选择日志级别
            if response.status_code >= 500:
                log_level = 'error'
            elif response.status_code >= 400:
                log_level = 'warning'
            else:
                log_level = 'info'

            getattr(app.logger, log_level)(
                f"[REQUEST_END] {g.request_id} {request.method} {request.path} - "
                f"Status: {response.status_code}, Duration: {duration:.3f}s",
                extra=response_info
            )

            # 记录慢请求
            if duration > 1.0:
                app.logger.warning(f"[SLOW_REQUEST] {g.request_id} {request.method} {request.path} - Duration: {duration:.3f}s", extra=response_info)

            response.headers['X-Response-Time'] = f"{duration:.3f}s"

        response.headers['X-Request-ID'] = getattr(g, 'request_id', 'unknown')
        return response
