"""
API 基础工具函数

包含通用的响应格式、错误处理等工具函数
"""

from datetime import datetime
from flask import jsonify, request


def api_response(data=None, message="Success", status_code=200, **kwargs):
    """
    标准 API 响应格式

    Args:
        data: 响应数据
        message: 响应消息
        status_code: HTTP 状态码
        **kwargs: 其他响应字段

    Returns:
        Flask Response 对象
    """
    response_data = {
        'success': 200 <= status_code < 300,
        'message': message,
        'timestamp': datetime.utcnow().isoformat(),
        'path': request.path,
        **kwargs
    }

    if data is not None:
        response_data['data'] = data

    return jsonify(response_data), status_code


def api_error(message="An error occurred", status_code=400, error_code=None, details=None):
    """
    标准 API 错误响应格式

    Args:
        message: 错误消息
        status_code: HTTP 状态码
        error_code: 业务错误码
        details: 错误详情

    Returns:
        Flask Response 对象
    """
    error_data = {
        'success': False,
        'error': {
            'message': message,
            'status_code': status_code,
            'timestamp': datetime.utcnow().isoformat(),
            'path': request.path
        }
    }

    if error_code:
        error_data['error']['code'] = error_code

    if details:
        error_data['error']['details'] = details

    return jsonify(error_data), status_code


def validate_json_request(required_fields=None, optional_fields=None):
    """
    验证 JSON 请求数据

    Args:
        required_fields: 必需字段列表
        optional_fields: 可选字段列表

    Returns:
        过滤后的数据字典

    Raises:
        APIException: 请求体不是 JSON 或缺少必需字段
    """
    if not request.is_json:
        raise APIException("Content-Type must be application/json", 400)

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise APIException("Request body must contain a JSON object", 400)

    # 检查必需字段
    if required_fields:
        missing_fields = [field for field in required_fields if field not in data]
        if missing_fields:
            raise APIException(
                f"Missing required fields: {', '.join(missing_fields)}",
                400,
                error_code="MISSING_FIELDS",
                details={"missing_fields": missing_fields}
            )

    # 过滤允许的字段
    allowed_fields = set()
    if required_fields:
        allowed_fields.update(required_fields)
    if optional_fields:
        allowed_fields.update(optional_fields)

    if allowed_fields:
        return {k: v for k, v in data.items() if k in allowed_fields}

    return data


def get_request_args():
    """
    获取看板筛选参数

    Returns:
        包含搜索词、状态筛选和视图模式的字典
    """
    return {
        'search': request.args.get('search', '').strip(),
        'status': request.args.get('status', 'All'),
        'view': request.args.get('view', 'cards'),
    }


class APIException(Exception):
    """自定义 API 异常类"""

    def __init__(self, message, status_code=400, error_code=None, details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details

    def to_response(self):
        """转换为 API 错误响应"""
        return api_error(
            message=self.message,
            status_code=self.status_code,
            error_code=self.error_code,
            details=self.details
        )
