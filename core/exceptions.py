"""
后端相关异常

所有对文档存储/后端连接的失败都以 BackendError 子类的形式向上传递，
由错误处理器统一转换为带有恢复动作的 API 错误响应。
"""


class BackendError(Exception):
    """后端错误基类"""

    status_code = 500
    error_code = 'BACKEND_ERROR'
    action = 'retry'

    def __init__(self, message, cause=None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def to_details(self):
        details = {'action': self.action}
        if self.cause is not None:
            details['cause'] = type(self.cause).__name__
        return details


class BackendUnavailable(BackendError):
    """无法连接到后端或文档存储"""

    status_code = 503
    error_code = 'BACKEND_UNAVAILABLE'


class WriteRejected(BackendError):
    """文档存储拒绝了写入（例如权限不足）"""

    status_code = 502
    error_code = 'WRITE_REJECTED'


class InvalidTransition(Exception):
    """创建流程状态机的非法状态转换"""

    def __init__(self, action, state):
        super().__init__(f"Cannot {action} while {state.value}")
        self.action = action
        self.state = state
