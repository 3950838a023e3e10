"""
核心模块：配置、后端连接、认证、日志与错误处理
"""
