"""常量模块。

集中管理 CRUD 组件使用的常量，包括事件名、Flash 类别、HTTP 方法与错误消息。

主要常量：
- CrudEvents: CRUD 事件名称常量
- FlashCategory: Flash 消息类别常量
- HttpMethod: HTTP 方法常量
- ErrorMessages: 错误消息常量
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

# 导入CRUD事件常量
from .crud_events import CrudEvents

# 导入Flash类别常量
from .flash_categories import FlashCategory

# 导入HTTP方法常量
from .http_methods import HttpMethod

# 导入所有系统常量
from .system_constants import (
    ErrorCategory,
    ErrorMessages,
    ErrorSeverity,
    FlashMessages,
)

__all__ = [
    "CrudEvents",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "FlashCategory",
    "FlashMessages",
    "HttpMethod",
    "HttpStatus",
]
