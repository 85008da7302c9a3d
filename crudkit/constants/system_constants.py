"""crudkit - 常量定义模块

统一管理错误分类、严重度与默认提示文案.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 错误消息常量
class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "数据验证失败"

    # CRUD 配置错误
    MISSING_MODEL = "缺少模型对象,无法检测主键字段类型"
    ACTION_NOT_MAPPED = "控制器动作未映射到 CRUD 动作"
    LISTENER_NOT_FOUND = "未注册的 CRUD 监听器"
    INVALID_FLASH_TYPE = "无效的 Flash 消息类型"


# Flash 默认文案,{name} 为资源名称
class FlashMessages:
    """CRUD 动作的默认 Flash 文案."""

    CREATE_SUCCESS = "{name} 创建成功"
    CREATE_ERROR = "{name} 创建失败"
    UPDATE_SUCCESS = "{name} 更新成功"
    UPDATE_ERROR = "{name} 更新失败"
    DELETE_SUCCESS = "{name} 删除成功"
    DELETE_ERROR = "{name} 删除失败"
    FIND_ERROR = "未找到指定的 {name}"
    INVALID_HTTP_REQUEST = "无效的 HTTP 请求"
    INVALID_ID = "无效的 ID"


# 导出所有常量
__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "FlashMessages",
]
