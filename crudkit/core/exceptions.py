"""crudkit - 统一异常定义(Shared Kernel).

说明:
- 本模块只负责定义异常类型与语义字段,不包含 HTTP/Flask/Werkzeug 等框架细节.
- 异常到 HTTP status 的映射在应用工厂的错误处理器中完成(见 `crudkit/__init__.py`).
- 预期内的失败(无效 ID、记录不存在、保存失败)不抛异常,由动作通过 Flash + 重定向处理.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from crudkit.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息(不包含传输层信息)."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础业务异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: dict[str, Any] | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        """初始化基础业务异常.

        Args:
            message: 直接使用的错误提示,缺省时会根据 message_key 推导.
            message_key: 覆盖默认 message_key 的可选值.
            extra: 结构化日志附加字段.
            severity: 错误严重度.
            category: 错误分类.
        """
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""

        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """表示输入参数或请求体验证失败."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )


class MissingModelError(AppError):
    """表示动作在未绑定模型时尝试读取主键元数据,属于不可恢复的编程错误."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.CRITICAL,
        default_message_key="MISSING_MODEL",
    )


class ActionNotMappedError(AppError):
    """表示控制器请求的动作没有映射到任何 CRUD 动作."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.HIGH,
        default_message_key="ACTION_NOT_MAPPED",
    )


class ListenerNotFoundError(AppError):
    """表示按名称获取的监听器未注册."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.HIGH,
        default_message_key="LISTENER_NOT_FOUND",
    )


class InvalidFlashTypeError(AppError):
    """表示 Flash 消息类型没有对应的文案配置."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.CONFIGURATION,
        severity=ErrorSeverity.HIGH,
        default_message_key="INVALID_FLASH_TYPE",
    )


__all__ = [
    "ActionNotMappedError",
    "AppError",
    "ExceptionMetadata",
    "InvalidFlashTypeError",
    "ListenerNotFoundError",
    "MissingModelError",
    "ValidationError",
]
