"""crudkit 的结构化日志配置与辅助函数."""

from __future__ import annotations

import re
import sys
from typing import TYPE_CHECKING, Any, cast
from uuid import uuid4

import structlog
from flask import Flask, current_app, has_request_context, request

from crudkit.settings import APP_VERSION

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, EventDict, Processor

_REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.:-]{0,127}$")


class DebugFilter:
    """按开关丢弃 debug 级别事件的 structlog 处理器."""

    def __init__(self, *, enabled: bool = False) -> None:
        self.enabled = enabled

    def set_enabled(self, *, enabled: bool) -> None:
        self.enabled = enabled

    def __call__(self, _logger: BindableLogger, method_name: str, event_dict: EventDict) -> EventDict:
        if method_name == "debug" and not self.enabled:
            raise structlog.DropEvent
        return event_dict


class StructlogConfig:
    """structlog 配置核心类.

    负责配置 structlog 处理器链,并在绑定 Flask 应用后根据配置开关调试日志.

    Attributes:
        debug_filter: 调试日志过滤器.
        configured: 是否已配置标志.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure(app)
        >>> logger = get_logger('crud')

    """

    def __init__(self) -> None:
        self.debug_filter = DebugFilter(enabled=False)
        self.configured = False

    def configure(self, app: Flask | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            app: Flask 应用实例,可选.如果提供,将根据 ENABLE_DEBUG_LOG 开关调试日志.

        """
        if not self.configured:
            processors = [
                structlog.contextvars.merge_contextvars,
                self.debug_filter,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                self._add_request_context,
                self._add_global_context,
                self._get_console_renderer(),
            ]
            structlog.configure(
                processors=cast("list[Processor]", processors),
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )
            self.configured = True

        if app is not None:
            enable_debug = bool(app.config.get("ENABLE_DEBUG_LOG", False))
            self.debug_filter.set_enabled(enabled=enable_debug)

    @staticmethod
    def _add_request_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """向事件字典写入请求上下文.

        Returns:
            包含 method/path/endpoint 的事件字典.

        """
        if has_request_context():
            event_dict.setdefault("method", request.method)
            event_dict.setdefault("path", request.path)
            event_dict.setdefault("endpoint", request.endpoint)
        return event_dict

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """附加应用名、版本等全局上下文."""
        try:
            event_dict["app_name"] = current_app.config.get("APP_NAME", "crudkit")
            event_dict["app_version"] = current_app.config.get("APP_VERSION", APP_VERSION)
        except RuntimeError:
            event_dict["app_name"] = "crudkit"
            event_dict["app_version"] = APP_VERSION

        event_dict["logger_name"] = getattr(_logger, "name", "unknown")
        return event_dict

    @staticmethod
    def _get_console_renderer() -> Processor:
        """根据终端能力返回渲染器."""
        return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


structlog_config = StructlogConfig()


def _resolve_request_id() -> str:
    incoming = (request.headers.get(_REQUEST_ID_HEADER) or "").strip()
    if incoming and _REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return f"req_{uuid4().hex}"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    Example:
        >>> logger = get_logger('crud')
        >>> logger.info('动作已处理', action='edit')

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def configure_structlog(app: Flask) -> None:
    """配置 structlog 并注册请求级上下文绑定钩子.

    Args:
        app: Flask 应用实例.

    """
    structlog_config.configure(app)

    @app.before_request
    def _bind_request_id() -> None:
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=_resolve_request_id())

    @app.teardown_request
    def _unbind_request_id(exception: BaseException | None) -> None:
        if exception:
            get_logger("crudkit").error("请求处理异常", module="system", exception=str(exception))
        structlog.contextvars.clear_contextvars()


def should_log_debug() -> bool:
    """检查是否应该记录调试日志.

    Returns:
        如果启用调试日志返回 True,否则返回 False.

    """
    try:
        return bool(current_app.config.get("ENABLE_DEBUG_LOG", False))
    except RuntimeError:
        return False


def log_info(message: str, module: str = "crud", **kwargs: Any) -> None:
    """记录信息级别日志.

    Example:
        >>> log_info('记录已创建', module='crud', model='Article')

    """
    get_logger("crudkit").info(message, module=module, **kwargs)


def log_warning(
    message: str,
    module: str = "crud",
    exception: Exception | None = None,
    **kwargs: Any,
) -> None:
    """记录警告级别日志.

    Args:
        message: 日志消息.
        module: 模块名称,默认为 'crud'.
        exception: 可选的异常对象.
        **kwargs: 额外的上下文信息.

    """
    logger = get_logger("crudkit")
    if exception:
        logger.warning(message, module=module, exception=str(exception), **kwargs)
    else:
        logger.warning(message, module=module, **kwargs)


def log_error(
    message: str,
    module: str = "crud",
    exception: Exception | None = None,
    **kwargs: Any,
) -> None:
    """记录错误级别日志.

    Args:
        message: 日志消息.
        module: 模块名称,默认为 'crud'.
        exception: 可选的异常对象,会记录堆栈信息.
        **kwargs: 额外的上下文信息.

    Example:
        >>> try:
        ...     db.session.commit()
        ... except SQLAlchemyError as e:
        ...     log_error('保存失败', module='crud', exception=e)

    """
    logger = get_logger("crudkit")
    if exception:
        logger.exception(message, module=module, error=str(exception), **kwargs)
    else:
        logger.error(message, module=module, **kwargs)


def log_debug(message: str, module: str = "crud", **kwargs: Any) -> None:
    """记录调试级别日志.

    仅在启用调试日志时记录.

    """
    if not should_log_debug():
        return
    get_logger("crudkit").debug(message, module=module, **kwargs)
