"""crudkit - Flask 应用初始化.

基于 Flask 与 SQLAlchemy 的可配置 CRUD 动作框架.
"""

import logging
from pathlib import Path

from flask import Flask, jsonify, request
from flask.typing import ResponseReturnValue
from flask_sqlalchemy import SQLAlchemy

from crudkit.constants import HttpStatus
from crudkit.core.exceptions import AppError
from crudkit.settings import Settings
from crudkit.utils.structlog_config import configure_structlog, log_error

# 初始化扩展
db = SQLAlchemy()


def create_app(
    *,
    settings: Settings | None = None,
    template_folder: str | Path | None = None,
) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.
        template_folder: 可选的模板目录,缺省使用 Flask 默认的 ``templates``.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__, template_folder=str(template_folder) if template_folder else "templates")

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    db.init_app(app)

    # 配置统一日志系统
    configure_structlog(app)

    # 设置全局日志级别
    log_level_name = str(app.config.get("LOG_LEVEL", "INFO"))
    logging.getLogger().setLevel(getattr(logging, log_level_name, logging.INFO))

    configure_error_handlers(app)
    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.config.setdefault("APPLICATION_ROOT", "/")


def configure_error_handlers(app: Flask) -> None:
    """注册 AppError 的统一错误处理器.

    可恢复的错误返回 400 并附带 ``extra`` 字段,其余返回 500.

    """

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError) -> ResponseReturnValue:
        status_code = HttpStatus.BAD_REQUEST if error.recoverable else HttpStatus.INTERNAL_SERVER_ERROR
        log_error(
            "应用异常",
            module="system",
            exception=error,
            category=error.category.value,
            severity=error.severity.value,
            path=request.path,
            **error.extra,
        )
        payload = {
            "error": True,
            "message": error.message,
            "message_key": error.message_key,
            "category": error.category.value,
            "severity": error.severity.value,
        }
        if error.recoverable and error.extra:
            payload.update(error.extra)
        return jsonify(payload), int(status_code)


__all__ = ["configure_app", "create_app", "db"]
