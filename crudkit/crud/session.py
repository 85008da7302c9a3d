"""Flash 消息会话适配.

把 CRUD 的 (message, element, params, key) 四元组写入 Flask 的 flash 会话.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import current_app, flash

from crudkit.constants import FlashCategory
from crudkit.settings import DEFAULT_CRUD_FLASH_KEY
from crudkit.utils.structlog_config import log_debug


class FlashSession:
    """Flask flash 的薄封装."""

    def default_key(self) -> str:
        try:
            return str(current_app.config.get("CRUD_FLASH_KEY", DEFAULT_CRUD_FLASH_KEY))
        except RuntimeError:
            return DEFAULT_CRUD_FLASH_KEY

    def resolve_category(
        self,
        element: str | None = None,
        params: Mapping[str, Any] | None = None,
        key: str | None = None,
    ) -> str:
        """计算 flash 类别.

        类别优先取 ``params["class"]``,其次 ``element``,缺省为 info;
        ``key`` 非默认值时作为类别前缀,形如 ``auth.error``.

        Args:
            element: 消息元素(样式)名.
            params: 附加参数.
            key: 消息分组键.

        Returns:
            str: 写入 flash 的类别.

        """
        category = FlashCategory.normalize((params or {}).get("class") or element)
        if key and key != self.default_key():
            return f"{key}.{category}"
        return category

    def set_flash(
        self,
        message: str | None,
        element: str | None = None,
        params: Mapping[str, Any] | None = None,
        key: str | None = None,
    ) -> None:
        """写入一条 flash 消息,消息为空时跳过."""
        if not message:
            log_debug("Flash 消息为空,跳过写入", module="crud", element=element, key=key)
            return
        flash(message, self.resolve_category(element, params, key))
