"""Flash 文案监听器.

监听 ``crud.set_flash``,按消息类型(如 ``create.success``)填充文案、样式与分组键.
文案中的 ``{name}`` 替换为资源名称,可通过配置覆盖任意类型的文案.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from crudkit.constants import CrudEvents, FlashCategory, FlashMessages
from crudkit.core.exceptions import InvalidFlashTypeError
from crudkit.crud.listeners.base import CrudListener

if TYPE_CHECKING:
    from crudkit.crud.events import CrudEvent


def _message(text: str, element: str) -> dict[str, Any]:
    return {"message": text, "element": element, "params": {}}


class TranslationsListener(CrudListener):
    """为 CRUD flash 消息提供默认文案."""

    default_settings: ClassVar[Mapping[str, Any]] = {
        "name": None,
        "key": None,
        "create": {
            "success": _message(FlashMessages.CREATE_SUCCESS, FlashCategory.SUCCESS),
            "error": _message(FlashMessages.CREATE_ERROR, FlashCategory.ERROR),
        },
        "update": {
            "success": _message(FlashMessages.UPDATE_SUCCESS, FlashCategory.SUCCESS),
            "error": _message(FlashMessages.UPDATE_ERROR, FlashCategory.ERROR),
        },
        "delete": {
            "success": _message(FlashMessages.DELETE_SUCCESS, FlashCategory.SUCCESS),
            "error": _message(FlashMessages.DELETE_ERROR, FlashCategory.ERROR),
        },
        "find": {
            "error": _message(FlashMessages.FIND_ERROR, FlashCategory.ERROR),
        },
        "invalid_http_request": {
            "error": _message(FlashMessages.INVALID_HTTP_REQUEST, FlashCategory.ERROR),
        },
        "invalid_id": {
            "error": _message(FlashMessages.INVALID_ID, FlashCategory.ERROR),
        },
    }

    def implemented_events(self) -> Mapping[str, Any]:
        return {CrudEvents.SET_FLASH: {"callable": "set_flash", "priority": 5}}

    def set_flash(self, event: CrudEvent) -> None:
        """填充 flash 主体中尚未设置的字段.

        Args:
            event: ``crud.set_flash`` 事件.

        Raises:
            InvalidFlashTypeError: 消息类型没有对应配置时抛出.

        """
        subject = event.subject
        if subject.get("message"):
            return

        flash_type = subject.get("type")
        settings = self.config(flash_type) if flash_type else None
        if not isinstance(settings, Mapping) or "message" not in settings:
            raise InvalidFlashTypeError(extra={"type": flash_type})

        name = self.config("name") or subject.get("name") or ""
        subject.message = str(settings["message"]).format(name=name)
        subject.element = subject.get("element") or settings.get("element")
        subject.params = {**dict(settings.get("params") or {}), **dict(subject.get("params") or {})}
        subject.key = subject.get("key") or settings.get("key") or self.config("key")
