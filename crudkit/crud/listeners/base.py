"""CRUD 监听器基类."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from crudkit.crud.config import ConfigurableMixin

if TYPE_CHECKING:
    from crudkit.crud.subject import CrudSubject


class CrudListener(ConfigurableMixin):
    """可配置的事件监听器.

    子类通过 ``implemented_events`` 声明订阅的事件.
    """

    def __init__(self, subject: CrudSubject, settings: Mapping[str, Any] | None = None) -> None:
        self._crud = subject.crud
        self._controller = subject.controller
        self._init_settings()
        for key, value in (settings or {}).items():
            self.config(key, value)

    def implemented_events(self) -> Mapping[str, Any]:
        return {}
