"""详情动作."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from crudkit.constants import CrudEvents
from crudkit.crud.action import CrudAction

if TYPE_CHECKING:
    from werkzeug.wrappers import Response


class ViewCrudAction(CrudAction):
    """展示单条资源,视图变量为模型的单数形式(如 ``article``)."""

    default_settings: ClassVar[Mapping[str, Any]] = {
        **CrudAction.default_settings,
        "find_method": "first",
    }

    def _handle(self, id_: Any = None, *args: Any) -> Response:
        if id_ in (None, ""):
            id_ = self.get_id_from_request()

        valid = self.validate_id(id_)
        if valid is not True:
            return valid

        item = self._find_record(id_)
        if item is None:
            return self._not_found(id_)

        subject = self._trigger(CrudEvents.AFTER_FIND, {"id": id_, "item": item})
        self._controller.set(self._view_var(), subject.item)
        return self._render()
