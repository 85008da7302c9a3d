"""编辑动作."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from crudkit.constants import CrudEvents
from crudkit.crud.action import CrudAction
from crudkit.crud.actions.form import FormCrudAction

if TYPE_CHECKING:
    from werkzeug.wrappers import Response


class EditCrudAction(FormCrudAction):
    """GET 展示编辑表单,POST/PUT/PATCH 更新记录."""

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

        if self._is_write_request():
            return self._save(item, "update")

        subject = self._trigger(CrudEvents.AFTER_FIND, {"id": id_, "item": item})
        return self._render_form(subject.item)
