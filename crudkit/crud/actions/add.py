"""新增动作."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from crudkit.crud.actions.form import FormCrudAction

if TYPE_CHECKING:
    from werkzeug.wrappers import Response


class AddCrudAction(FormCrudAction):
    """GET 展示新增表单,POST 创建记录."""

    def _handle(self, *args: Any) -> Response:
        if not self._is_write_request():
            return self._render_form(None)
        return self._save(self._model(), "create")
