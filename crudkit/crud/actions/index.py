"""列表动作."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from flask import current_app

from crudkit import db
from crudkit.constants import CrudEvents
from crudkit.crud.action import CrudAction
from crudkit.settings import DEFAULT_CRUD_MAX_PAGE_SIZE, DEFAULT_CRUD_PAGE_SIZE

if TYPE_CHECKING:
    from werkzeug.wrappers import Response


class IndexCrudAction(CrudAction):
    """分页列出资源.

    视图变量: ``<模型复数>``(如 ``articles``) 与 ``pagination``.
    """

    default_settings: ClassVar[Mapping[str, Any]] = {
        **CrudAction.default_settings,
        "find_method": "all",
        "page_size": None,
    }

    def _page_size(self) -> int:
        default = int(current_app.config.get("CRUD_PAGE_SIZE", DEFAULT_CRUD_PAGE_SIZE))
        maximum = int(current_app.config.get("CRUD_MAX_PAGE_SIZE", DEFAULT_CRUD_MAX_PAGE_SIZE))
        requested = self._request.args.get("per_page", type=int)
        size = requested or self.config("page_size") or default
        return max(1, min(int(size), maximum))

    def _handle(self, *args: Any) -> Response:
        statement = self._find_statement(self._get_find_method("all"))
        page = self._request.args.get("page", 1, type=int) or 1

        subject = self._trigger(
            CrudEvents.BEFORE_PAGINATE,
            {"query": statement, "page": max(page, 1), "page_size": self._page_size()},
        )
        pagination = db.paginate(
            subject.query,
            page=subject.page,
            per_page=subject.page_size,
            error_out=False,
        )

        subject = self._trigger(CrudEvents.AFTER_PAGINATE, {"items": pagination.items, "pagination": pagination})
        self._controller.set(self._view_var(plural=True), subject.items)
        self._controller.set("pagination", subject.pagination)
        return self._render()
