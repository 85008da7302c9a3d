"""删除动作."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from sqlalchemy.exc import SQLAlchemyError

from crudkit import db
from crudkit.constants import CrudEvents, HttpMethod
from crudkit.crud.action import DEFAULT_REDIRECT, CrudAction
from crudkit.crud.actions.form import METHOD_OVERRIDE_FIELD
from crudkit.utils.structlog_config import log_error, log_info, log_warning

if TYPE_CHECKING:
    from werkzeug.wrappers import Response


class DeleteCrudAction(CrudAction):
    """删除记录.

    默认只接受 DELETE 请求(含 ``_method=DELETE`` 的 POST);
    ``secure_delete`` 为 False 时普通 POST 也可删除.
    """

    default_settings: ClassVar[Mapping[str, Any]] = {
        **CrudAction.default_settings,
        "find_method": "first",
        "secure_delete": True,
    }

    def _is_delete_request(self) -> bool:
        method = self._request.method.upper()
        if method == HttpMethod.DELETE:
            return True
        if method != HttpMethod.POST:
            return False
        override = str(self._request_data().get(METHOD_OVERRIDE_FIELD) or "").upper()
        if override == HttpMethod.DELETE:
            return True
        return self.config("secure_delete") is False

    def _handle(self, id_: Any = None, *args: Any) -> Response:
        if id_ in (None, ""):
            id_ = self.get_id_from_request()

        valid = self.validate_id(id_)
        if valid is not True:
            return valid

        if not self._is_delete_request():
            log_warning("CRUD 删除请求方法无效", module="crud", method=self._request.method, resource_id=str(id_))
            subject = self._crud.create_subject({"id": id_})
            self.set_flash("invalid_http_request.error")
            return self._redirect(subject, self._controller.referer(dict(DEFAULT_REDIRECT)))

        item = self._find_record(id_)
        if item is None:
            return self._not_found(id_)

        subject = self._trigger(CrudEvents.BEFORE_DELETE, {"id": id_, "item": item})
        if subject.stopped:
            log_warning("CRUD 删除被监听器中止", module="crud", model=self._model_class, resource_id=str(id_))
            self.set_flash("delete.error")
            return self._redirect(subject, dict(DEFAULT_REDIRECT))

        success = False
        try:
            db.session.delete(item)
            db.session.commit()
            success = True
        except SQLAlchemyError as exc:
            db.session.rollback()
            log_error("CRUD 删除失败", module="crud", exception=exc, model=self._model_class)

        subject = self._trigger(CrudEvents.AFTER_DELETE, {"id": id_, "item": item, "success": success})
        if success:
            log_info("CRUD 删除成功", module="crud", model=self._model_class, id=str(id_))
            self.set_flash("delete.success")
        else:
            self.set_flash("delete.error")
        return self._redirect(subject, dict(DEFAULT_REDIRECT))
