"""新增/编辑动作的公共保存流程."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError

from crudkit import db
from crudkit.constants import CrudEvents, HttpMethod
from crudkit.core.exceptions import ValidationError
from crudkit.crud.action import DEFAULT_REDIRECT, CrudAction
from crudkit.utils.schema_introspection import column_names, primary_key_value
from crudkit.utils.structlog_config import log_error, log_info, log_warning

if TYPE_CHECKING:
    from werkzeug.wrappers import Response

    from crudkit.crud.subject import CrudSubject

# 提交后跳转到新增页 / 编辑页的表单字段
ADD_ANOTHER_FIELD = "_add"
EDIT_AGAIN_FIELD = "_edit"
METHOD_OVERRIDE_FIELD = "_method"


def _error_fields(errors: list[dict[str, Any]]) -> list[str]:
    return [".".join(str(part) for part in error["loc"]) for error in errors]


class FormCrudAction(CrudAction):
    """带表单保存流程的动作基类.

    ``save_options`` 支持:
    - ``fields``: 允许写入的字段白名单,缺省为除主键外的全部列.
    - ``schema``: pydantic 模型,用于校验并转换请求数据.

    JSON 请求校验失败时抛出 ``ValidationError``,由应用错误处理器返回 400.
    """

    def _request_method(self) -> str:
        method = self._request.method.upper()
        if method == HttpMethod.POST:
            override = str(self._request_data().get(METHOD_OVERRIDE_FIELD) or "").upper()
            if override in HttpMethod.OVERRIDABLE:
                return override
        return method

    def _is_write_request(self) -> bool:
        return HttpMethod.is_write(self._request_method())

    def _allowed_fields(self, options: Mapping[str, Any]) -> list[str]:
        fields = options.get("fields")
        if fields:
            return list(fields)
        return column_names(self._model, include_primary_key=False)

    def _prepare_data(self, payload: Mapping[str, Any], options: Mapping[str, Any]) -> dict[str, Any]:
        """按白名单过滤请求数据,配置了 schema 时先经 pydantic 校验.

        Raises:
            pydantic.ValidationError: schema 校验失败时抛出.

        """
        allowed = self._allowed_fields(options)
        data = {key: payload[key] for key in allowed if key in payload}

        schema = options.get("schema")
        if isinstance(schema, type) and issubclass(schema, BaseModel):
            validated = schema.model_validate(data)
            data = {key: value for key, value in validated.model_dump(exclude_unset=True).items() if key in allowed}
        return data

    def _save(self, item: Any, operation: str) -> Response:
        """保存记录并生成响应.

        Args:
            item: 待保存的模型实例.
            operation: ``create`` 或 ``update``,决定 flash 类型.

        Returns:
            成功时重定向,失败时重新渲染表单.

        """
        payload = self._request_data()
        options = dict(self.save_options() or {})
        created = operation == "create"

        subject = self._trigger(CrudEvents.BEFORE_SAVE, {"item": item, "data": payload, "save_options": options})
        errors: Any = None
        success = False
        if subject.stopped:
            log_warning("CRUD 保存被监听器中止", module="crud", model=self._model_class, operation=operation)
        else:
            try:
                for key, value in self._prepare_data(subject.data, subject.save_options).items():
                    setattr(item, key, value)
                if created:
                    db.session.add(item)
                db.session.commit()
                success = True
            except SchemaValidationError as exc:
                db.session.rollback()
                errors = exc.errors(include_url=False)
                log_warning("CRUD 数据校验失败", module="crud", model=self._model_class, errors=len(errors))
            except SQLAlchemyError as exc:
                db.session.rollback()
                log_error("CRUD 保存失败", module="crud", exception=exc, model=self._model_class)

        record_id = primary_key_value(item) if success else None
        subject = self._trigger(
            CrudEvents.AFTER_SAVE,
            {"success": success, "created": created, "id": record_id, "item": item},
        )

        if errors is not None and getattr(self._request, "is_json", False):
            raise ValidationError(extra={"model": self._model_class, "errors": _error_fields(errors)})

        if success:
            log_info("CRUD 保存成功", module="crud", model=self._model_class, operation=operation, id=str(record_id))
            self.set_flash(f"{operation}.success")
            return self._redirect(subject, self._success_redirect(record_id, payload))

        self.set_flash(f"{operation}.error")
        self._controller.set("errors", errors)
        self._controller.set("form_data", payload)
        self._controller.set(self._view_var(), item)
        return self._render()

    def _success_redirect(self, record_id: Any, payload: Mapping[str, Any]) -> dict[str, Any]:
        if payload.get(ADD_ANOTHER_FIELD):
            return {"action": "add"}
        if payload.get(EDIT_AGAIN_FIELD):
            return {"action": "edit", "id": record_id}
        return dict(DEFAULT_REDIRECT)

    def _render_form(self, item: Any) -> Response:
        self._controller.set(self._view_var(), item)
        self._controller.set("errors", None)
        self._controller.set("form_data", None)
        return self._render()
