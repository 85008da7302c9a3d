"""CRUD 动作基类.

每个具体动作(index/view/add/edit/delete)继承 ``CrudAction``.
CrudComponent 对每次控制器请求触发 ``crud.handle`` 事件,
各动作实例只处理 ``handle_action`` 与当前动作名一致的请求,其余返回 None 让出.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from sqlalchemy import Select, select

from crudkit import db
from crudkit.constants import CrudEvents
from crudkit.core.exceptions import MissingModelError
from crudkit.crud.config import ConfigurableMixin
from crudkit.utils.id_validation import is_numeric, is_uuid
from crudkit.utils.inflector import humanize, variable_name
from crudkit.utils.redirect_safety import resolve_safe_redirect_target
from crudkit.utils.schema_introspection import (
    UUID_STRING_LENGTH,
    coerce_primary_key,
    primary_key_column,
    primary_key_field_info,
)
from crudkit.utils.structlog_config import log_debug, log_warning

if TYPE_CHECKING:
    from flask import Request
    from werkzeug.wrappers import Response

    from crudkit.crud.component import CrudComponent
    from crudkit.crud.controller import CrudController
    from crudkit.crud.events import CrudEvent
    from crudkit.crud.subject import CrudSubject

REDIRECT_URL_FIELD = "redirect_url"
DEFAULT_REDIRECT: Mapping[str, str] = {"action": "index"}


class CrudAction(ConfigurableMixin, ABC):
    """CRUD 动作基类.

    Attributes:
        default_settings: 类级默认配置,子类按需扩展.

    """

    default_settings: ClassVar[Mapping[str, Any]] = {
        "enabled": True,
        "find_method": None,
        "save_options": {},
        "view": None,
        "view_var": None,
        "validate_id": None,
        "name": None,
    }

    def __init__(self, subject: CrudSubject) -> None:
        self._crud: CrudComponent = subject.crud
        self._request: Request = subject.request
        self._collection = subject.get("collection")
        self._controller: CrudController = subject.controller
        self._model: type[Any] | None = None
        self._model_class: str | None = None
        self._init_settings()

        # 只处理被分配的动作
        self.config("handle_action", subject.handle_action)

    def implemented_events(self) -> dict[str, str]:
        return {CrudEvents.HANDLE: "handle"}

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #
    def handle(self, event: CrudEvent) -> Any:
        """处理 ``crud.handle`` 事件.

        禁用或动作名不匹配时返回 None,把请求让给其他动作.

        Args:
            event: CRUD 事件,主体上带有 action/model/model_class/args.

        Returns:
            ``_handle`` 的返回值,未处理时为 None.

        """
        if not self.config("enabled"):
            return None

        if event.subject.action != self.config("handle_action"):
            return None

        self._model = event.subject.model
        self._model_class = event.subject.model_class
        event.stop_propagation()

        log_debug(
            "CRUD 动作开始处理",
            module="crud",
            action=self.config("handle_action"),
            model=self._model_class,
        )
        return self._handle(*event.subject.args)

    @abstractmethod
    def _handle(self, *args: Any) -> Any:
        """具体动作的业务处理."""

    # ------------------------------------------------------------------ #
    # Settings accessors
    # ------------------------------------------------------------------ #
    def disable(self) -> bool:
        """禁用动作."""
        self.config("enabled", False)
        return False

    def enable(self) -> bool:
        """启用动作."""
        self.config("enabled", True)
        return True

    def find_method(self, method: str | None = None) -> Any:
        """读取或修改查询方法.

        Args:
            method: 为空时返回当前值,否则写入.

        Returns:
            当前查询方法,或写入后的 self.

        """
        if not method:
            return self.config("find_method")
        return self.config("find_method", method)

    def save_options(self, options: Mapping[str, Any] | None = None) -> Any:
        """读取或修改保存选项(字段白名单 ``fields``、校验 schema ``schema``)."""
        if not options:
            return self.config("save_options")
        return self.config("save_options", options)

    def view(self, view: str | None = None) -> Any:
        """读取或修改渲染的视图,未配置时使用 ``handle_action``."""
        if not view:
            return self.config("view") or self.config("handle_action")
        return self.config("view", view)

    def resource_name(self, name: str | None = None) -> Any:
        """读取或修改资源名称.

        未配置时由模型类名生成可读名称并写回配置.

        Args:
            name: 为空时读取,否则写入.

        Returns:
            资源名称,或写入后的 self.

        """
        if name:
            return self.config("name", name)
        if not self.config("name"):
            self.config("name", humanize(self._model_class or ""))
        return self.config("name")

    def _get_find_method(self, default: str | None = None) -> str | None:
        find_method = self.find_method()
        if find_method:
            return find_method
        return default

    def _view_var(self, *, plural: bool = False) -> str:
        configured = self.config("view_var")
        if configured:
            return configured
        return variable_name(self._model_class or "item", plural=plural)

    # ------------------------------------------------------------------ #
    # Request helpers
    # ------------------------------------------------------------------ #
    def get_id_from_request(self) -> Any:
        """返回第一个路由位置参数,没有时返回 None."""
        args = list((self._request.view_args or {}).values())
        if not args or args[0] in (None, ""):
            return None
        return args[0]

    def _request_data(self) -> Mapping[str, Any]:
        if getattr(self._request, "is_json", False):
            payload = self._request.get_json(silent=True)
            return payload if isinstance(payload, Mapping) else {}
        return self._request.form

    # ------------------------------------------------------------------ #
    # ID validation
    # ------------------------------------------------------------------ #
    def validate_id(self, id_: Any) -> Any:
        """校验请求中的资源 ID.

        校验类型优先取 ``validate_id`` 配置,否则按主键字段类型自动探测;
        无法确定类型时视为有效.

        Args:
            id_: 待校验的 ID.

        Returns:
            有效时返回 True,无效时返回重定向响应(调用方应直接返回).

        """
        id_type = self.config("validate_id")
        if not id_type:
            id_type = self._detect_primary_key_field_type()

        if not id_type:
            return True
        if id_type == "uuid":
            valid = is_uuid(id_)
        else:
            valid = is_numeric(id_)

        if valid:
            return True

        log_warning(
            "CRUD 请求 ID 校验失败",
            module="crud",
            action=self.config("handle_action"),
            id_type=id_type,
            resource_id=str(id_),
        )
        subject = self._trigger(CrudEvents.INVALID_ID, {"id": id_})
        self.set_flash("invalid_id.error")
        return self._redirect(subject, self._controller.referer())

    def _detect_primary_key_field_type(self) -> str | bool:
        """按主键字段元数据推断 ID 校验类型.

        长度为 36 的字符串/二进制列或原生 UUID 列视为 uuid,整数列视为 integer,
        其余无法可靠判断,返回 False.

        Raises:
            MissingModelError: 尚未绑定模型时抛出.

        """
        if self._model is None:
            raise MissingModelError(extra={"action": self.config("handle_action")})

        field_info = primary_key_field_info(self._model)
        if not field_info:
            return False

        if field_info["type"] == "uuid":
            return "uuid"

        if field_info["length"] == UUID_STRING_LENGTH and field_info["type"] in ("string", "binary"):
            return "uuid"

        if field_info["type"] == "integer":
            return "integer"

        return False

    # ------------------------------------------------------------------ #
    # Persistence helpers
    # ------------------------------------------------------------------ #
    def _find_statement(self, method: str | None) -> Select[Any]:
        """构造查询语句,模型定义 ``find_<method>`` 类方法时由其细化."""
        statement = select(self._model)
        finder = getattr(self._model, f"find_{method}", None) if method else None
        if callable(finder):
            statement = finder(statement)
        return statement

    def _find_record(self, id_: Any, default_method: str = "first") -> Any:
        column = primary_key_column(self._model)
        key = coerce_primary_key(self._model, id_)
        if key is None:
            return None
        statement = self._find_statement(self._get_find_method(default_method))
        statement = statement.where(column == key)

        subject = self._trigger(CrudEvents.BEFORE_FIND, {"id": id_, "query": statement})
        return db.session.execute(subject.query).scalars().first()

    def _not_found(self, id_: Any) -> Response:
        log_warning("CRUD 记录不存在", module="crud", model=self._model_class, resource_id=str(id_))
        subject = self._trigger(CrudEvents.RECORD_NOT_FOUND, {"id": id_})
        self.set_flash("find.error")
        return self._redirect(subject, dict(DEFAULT_REDIRECT))

    # ------------------------------------------------------------------ #
    # Response helpers
    # ------------------------------------------------------------------ #
    def _trigger(self, name: str, data: Mapping[str, Any] | CrudSubject | None = None) -> CrudSubject:
        return self._crud.trigger(name, data)

    def _render(self) -> Response:
        subject = self._trigger(CrudEvents.BEFORE_RENDER, {"view": self.view()})
        return self._controller.render(subject.view)

    def _redirect_override(self) -> str | None:
        candidates = (
            self._request_data().get(REDIRECT_URL_FIELD),
            self._request.args.get(REDIRECT_URL_FIELD),
        )
        for candidate in candidates:
            if not candidate:
                continue
            target = resolve_safe_redirect_target(str(candidate), fallback="")
            if target:
                return target
            log_warning("忽略不安全的重定向目标", module="crud", redirect_url=str(candidate))
        return None

    def _redirect(self, subject: CrudSubject, url: Any = None) -> Response:
        """执行 CRUD 内的所有重定向.

        目标优先级: 请求体 ``redirect_url`` > 查询参数 ``redirect_url`` > ``url`` > index.
        ``crud.before_redirect`` 监听器可改写 ``subject.url``.

        Args:
            subject: 当前事件主体.
            url: 默认重定向目标,字符串或 ``{"action": ...}`` 字典.

        Returns:
            控制器生成的重定向响应.

        """
        override = self._redirect_override()
        if override:
            url = override
        elif not url:
            url = dict(DEFAULT_REDIRECT)

        subject.url = url
        subject = self._trigger(CrudEvents.BEFORE_REDIRECT, subject)

        self._controller.redirect(subject.url)
        return self._controller.response

    def set_flash(self, flash_type: str) -> None:
        """写入 flash 消息.

        文案由 ``crud.set_flash`` 监听器(默认 TranslationsListener)填充.

        Args:
            flash_type: 消息类型,如 ``create.success``、``invalid_id.error``.

        """
        name = self.resource_name()
        if self._crud.has_listener("translations"):
            self._crud.get_listener("translations")

        subject = self._trigger(
            CrudEvents.SET_FLASH,
            {
                "message": None,
                "element": None,
                "params": {},
                "key": None,
                "type": flash_type,
                "name": name,
            },
        )
        self._crud.session.set_flash(subject.message, subject.element, subject.params, subject.key)
