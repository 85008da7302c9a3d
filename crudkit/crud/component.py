"""CRUD 组件.

挂在控制器上,维护动作映射与监听器,负责触发事件并把请求分派给对应的 CRUD 动作.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from crudkit.constants import CrudEvents
from crudkit.core.exceptions import ActionNotMappedError, ListenerNotFoundError
from crudkit.crud.events import DEFAULT_PRIORITY, CrudEvent, CrudEventManager
from crudkit.crud.listeners import TranslationsListener
from crudkit.crud.session import FlashSession
from crudkit.crud.subject import CrudSubject
from crudkit.utils.structlog_config import log_debug, log_warning

if TYPE_CHECKING:
    from crudkit.crud.action import CrudAction
    from crudkit.crud.controller import CrudController
    from crudkit.crud.listeners import CrudListener

ActionSpec = type["CrudAction"] | Mapping[str, Any]

DEFAULT_LISTENERS: Mapping[str, type[CrudListener]] = {
    "translations": TranslationsListener,
}


class CrudComponent:
    """控制器的 CRUD 分派组件.

    Attributes:
        session: flash 消息会话.
        events: 事件管理器.

    """

    def __init__(
        self,
        controller: CrudController,
        *,
        actions: Mapping[str, ActionSpec] | None = None,
        listeners: Mapping[str, type[CrudListener]] | None = None,
    ) -> None:
        self._controller = controller
        self._action_map: dict[str, dict[str, Any]] = {}
        self._action_instances: dict[str, CrudAction] = {}
        self._listener_map: dict[str, dict[str, Any]] = {}
        self._listener_instances: dict[str, CrudListener] = {}
        self.events = CrudEventManager()
        self.session = FlashSession()

        for name, spec in (actions or {}).items():
            if isinstance(spec, Mapping):
                self.map_action(name, spec["class"], spec.get("config"), enable=spec.get("enabled", True))
            else:
                self.map_action(name, spec)

        for name, listener_class in (listeners if listeners is not None else DEFAULT_LISTENERS).items():
            self.add_listener(name, listener_class)

    # ------------------------------------------------------------------ #
    # Action map
    # ------------------------------------------------------------------ #
    def map_action(
        self,
        action: str,
        action_class: type[CrudAction],
        config: Mapping[str, Any] | None = None,
        *,
        enable: bool = True,
    ) -> None:
        """把控制器动作映射到 CRUD 动作类.

        Args:
            action: 控制器动作名.
            action_class: CrudAction 子类.
            config: 动作的初始配置,覆盖类默认值.
            enable: 是否启用.

        """
        self._action_map[action] = {"class": action_class, "config": dict(config or {})}
        previous = self._action_instances.pop(action, None)
        if previous is not None:
            self.events.detach(previous)
        if not enable:
            self.action(action).disable()

    def is_action_mapped(self, action: str | None = None) -> bool:
        """判断动作是否已映射且处于启用状态."""
        name = action or self._controller.action
        if name not in self._action_map:
            return False
        return bool(self.action(name).config("enabled"))

    def mapped_actions(self) -> list[str]:
        return list(self._action_map)

    def action(self, name: str | None = None) -> CrudAction:
        """返回动作实例,首次访问时创建.

        Raises:
            ActionNotMappedError: 动作未映射时抛出.

        """
        name = name or self._controller.action
        if name not in self._action_map:
            raise ActionNotMappedError(extra={"action": name})
        if name not in self._action_instances:
            self._action_instances[name] = self._load_action(name)
        return self._action_instances[name]

    def _load_action(self, name: str) -> CrudAction:
        spec = self._action_map[name]
        instance = spec["class"](self.create_subject({"handle_action": name}))
        for key, value in spec["config"].items():
            instance.config(key, value)
        self.events.attach(instance)
        return instance

    def enable(self, *actions: str) -> None:
        for name in actions:
            self.action(name).enable()

    def disable(self, *actions: str) -> None:
        for name in actions:
            self.action(name).disable()

    def view(self, action: str, view: str | None = None) -> Any:
        return self.action(action).view(view)

    def find_method(self, action: str, method: str | None = None) -> Any:
        return self.action(action).find_method(method)

    # ------------------------------------------------------------------ #
    # Listeners
    # ------------------------------------------------------------------ #
    def add_listener(
        self,
        name: str,
        listener_class: type[CrudListener],
        config: Mapping[str, Any] | None = None,
    ) -> None:
        """注册监听器,实例在首次使用时创建."""
        self._listener_map[name] = {"class": listener_class, "config": dict(config or {})}
        previous = self._listener_instances.pop(name, None)
        if previous is not None:
            self.events.detach(previous)

    def has_listener(self, name: str) -> bool:
        return name in self._listener_map

    def get_listener(self, name: str) -> CrudListener:
        """返回监听器实例,首次访问时创建并挂载.

        Raises:
            ListenerNotFoundError: 监听器未注册时抛出.

        """
        if name not in self._listener_map:
            raise ListenerNotFoundError(extra={"listener": name})
        if name not in self._listener_instances:
            spec = self._listener_map[name]
            listener = spec["class"](self.create_subject(), spec["config"])
            self.events.attach(listener)
            self._listener_instances[name] = listener
        return self._listener_instances[name]

    def on(
        self,
        events: str | Iterable[str],
        callback: Callable[[CrudEvent], Any],
        priority: int = DEFAULT_PRIORITY,
    ) -> None:
        """订阅一个或多个事件,事件名可省略 ``crud.`` 前缀."""
        names = [events] if isinstance(events, str) else list(events)
        for name in names:
            self.events.on(CrudEvents.qualify(name), callback, priority)

    # ------------------------------------------------------------------ #
    # Events
    # ------------------------------------------------------------------ #
    def create_subject(self, data: Mapping[str, Any] | None = None) -> CrudSubject:
        """构造带公共字段的事件主体."""
        controller = self._controller
        subject = CrudSubject(
            {
                "crud": self,
                "controller": controller,
                "collection": controller.components,
                "request": controller.request,
                "model": controller.model,
                "model_class": controller.model_class,
                "action": controller.action,
                "args": [],
            }
        )
        if data:
            subject.set(data)
        return subject

    def trigger(self, name: str, data: Mapping[str, Any] | CrudSubject | None = None) -> CrudSubject:
        """触发事件并返回(可能被监听器修改过的)主体.

        Args:
            name: 事件名,可省略 ``crud.`` 前缀.
            data: 主体字段或现成的主体.

        Returns:
            事件主体,事件被中止时 ``stopped`` 为 True.

        """
        subject = data if isinstance(data, CrudSubject) else self.create_subject(data)
        event = self.events.dispatch(CrudEvent(CrudEvents.qualify(name), subject))
        subject.stopped = event.is_stopped
        return subject

    def execute(self, action: str | None = None, args: Iterable[Any] = ()) -> Any:
        """把当前请求分派给映射的 CRUD 动作.

        Args:
            action: 控制器动作名,缺省为控制器当前动作.
            args: 传给动作 ``_handle`` 的位置参数.

        Returns:
            动作的响应,全部动作都让出时返回 None.

        Raises:
            ActionNotMappedError: 动作未映射时抛出.

        """
        action = action or self._controller.action
        if action not in self._action_map:
            raise ActionNotMappedError(extra={"action": action, "controller": type(self._controller).__name__})

        for name in self._listener_map:
            self.get_listener(name)
        for name in self._action_map:
            self.action(name)

        self.trigger(CrudEvents.INITIALIZE, {"action": action})
        subject = self.trigger(CrudEvents.BEFORE_HANDLE, {"action": action, "args": list(args)})

        event = self.events.dispatch(CrudEvent(CrudEvents.HANDLE, subject))
        if event.result is None:
            log_warning("CRUD 动作未被处理", module="crud", action=subject.action)
            return None

        log_debug("CRUD 动作处理完成", module="crud", action=subject.action)
        return event.result
