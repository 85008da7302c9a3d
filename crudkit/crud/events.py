"""CRUD 事件管理.

组件内部的轻量事件总线: 回调按优先级升序执行(同优先级保持注册顺序),
返回 ``False`` 中止传播,返回其他非 ``None`` 值写入 ``event.result``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Protocol

from crudkit.crud.subject import CrudSubject

DEFAULT_PRIORITY = 10

EventCallback = Callable[["CrudEvent"], Any]


class EventListener(Protocol):
    """可挂载到事件管理器的监听器协议."""

    def implemented_events(self) -> Mapping[str, Any]:
        """返回事件名到回调配置的映射."""
        ...


@dataclass
class CrudEvent:
    """一次事件分发."""

    name: str
    subject: CrudSubject
    result: Any = None
    _stopped: bool = field(default=False, repr=False)

    def stop_propagation(self) -> None:
        self._stopped = True

    @property
    def is_stopped(self) -> bool:
        return self._stopped


@dataclass(order=True)
class _Registration:
    priority: int
    sequence: int
    callback: EventCallback = field(compare=False)
    owner: object | None = field(default=None, compare=False)


class CrudEventManager:
    """事件名到回调列表的注册表."""

    def __init__(self) -> None:
        self._registrations: dict[str, list[_Registration]] = {}
        self._sequence = count()

    def on(
        self,
        name: str,
        callback: EventCallback,
        priority: int = DEFAULT_PRIORITY,
        *,
        owner: object | None = None,
    ) -> None:
        """注册回调.

        Args:
            name: 事件名.
            callback: 接收 ``CrudEvent`` 的可调用对象.
            priority: 优先级,数值越小越先执行.
            owner: 回调所属的监听器,``detach`` 时据此移除.

        """
        registration = _Registration(priority, next(self._sequence), callback, owner)
        self._registrations.setdefault(name, []).append(registration)
        self._registrations[name].sort()

    def off(self, name: str, callback: EventCallback | None = None) -> None:
        """移除回调,未指定 callback 时移除该事件的全部回调."""
        if callback is None:
            self._registrations.pop(name, None)
            return
        remaining = [item for item in self._registrations.get(name, []) if item.callback != callback]
        self._registrations[name] = remaining

    def attach(self, listener: EventListener) -> None:
        """挂载监听器对象.

        ``implemented_events()`` 的值可以是方法名、可调用对象,
        或 ``{"callable": ..., "priority": ...}`` 字典.

        Args:
            listener: 监听器对象.

        Raises:
            TypeError: 当回调配置无法解析为可调用对象时抛出.

        """
        for name, spec in listener.implemented_events().items():
            priority = DEFAULT_PRIORITY
            target = spec
            if isinstance(spec, Mapping):
                target = spec.get("callable")
                priority = int(spec.get("priority", DEFAULT_PRIORITY))
            callback = getattr(listener, target) if isinstance(target, str) else target
            if not callable(callback):
                msg = f"{type(listener).__name__} 的事件 {name} 回调不可调用"
                raise TypeError(msg)
            self.on(name, callback, priority, owner=listener)

    def detach(self, listener: object) -> None:
        """移除某个监听器注册的全部回调."""
        for name, registrations in self._registrations.items():
            self._registrations[name] = [item for item in registrations if item.owner is not listener]

    def listeners(self, name: str) -> list[EventCallback]:
        """按执行顺序返回事件的回调列表."""
        return [item.callback for item in self._registrations.get(name, [])]

    def dispatch(self, event: CrudEvent) -> CrudEvent:
        """分发事件.

        Args:
            event: 待分发的事件.

        Returns:
            同一个事件对象,``result`` 与停止状态已更新.

        """
        for callback in self.listeners(event.name):
            if event.is_stopped:
                break
            result = callback(event)
            if result is False:
                event.stop_propagation()
            elif result is not None:
                event.result = result
        return event
