"""事件主体(Subject).

在 CRUD 事件之间传递的可变上下文对象,监听器可读写其中任意字段.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


class CrudSubject:
    """CRUD 事件主体.

    字段以属性形式保存,``set`` 批量写入,``get`` 带默认值读取.
    ``stopped`` 标记最近一次触发的事件是否被监听器中止.
    """

    def __init__(self, fields: Mapping[str, Any] | None = None) -> None:
        self.stopped = False
        if fields:
            self.set(fields)

    def set(self, fields: Mapping[str, Any]) -> CrudSubject:
        """批量写入字段.

        Args:
            fields: 字段名到值的映射.

        Returns:
            当前主体,便于链式调用.

        """
        for name, value in fields.items():
            setattr(self, name, value)
        return self

    def get(self, name: str, default: Any = None) -> Any:
        """读取字段,不存在时返回默认值."""
        return getattr(self, name, default)

    def should_process(self, mode: str, actions: str | Iterable[str]) -> bool:
        """按当前动作名判断监听器是否应处理.

        Args:
            mode: ``"only"`` 仅处理列出的动作,``"not"`` 处理列出以外的动作.
            actions: 动作名或动作名集合.

        Returns:
            bool: 是否应处理.

        Raises:
            ValueError: 当 mode 不是 only/not 时抛出.

        """
        names = {actions} if isinstance(actions, str) else set(actions)
        action = self.get("action")
        if mode == "only":
            return action in names
        if mode == "not":
            return action not in names
        msg = f"Invalid mode: {mode}"
        raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        return dict(vars(self))

    def __repr__(self) -> str:
        fields = ", ".join(sorted(name for name in vars(self) if name != "stopped"))
        return f"<CrudSubject action={self.get('action')!r} fields=[{fields}]>"
