"""动作与监听器共用的配置访问方法."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, ClassVar

from crudkit.utils.hash_paths import get_path, insert_path, merge_missing

MISSING: Any = object()


class ConfigurableMixin:
    """基于点路径的配置存储.

    ``default_settings`` 为类级默认值,实例化时深拷贝到 ``_settings``.
    """

    default_settings: ClassVar[Mapping[str, Any]] = {}

    _settings: dict[str, Any]

    def _init_settings(self) -> None:
        self._settings = copy.deepcopy(dict(self.default_settings))

    def config(self, key: str | Mapping[str, Any] | None = None, value: Any = MISSING) -> Any:
        """通用配置读写.

        - 无参数: 返回整个配置字典.
        - 仅传字符串 key: 读取点路径的值,不存在返回 None.
        - 仅传 Mapping: 合并进配置,已存在的键保留原值,返回 self.
        - key + value: value 为 Mapping 时先与该路径已有的 Mapping 浅合并
          (新值覆盖同名键,旧值补缺),再写入点路径,返回 self.

        Args:
            key: 点路径或待合并的配置字典.
            value: 待写入的值.

        Returns:
            读取时返回配置值,写入时返回 self.

        """
        if key is None and value is MISSING:
            return self._settings

        if value is MISSING:
            if isinstance(key, Mapping):
                self._settings = merge_missing(self._settings, key)
                return self
            return get_path(self._settings, key)

        if key is None or isinstance(key, Mapping):
            msg = "写入配置时 key 必须为点路径字符串"
            raise TypeError(msg)

        if isinstance(value, Mapping):
            existing = get_path(self._settings, key)
            value = merge_missing(value, existing if isinstance(existing, Mapping) else None)

        self._settings = insert_path(self._settings, key, value)
        return self
