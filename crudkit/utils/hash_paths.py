"""点路径(dotted path)读写工具.

用于 CRUD 动作与监听器的配置树: ``"save_options.fields"`` 这类路径逐级访问嵌套字典.
写入采用写时复制,调用方拿到新字典,原字典保持不变.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

PATH_SEPARATOR = "."


def split_path(path: str | int) -> list[str]:
    """拆分点路径.

    Args:
        path: 点路径字符串或整数下标.

    Returns:
        路径片段列表.

    """
    if isinstance(path, int):
        return [str(path)]
    return path.split(PATH_SEPARATOR)


def get_path(data: Mapping[str, Any] | None, path: str | int | None, default: Any = None) -> Any:
    """按点路径读取嵌套值.

    支持穿过列表/元组,片段为数字时作为下标.

    Args:
        data: 配置字典.
        path: 点路径,如 ``"a.b.c"``.
        default: 路径不存在时的返回值.

    Returns:
        路径对应的值,不存在返回 ``default``.

    """
    if not data or path is None or path == "":
        return default

    current: Any = data
    for segment in split_path(path):
        if isinstance(current, Mapping):
            if segment not in current:
                return default
            current = current[segment]
        elif isinstance(current, Sequence) and not isinstance(current, str) and segment.isdigit():
            index = int(segment)
            if index >= len(current):
                return default
            current = current[index]
        else:
            return default
    return current


def _is_list_node(node: Any) -> bool:
    return isinstance(node, Sequence) and not isinstance(node, (str, bytes))


def _copy_node(node: Any, next_segment: str) -> dict[str, Any] | list[Any]:
    if isinstance(node, Mapping):
        return dict(node)
    if _is_list_node(node) and next_segment.isdigit():
        return list(node)
    return {}


def _read_child(container: dict[str, Any] | list[Any], segment: str) -> Any:
    if isinstance(container, list):
        index = int(segment)
        return container[index] if index < len(container) else None
    return container.get(segment)


def _assign(container: dict[str, Any] | list[Any], segment: str, value: Any) -> None:
    if isinstance(container, list):
        index = int(segment)
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value
        return
    container[segment] = value


def insert_path(data: Mapping[str, Any] | None, path: str | int, value: Any) -> dict[str, Any]:
    """按点路径写入值,缺失的中间节点自动创建为字典.

    列表/元组节点在下一片段为数字时复制为列表并按下标写入,越界时以 None 补齐;
    其余非字典的中间节点会被替换为新字典.

    Args:
        data: 原配置字典,不会被修改.
        path: 点路径.
        value: 待写入的值.

    Returns:
        写入后的新字典.

    """
    result: dict[str, Any] = dict(data or {})
    segments = split_path(path)

    cursor: dict[str, Any] | list[Any] = result
    for segment, next_segment in zip(segments[:-1], segments[1:]):
        child_copy = _copy_node(_read_child(cursor, segment), next_segment)
        _assign(cursor, segment, child_copy)
        cursor = child_copy
    _assign(cursor, segments[-1], value)
    return result


def merge_missing(base: Mapping[str, Any] | None, fallback: Mapping[str, Any] | None) -> dict[str, Any]:
    """浅合并两个字典,``base`` 中已有的键优先,``fallback`` 只补缺.

    Args:
        base: 优先的字典.
        fallback: 补缺的字典.

    Returns:
        合并后的新字典.

    """
    merged: dict[str, Any] = dict(fallback or {})
    merged.update(base or {})
    return merged
