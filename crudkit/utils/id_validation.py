"""资源 ID 格式校验.

- UUID: 规范的 8-4-4-4-12 十六进制格式.
- 数值: 十进制整数/小数/科学计数法字符串,以及 int/float.
"""

from __future__ import annotations

import re
import uuid

UUID_PATTERN = re.compile(
    r"^[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-[0-5][a-fA-F0-9]{3}-[089aAbB][a-fA-F0-9]{3}-[a-fA-F0-9]{12}$"
)
NUMERIC_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def is_uuid(value: object) -> bool:
    """判断值是否为规范 UUID.

    Args:
        value: 待校验的 ID.

    Returns:
        bool: 为 ``uuid.UUID`` 实例或规范 UUID 字符串时返回 True.

    """
    if isinstance(value, uuid.UUID):
        return True
    if not isinstance(value, str):
        return False
    return UUID_PATTERN.match(value) is not None


def is_numeric(value: object) -> bool:
    """判断值是否为数值或数值字符串.

    Args:
        value: 待校验的 ID.

    Returns:
        bool: 数值或数值字符串返回 True,布尔值返回 False.

    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if not isinstance(value, str):
        return False
    return NUMERIC_PATTERN.match(value) is not None
