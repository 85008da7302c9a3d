"""SQLAlchemy 模型结构探测.

把映射类的主键列转换为 ``{"type", "length"}`` 形式的字段信息,
供 CRUD 动作推断 ID 校验方式.
"""

from __future__ import annotations

import uuid
from typing import Any, TypedDict

from sqlalchemy import Column, inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.sql import sqltypes

UUID_STRING_LENGTH = 36


class FieldInfo(TypedDict):
    """主键字段信息."""

    type: str
    length: int | None


def primary_key_column(model: type[Any]) -> Column[Any] | None:
    """返回映射类的第一个主键列.

    Args:
        model: SQLAlchemy 映射类.

    Returns:
        主键列,无法探测时返回 None.

    """
    try:
        mapper = inspect(model)
    except NoInspectionAvailable:
        return None
    primary_key = getattr(mapper, "primary_key", ())
    if not primary_key:
        return None
    return primary_key[0]


def _type_name(column_type: sqltypes.TypeEngine[Any]) -> str:
    if isinstance(column_type, sqltypes.Uuid):
        return "uuid"
    if isinstance(column_type, sqltypes.Integer):
        return "integer"
    if isinstance(column_type, sqltypes.String):
        return "string"
    if isinstance(column_type, (sqltypes.LargeBinary, sqltypes.BINARY, sqltypes.VARBINARY)):
        return "binary"
    return type(column_type).__name__.lower()


def primary_key_field_info(model: type[Any]) -> FieldInfo | None:
    """读取主键字段的类型与长度.

    原生 UUID 列报告为 ``{"type": "uuid", "length": 36}``.

    Args:
        model: SQLAlchemy 映射类.

    Returns:
        字段信息,无主键时返回 None.

    """
    column = primary_key_column(model)
    if column is None:
        return None
    type_name = _type_name(column.type)
    if type_name == "uuid":
        return {"type": "uuid", "length": UUID_STRING_LENGTH}
    return {"type": type_name, "length": getattr(column.type, "length", None)}


def column_names(model: type[Any], *, include_primary_key: bool = True) -> list[str]:
    """返回映射类的列属性名.

    Args:
        model: SQLAlchemy 映射类.
        include_primary_key: 是否包含主键列.

    Returns:
        属性名列表.

    """
    mapper = inspect(model)
    primary_keys = {column.key for column in mapper.primary_key}
    names = []
    for attr in mapper.column_attrs:
        if not include_primary_key and any(column.key in primary_keys for column in attr.columns):
            continue
        names.append(attr.key)
    return names


def primary_key_value(instance: Any) -> Any:
    """返回实例的主键值(单列主键),未持久化时为 None."""
    identity = inspect(instance).identity
    if not identity:
        return None
    return identity[0]


def _coerce_integer(value: str) -> int | None:
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def coerce_primary_key(model: type[Any], value: Any) -> Any:
    """将请求中的 ID 转换为主键列的 Python 类型.

    整数主键接受 ``" 7 "``、``"1e3"`` 这类取值为整数的数字串;
    无法转换为列类型时返回 None,调用方应视为记录不存在.

    Args:
        model: SQLAlchemy 映射类.
        value: 路由或请求体中的 ID.

    Returns:
        转换后的 ID,无法转换时为 None.

    """
    column = primary_key_column(model)
    if column is None or not isinstance(value, str):
        return value
    type_name = _type_name(column.type)
    if type_name == "integer":
        return _coerce_integer(value)
    if type_name == "uuid" and getattr(column.type, "as_uuid", True):
        try:
            return uuid.UUID(value)
        except ValueError:
            return None
    return value
