"""CRUD 事件名称常量.

定义 CrudComponent 触发的标准事件,避免魔法字符串.
"""

from typing import ClassVar


class CrudEvents:
    """CRUD 事件名称常量.

    所有事件名均带 ``crud.`` 前缀,组件在触发时自动补全.
    """

    PREFIX: ClassVar[str] = "crud"

    # 生命周期
    INITIALIZE = "crud.initialize"
    BEFORE_HANDLE = "crud.before_handle"
    HANDLE = "crud.handle"

    # 查询
    BEFORE_PAGINATE = "crud.before_paginate"
    AFTER_PAGINATE = "crud.after_paginate"
    BEFORE_FIND = "crud.before_find"
    AFTER_FIND = "crud.after_find"
    RECORD_NOT_FOUND = "crud.record_not_found"
    INVALID_ID = "crud.invalid_id"

    # 写入
    BEFORE_SAVE = "crud.before_save"
    AFTER_SAVE = "crud.after_save"
    BEFORE_DELETE = "crud.before_delete"
    AFTER_DELETE = "crud.after_delete"

    # 响应
    BEFORE_RENDER = "crud.before_render"
    BEFORE_REDIRECT = "crud.before_redirect"
    SET_FLASH = "crud.set_flash"

    ALL: ClassVar[tuple[str, ...]] = (
        INITIALIZE,
        BEFORE_HANDLE,
        HANDLE,
        BEFORE_PAGINATE,
        AFTER_PAGINATE,
        BEFORE_FIND,
        AFTER_FIND,
        RECORD_NOT_FOUND,
        INVALID_ID,
        BEFORE_SAVE,
        AFTER_SAVE,
        BEFORE_DELETE,
        AFTER_DELETE,
        BEFORE_RENDER,
        BEFORE_REDIRECT,
        SET_FLASH,
    )

    @classmethod
    def qualify(cls, name: str) -> str:
        """补全事件名前缀.

        Args:
            name: 事件名,可带或不带 ``crud.`` 前缀.

        Returns:
            str: 带前缀的完整事件名.

        """
        if name.startswith(f"{cls.PREFIX}."):
            return name
        return f"{cls.PREFIX}.{name}"
