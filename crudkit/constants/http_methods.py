"""HTTP方法常量.

定义标准的HTTP请求方法,避免魔法字符串.
"""

from typing import ClassVar


class HttpMethod:
    """HTTP方法常量.

    仅保留 CRUD 动作需要区分的请求方法.
    """

    GET: ClassVar[str] = "GET"           # 获取资源
    POST: ClassVar[str] = "POST"         # 创建资源
    PUT: ClassVar[str] = "PUT"           # 更新资源(完整)
    PATCH: ClassVar[str] = "PATCH"       # 更新资源(部分)
    DELETE: ClassVar[str] = "DELETE"     # 删除资源

    ALL: ClassVar[tuple[str, ...]] = (GET, POST, PUT, PATCH, DELETE)

    # 表单提交时可用 `_method` 字段覆写的方法
    OVERRIDABLE: ClassVar[tuple[str, ...]] = (PUT, PATCH, DELETE)

    WRITE_METHODS: ClassVar[tuple[str, ...]] = (POST, PUT, PATCH)

    @classmethod
    def is_write(cls, method: str) -> bool:
        """判断是否为写入类请求方法.

        Args:
            method: HTTP 方法字符串.

        Returns:
            bool: POST/PUT/PATCH 时返回 True.

        """
        return method.upper() in cls.WRITE_METHODS
