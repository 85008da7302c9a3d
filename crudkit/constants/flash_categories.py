"""Flask Flash消息类别常量.

定义Flash消息的标准类别,避免魔法字符串.
"""

from __future__ import annotations

from typing import ClassVar


class FlashCategory:
    """Flask Flash消息类别常量.

    定义标准的Flash消息类别,用于前端显示不同样式的提示消息.
    """

    # 消息类别
    SUCCESS = "success"     # 成功消息(绿色)
    ERROR = "error"         # 错误消息(红色)
    WARNING = "warning"     # 警告消息(黄色)
    INFO = "info"           # 信息消息(蓝色)

    ALL: ClassVar[tuple[str, ...]] = (SUCCESS, ERROR, WARNING, INFO)

    @classmethod
    def is_valid(cls, category: str) -> bool:
        """验证消息类别是否有效.

        Args:
            category: 消息类别字符串

        Returns:
            bool: 是否为有效类别

        """
        return category in cls.ALL

    @classmethod
    def normalize(cls, category: str | None) -> str:
        """规范化消息类别.

        处理别名和大小写问题,未知类别回退为 INFO.

        Args:
            category: 消息类别字符串

        Returns:
            str: 规范化后的类别

        """
        if not category:
            return cls.INFO
        normalized = category.lower().strip()

        # 处理常见别名
        aliases = {
            "err": cls.ERROR,
            "fail": cls.ERROR,
            "failed": cls.ERROR,
            "danger": cls.ERROR,
            "succ": cls.SUCCESS,
            "ok": cls.SUCCESS,
            "warn": cls.WARNING,
            "information": cls.INFO,
            "default": cls.INFO,
        }

        resolved = aliases.get(normalized, normalized)
        return resolved if cls.is_valid(resolved) else cls.INFO
