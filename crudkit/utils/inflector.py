"""命名转换工具.

用于从模型类名推导资源名称、视图变量名与模板目录.
"""

from __future__ import annotations

import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_ES_SUFFIXES = ("s", "x", "z", "ch", "sh")


def underscore(name: str) -> str:
    """驼峰转下划线: ``BlogPost`` -> ``blog_post``."""
    return _CAMEL_BOUNDARY.sub("_", name.strip()).replace("-", "_").replace(" ", "_").lower()


def humanize(name: str) -> str:
    """转换为可读名称: ``BlogPost`` / ``blog_post`` -> ``Blog Post``."""
    words = [word for word in underscore(name).split("_") if word]
    return " ".join(word.capitalize() for word in words)


def pluralize(word: str) -> str:
    """英文名词复数的常见规则.

    Args:
        word: 单数单词.

    Returns:
        复数形式.

    """
    if not word:
        return word
    lower = word.lower()
    if lower.endswith("y") and len(word) > 1 and lower[-2] not in "aeiou":
        return f"{word[:-1]}ies"
    if lower.endswith(_ES_SUFFIXES):
        return f"{word}es"
    return f"{word}s"


def variable_name(model_class: str, *, plural: bool = False) -> str:
    """由模型类名生成视图变量名.

    Example:
        >>> variable_name("BlogPost", plural=True)
        'blog_posts'

    """
    name = underscore(model_class)
    return pluralize(name) if plural else name
