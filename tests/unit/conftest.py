# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供环境变量隔离相关的通用 fixtures。
"""

import pytest


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 只使用内存 SQLite
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.delenv("CRUD_PAGE_SIZE", raising=False)
    monkeypatch.delenv("CRUD_MAX_PAGE_SIZE", raising=False)
    monkeypatch.delenv("CRUD_FLASH_KEY", raising=False)
    monkeypatch.delenv("ENABLE_DEBUG_LOG", raising=False)
