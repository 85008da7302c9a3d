"""crudkit - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口,避免散落在各模块中重复解析.
- `create_app(settings=...)` 只消费 Settings,不再直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 生产环境默认更严格: 缺失密钥/连接串会直接抛出 ValueError.
"""

from __future__ import annotations

import logging
import secrets
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

DEFAULT_ENVIRONMENT = "development"
APP_VERSION = "0.3.0"

DEFAULT_LOG_LEVEL = "INFO"

DEFAULT_CRUD_PAGE_SIZE = 20
DEFAULT_CRUD_MAX_PAGE_SIZE = 100
DEFAULT_CRUD_FLASH_KEY = "flash"

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _resolve_sqlite_fallback_url() -> str:
    return "sqlite:///:memory:"


class Settings(BaseSettings):
    """应用运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    debug: bool = Field(default=False, validation_alias="FLASK_DEBUG")

    app_name: str = Field(default="crudkit", validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    secret_key: str = Field(default="", validation_alias="SECRET_KEY")
    database_url: str = Field(default="", validation_alias="DATABASE_URL")

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")
    enable_debug_log: bool = Field(default=False, validation_alias="ENABLE_DEBUG_LOG")

    crud_page_size: int = Field(default=DEFAULT_CRUD_PAGE_SIZE, validation_alias="CRUD_PAGE_SIZE")
    crud_max_page_size: int = Field(default=DEFAULT_CRUD_MAX_PAGE_SIZE, validation_alias="CRUD_MAX_PAGE_SIZE")
    crud_flash_key: str = Field(default=DEFAULT_CRUD_FLASH_KEY, validation_alias="CRUD_FLASH_KEY")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in _VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_VALID_LOG_LEVELS)}")
        return normalized

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    @property
    def sqlalchemy_engine_options(self) -> dict[str, object]:
        """生成 SQLAlchemy Engine 配置选项."""
        if self.database_url.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True, "echo": bool(self.debug)}

    def to_flask_config(self) -> dict[str, object]:
        """转换为 Flask app.config 可写入的配置字典."""
        return {
            "ENV": self.environment,
            "DEBUG": self.debug,
            "APP_NAME": self.app_name,
            "APP_VERSION": self.app_version,
            "SECRET_KEY": self.secret_key,
            "SQLALCHEMY_DATABASE_URI": self.database_url,
            "SQLALCHEMY_TRACK_MODIFICATIONS": False,
            "SQLALCHEMY_ENGINE_OPTIONS": dict(self.sqlalchemy_engine_options),
            "LOG_LEVEL": self.log_level,
            "ENABLE_DEBUG_LOG": self.enable_debug_log,
            "CRUD_PAGE_SIZE": self.crud_page_size,
            "CRUD_MAX_PAGE_SIZE": self.crud_max_page_size,
            "CRUD_FLASH_KEY": self.crud_flash_key,
        }

    @classmethod
    def load(cls) -> Settings:
        """从环境变量加载 Settings 并执行必要校验."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _apply_defaults_and_validate(self) -> Settings:
        environment_normalized = self.environment.strip().lower()

        debug = self._resolve_debug(environment_normalized)
        self._ensure_secret_key(debug)
        self._ensure_database_url(environment_normalized)

        self._validate()
        return self

    def _resolve_debug(self, environment_normalized: str) -> bool:
        if "debug" in self.model_fields_set:
            return bool(self.debug)
        debug = environment_normalized != "production"
        object.__setattr__(self, "debug", debug)
        return debug

    def _ensure_secret_key(self, debug: bool) -> None:
        if not self.secret_key:
            if not debug:
                raise ValueError("SECRET_KEY environment variable must be set in production")
            object.__setattr__(self, "secret_key", secrets.token_urlsafe(32))
            logger.warning("⚠️  开发环境使用随机生成的SECRET_KEY,生产环境请设置环境变量")

    def _ensure_database_url(self, environment_normalized: str) -> None:
        if self.database_url:
            return
        if environment_normalized == "production":
            raise ValueError("DATABASE_URL environment variable must be set in production")
        object.__setattr__(self, "database_url", _resolve_sqlite_fallback_url())
        logger.warning("⚠️  未设置DATABASE_URL,使用内存 SQLite 数据库")

    def _validate(self) -> None:
        if self.crud_page_size <= 0:
            raise ValueError("CRUD_PAGE_SIZE must be positive")
        if self.crud_max_page_size < self.crud_page_size:
            raise ValueError("CRUD_MAX_PAGE_SIZE must not be smaller than CRUD_PAGE_SIZE")
        if not self.crud_flash_key:
            raise ValueError("CRUD_FLASH_KEY must not be empty")
