"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置，优先级依次降低。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("KINDROID_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.extend([
        Path.cwd() / "config.yaml",
        Path(__file__).resolve().parents[2] / "config.yaml",
    ])

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class _KindroidBaseSettings(BaseSettings):
    """共享的配置来源：init > 环境变量 > .env > config.yaml。"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


class Settings(_KindroidBaseSettings):
    """推理端点配置。

    URL 与密钥允许为空，是否缺失由 KindroidClient 构造时统一校验。
    只在创建客户端时读取，import 本包不会触发校验。
    """

    kindroid_infer_url: Optional[str] = Field(default=None, description="Kindroid 推理端点完整 URL")
    kindroid_api_key: Optional[str] = Field(default=None, description="Kindroid API 密钥（Bearer）")
    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")

    @field_validator("kindroid_infer_url")
    @classmethod
    def validate_infer_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError("KINDROID_INFER_URL must be an http(s) URL")
        return v

    @field_validator("kindroid_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class LoggingSettings(_KindroidBaseSettings):
    """日志配置，与端点配置分开，避免端点配置错误影响 import。"""

    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")


def load_settings() -> Settings:
    """重新读取环境并构造一份新的 Settings。"""

    return Settings()


def load_logging_settings() -> LoggingSettings:
    return LoggingSettings()
