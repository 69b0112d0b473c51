"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。

Gemini 相关键名与环境变量一一对应（不区分大小写），例如
``gemini_api_key`` ⇔ ``GEMINI_API_KEY``。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chat_relay.domain.models import RetryPolicy


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("CHAT_RELAY_CONFIG_FILE")
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


class Settings(BaseSettings):
    """应用配置。"""

    # ---- Responder 选择 ----
    default_responder: Literal["auto", "local", "gemini"] = Field(
        default="auto",
        description="auto: 配置了 API key 时使用 gemini，否则使用本地模板生成器",
    )

    # ---- Gemini ----
    gemini_api_key: Optional[str] = Field(default=None, description="Gemini API 密钥")
    gemini_api_url: Optional[str] = Field(
        default=None,
        description="完整的 generateContent 端点，留空则按模型名拼接",
    )
    gemini_model: str = Field(default="gemini-2.5-pro", description="Gemini 模型名")
    gemini_max_output_tokens: int = Field(default=1024, ge=1, description="最大输出 token 数")
    gemini_temperature: float = Field(default=0.2, ge=0.0, le=2.0, description="生成温度")
    gemini_retry_attempts: int = Field(default=4, ge=1, description="限流/过载时的最大尝试次数")
    gemini_retry_base_delay: float = Field(default=0.5, ge=0.0, description="指数退避基数（秒）")
    gemini_retry_max_jitter: float = Field(default=0.2, ge=0.0, description="随机抖动上限（秒）")
    gemini_prompt_prefix: Optional[str] = Field(
        default=None,
        description="附加在每条用户消息前的提示词（可选）",
    )

    # ---- 通用 ----
    http_timeout: float = Field(default=60.0, ge=1.0, description="HTTP 超时时间（秒）")
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("gemini_api_key", "gemini_api_url", "gemini_prompt_prefix")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

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

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.gemini_retry_attempts,
            base_delay=self.gemini_retry_base_delay,
            max_jitter=self.gemini_retry_max_jitter,
        )


settings = Settings()
