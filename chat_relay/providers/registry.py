"""Responder 配置。

集中记录各 Responder 的名称、默认端点与默认模型，
create_responder 通过 resolve_provider 按名称解析。"""

from dataclasses import dataclass
from typing import Mapping, Optional

from chat_relay.domain.exceptions import ConfigurationError


@dataclass
class ProviderConfig:
    """某个 Responder 的整体配置。"""

    name: str
    base_url: Optional[str]
    default_model: Optional[str]
    remote: bool


# 本地模板生成器，无需网络
LOCAL_CONFIG = ProviderConfig(
    name="local",
    base_url=None,
    default_model=None,
    remote=False,
)

# Gemini generateContent（v1beta）
GEMINI_CONFIG = ProviderConfig(
    name="gemini",
    base_url="https://generativelanguage.googleapis.com/v1beta",
    default_model="gemini-2.5-pro",
    remote=True,
)


PROVIDER_REGISTRY: Mapping[str, ProviderConfig] = {
    LOCAL_CONFIG.name: LOCAL_CONFIG,
    GEMINI_CONFIG.name: GEMINI_CONFIG,
}


def resolve_provider(name: str, has_api_key: bool) -> ProviderConfig:
    """把 Responder 名称解析为 ProviderConfig。

    "auto" 在有 API key 时解析为 gemini，否则为 local；
    未登记的名称抛出 ConfigurationError。
    """

    key = (name or "auto").strip().lower()
    if key == "auto":
        key = GEMINI_CONFIG.name if has_api_key else LOCAL_CONFIG.name
    cfg = PROVIDER_REGISTRY.get(key)
    if cfg is None:
        raise ConfigurationError(
            code="UNKNOWN_RESPONDER",
            message=f"Unknown responder: {name!r}",
            known=sorted(PROVIDER_REGISTRY),
        )
    return cfg
