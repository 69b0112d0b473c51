"""Responder 集成层。

该包下的模块负责：
- 定义 Responder 抽象接口 (base)。
- 维护 Responder 配置 (registry)。
- 提供具体实现 (local_client、gemini_client) 以及重试循环 (retry)。
"""

from typing import Optional

from chat_relay.config.settings import settings
from chat_relay.providers.base import Responder
from chat_relay.providers.gemini_client import GeminiClient
from chat_relay.providers.local_client import LocalResponder
from chat_relay.providers.registry import resolve_provider


def create_responder(name: Optional[str] = None, cfg=None) -> Responder:
    """根据名称创建 Responder，默认取配置中的 default_responder。

    "auto" 时：配置了 Gemini API key 则使用 GeminiClient，否则使用 LocalResponder。
    名称未登记时抛出 ConfigurationError。
    应用启动时调用一次，之后所有请求复用同一个实例。
    """

    cfg = cfg or settings
    provider = resolve_provider(
        name or getattr(cfg, "default_responder", "auto"),
        has_api_key=bool(getattr(cfg, "gemini_api_key", None)),
    )
    if provider.remote:
        return GeminiClient(cfg)
    return LocalResponder()
