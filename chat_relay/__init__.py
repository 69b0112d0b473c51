"""chat_relay 顶层包。

把用户消息转发给本地模板生成器或远程 Gemini 接口，
支持多轮"自对话"，并把回复转换为可展示的代码片段或 HTML。
Web 入口见 chat_relay.web.main。
"""

from chat_relay.api.service import ChatService
from chat_relay.providers import create_responder

__all__ = ["ChatService", "create_responder"]
