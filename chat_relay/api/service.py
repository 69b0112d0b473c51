"""对外 API 服务模块。

ChatService 把一条消息交给 Responder，可选地进行多轮"自对话"：
每一轮把上一条回复作为下一次的输入，最后把所有回复转换成展示片段。
"""

from typing import List

from chat_relay.domain.models import ChatRequest, ChatResponse, ChatResponseItem
from chat_relay.infrastructure.logging.logger import logger
from chat_relay.presentation.markdown import present
from chat_relay.providers.base import Responder


class ChatService:
    """自对话循环与展示转换。"""

    def __init__(self, responder: Responder):
        self._responder = responder

    @property
    def responder(self) -> Responder:
        return self._responder

    def run(self, message: str, cycles: int = 0) -> List[str]:
        """运行自对话循环。

        Args:
            message: 用户输入
            cycles: 总调用次数；0 或 1 只调用一次

        Returns:
            按调用顺序排列的回复列表；message 为空白时返回空列表
        """
        if not message or not message.strip():
            return []

        responses: List[str] = [self._responder.respond(message) or ""]
        for _ in range(max(0, cycles - 1)):
            # 上一条回复作为下一轮的 prompt
            responses.append(self._responder.respond(responses[-1]) or "")

        logger.info(
            f"Chat finished with {len(responses)} response(s)",
            extra={"extra": {
                "responder": getattr(self._responder, "name", None),
                "cycles": cycles,
                "responses": len(responses),
            }},
        )
        return responses

    def send(self, request: ChatRequest) -> ChatResponse:
        items = []
        for full in self.run(request.message, request.cycles):
            snippet, has_more, kind = present(full)
            items.append(ChatResponseItem(full=full, snippet=snippet, has_more=has_more, kind=kind))
        return ChatResponse(responses=items)
