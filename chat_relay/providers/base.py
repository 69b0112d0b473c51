"""Responder 抽象接口。

Web 层和 ChatService 不直接依赖具体实现，而是依赖此协议：

- LocalResponder：本地模板生成器，不做任何 I/O。
- GeminiClient：调用远程 generateContent 接口。

respond() 总是返回字符串；失败信息同样以可读文本返回。
"""

from typing import Protocol


class Responder(Protocol):
    """回复生成器协议。

    - name: 名称，用于日志与 /health。
    - respond(message): 为一条消息生成回复文本。
    """

    name: str

    def respond(self, message: str) -> str:
        ...
