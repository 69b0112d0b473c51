"""请求、回复与重试相关的数据模型。

- ChatRequest: 一次聊天请求（消息 + 自对话轮数）。
- ChatResponseItem / ChatResponse: 展示层生成的回复条目。
- RetryPolicy: 远程调用的重试配置。
- Success / Retryable / Terminal: 单次远程尝试的结果，由重试循环决定后续动作。
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class ChatRequest:
    """一次聊天请求。

    cycles 表示总调用次数：0 和 1 都只调用一次 Responder，
    N > 1 时会把上一条回复作为下一次的输入，共调用 N 次。
    """

    message: str
    cycles: int = 0

    def __post_init__(self):
        if self.cycles < 0:
            object.__setattr__(self, "cycles", 0)


@dataclass
class ChatResponseItem:
    """单条回复及其展示片段。

    kind 为 "code" 时 snippet 是代码块原文，为 "html" 时是渲染后的 HTML。
    """

    full: str
    snippet: str
    has_more: bool = False
    kind: str = "html"

    def to_dict(self) -> dict:
        return {
            "full": self.full,
            "snippet": self.snippet,
            "hasMore": self.has_more,
            "snippetType": self.kind,
        }


@dataclass
class ChatResponse:
    responses: List[ChatResponseItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"responses": [item.to_dict() for item in self.responses]}


@dataclass(frozen=True)
class RetryPolicy:
    """指数退避重试策略。

    第 n 次失败后的等待时间为 base_delay * 2 ** (n - 1) + uniform(0, max_jitter)。
    """

    max_attempts: int = 4
    base_delay: float = 0.5  # 秒
    max_jitter: float = 0.2  # 秒

    def __post_init__(self):
        if self.max_attempts < 1:
            object.__setattr__(self, "max_attempts", 1)


@dataclass(frozen=True)
class Success:
    text: str


@dataclass(frozen=True)
class Retryable:
    """可重试的失败（限流、过载、网络异常）。"""

    reason: str
    status_code: Optional[int] = None


@dataclass(frozen=True)
class Terminal:
    """不可重试的失败，message 直接作为最终结果。"""

    message: str
    status_code: Optional[int] = None


AttemptOutcome = Union[Success, Retryable, Terminal]
