"""/Chat/Send 的请求与响应模型。"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SendRequest(BaseModel):
    """聊天请求，同时接受 message/Message 两种键名。

    客户端可能传 null 或非字符串的值，这里统一宽松处理：
    cycles 为 null/非数字时视为 0，数字型 message 转成字符串。
    """

    model_config = ConfigDict(populate_by_name=True)

    message: Optional[str] = Field(None, alias="Message", description="用户消息")
    cycles: Optional[int] = Field(0, alias="Cycles", description="总调用次数，0 或 1 表示只调用一次")

    @field_validator("message", mode="before")
    @classmethod
    def coerce_message(cls, v: Any) -> Optional[str]:
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return str(v)
        return v if isinstance(v, str) else None

    @field_validator("cycles", mode="before")
    @classmethod
    def coerce_cycles(cls, v: Any) -> int:
        if v is None or isinstance(v, bool):
            return 0
        try:
            return int(v)
        except (TypeError, ValueError):
            return 0


class ResponseItem(BaseModel):
    full: str = Field(..., description="完整回复")
    snippet: str = Field(..., description="代码块内容或渲染后的 HTML")
    hasMore: bool = Field(False, description="预留的截断标记，目前恒为 False")
    snippetType: Literal["code", "html"] = Field("html", description="code 按纯文本显示，html 直接插入")


class SendResponse(BaseModel):
    responses: List[ResponseItem] = Field(default_factory=list)
