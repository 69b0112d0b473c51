"""聊天路由：HTML 页面与 JSON 接口。"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from chat_relay.api.service import ChatService
from chat_relay.domain.models import ChatRequest
from chat_relay.infrastructure.logging.logger import logger
from chat_relay.web.schemas import SendRequest, SendResponse

router = APIRouter(tags=["chat"])

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


@router.get("/", response_class=HTMLResponse)
@router.get("/Chat", response_class=HTMLResponse)
def index(request: Request, service: ChatService = Depends(get_chat_service)) -> HTMLResponse:
    """聊天页面"""
    return templates.TemplateResponse(
        request,
        "chat.html",
        {"responder": getattr(service.responder, "name", "unknown")},
    )


@router.post("/Chat/Send", response_model=SendResponse)
def send(body: SendRequest, service: ChatService = Depends(get_chat_service)) -> dict:
    """
    发送消息并返回所有回复。

    - cycles > 1 时把上一条回复作为下一次的输入（自对话）
    - 任何失败都以回复文本的形式返回，接口本身总是 200
    """
    if not body.message or not body.message.strip():
        return {"responses": []}

    logger.info(
        "Chat/Send received",
        extra={"extra": {"message_length": len(body.message), "cycles": body.cycles}},
    )
    result = service.send(ChatRequest(message=body.message, cycles=body.cycles))
    return result.to_dict()
