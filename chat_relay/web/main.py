"""chat_relay 的 FastAPI 应用。

启动：uvicorn chat_relay.web.main:app
"""

from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from chat_relay.api.service import ChatService
from chat_relay.config.settings import settings
from chat_relay.infrastructure.logging.logger import logger
from chat_relay.providers import create_responder
from chat_relay.providers.base import Responder
from chat_relay.web.chat import router as chat_router

BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"


def create_app(cfg=None, responder: Optional[Responder] = None) -> FastAPI:
    """创建应用。Responder 在这里解析一次，之后所有请求共用。"""
    cfg = cfg or settings
    responder = responder or create_responder(cfg=cfg)

    app = FastAPI(
        title="chat_relay",
        description="Forwards chat messages to a local template responder or the Gemini API.",
        version="0.1.0",
    )
    app.state.settings = cfg
    app.state.chat_service = ChatService(responder)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    app.include_router(chat_router)

    @app.get("/health")
    def health_check() -> dict:
        """健康检查"""
        return {"status": "healthy", "responder": getattr(responder, "name", "unknown")}

    logger.info(f"chat_relay started with responder {getattr(responder, 'name', 'unknown')!r}")
    return app


app = create_app()
