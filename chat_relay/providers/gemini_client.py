"""Gemini Provider 适配器。

本模块负责：

1. 将一条用户消息转换为 generateContent 请求体（单个 user turn）。
2. 调用 HTTP 接口，API key 通过 ``key`` 查询参数传递。
3. 把每次尝试的结果归类为 Success / Retryable / Terminal，交给重试循环。
4. 解析 ``candidates[0].content.parts[0].text``；结构不符时原样返回响应体。

generate() 在配置缺失或最终失败时抛出业务异常；respond() 是 Responder
入口，会把这些异常转换成可读文本，保证 Web 层总能拿到字符串。
"""

import random
import time
from typing import Any, Dict, Optional

import httpx

from chat_relay.domain.exceptions import BusinessError, ConfigurationError, RequestError
from chat_relay.domain.models import AttemptOutcome, Retryable, Success, Terminal
from chat_relay.infrastructure.logging.logger import logger
from chat_relay.providers.registry import GEMINI_CONFIG
from chat_relay.providers.retry import run_with_retry

EMPTY_MESSAGE_REPLY = "Please enter a message so I can respond."
NOT_CONFIGURED_REPLY = "Gemini is not configured. Set `GEMINI_API_KEY`."

TRANSIENT_STATUS = {429, 503}
TRANSIENT_MARKERS = ("overloaded", "quota")


class GeminiClient:
    """Gemini 远程 Responder。

    - name: Provider 名称（供日志/调试使用）。
    - generate: 执行带重试的调用，失败时抛出 ConfigurationError / RequestError。
    - respond: Responder 协议入口，永不抛出。
    """

    name = "gemini"

    def __init__(self, settings, sleep=time.sleep, rng=None):
        # Settings 里包含 api_key、端点、重试次数等配置
        self._settings = settings
        self._sleep = sleep
        self._rng = rng or random.Random()

    def respond(self, message: str) -> str:
        if not message or not message.strip():
            return EMPTY_MESSAGE_REPLY
        try:
            return self.generate(message)
        except ConfigurationError:
            return NOT_CONFIGURED_REPLY
        except BusinessError as e:
            return e.message

    def generate(self, message: str) -> str:
        """执行一次（可能多次重试的）generateContent 调用。

        步骤：
        1. 校验 API key，缺失时抛出 ConfigurationError。
        2. 构造请求体与端点 URL。
        3. 交给 run_with_retry，按尝试结果决定重试或结束。
        4. 成功返回文本；不可重试错误或重试耗尽时抛出 RequestError。
        """

        api_key = getattr(self._settings, "gemini_api_key", None)
        if not api_key or not api_key.strip():
            raise ConfigurationError(code="MISSING_API_KEY", message="GEMINI_API_KEY not set")
        api_key = api_key.strip()

        url = self._endpoint()
        payload = self._build_payload(message)
        policy = self._settings.retry_policy()

        def attempt(n: int) -> AttemptOutcome:
            return self._attempt(url, api_key, payload, n, policy.max_attempts)

        outcome = run_with_retry(attempt, policy, sleep=self._sleep, rng=self._rng)
        if isinstance(outcome, Success):
            return outcome.text
        if isinstance(outcome, Terminal):
            raise RequestError(
                code="API_ERROR",
                message=outcome.message,
                http_status=outcome.status_code or 502,
                attempts=1,
            )

        # 重试耗尽
        if outcome.status_code is not None:
            logger.warning(
                f"Gemini overloaded after {policy.max_attempts} attempts",
                extra={"extra": {"status": outcome.status_code}},
            )
            text = (
                f"Model overloaded or rate-limited after {policy.max_attempts} attempts. "
                "Try again later or reduce parallel requests/cycles."
            )
            raise RequestError(
                code="RATE_LIMIT",
                message=text,
                http_status=outcome.status_code,
                attempts=policy.max_attempts,
            )
        logger.error(f"Gemini request failed after {policy.max_attempts} attempts: {outcome.reason}")
        raise RequestError(
            code="NETWORK_ERROR",
            message=f"Gemini request failed: {outcome.reason}",
            http_status=502,
            attempts=policy.max_attempts,
        )

    # ---- 辅助方法 ----

    def _attempt(
        self,
        url: str,
        api_key: str,
        payload: Dict[str, Any],
        n: int,
        max_attempts: int,
    ) -> AttemptOutcome:
        params = None if "key" in httpx.URL(url).params else {"key": api_key}
        started = time.perf_counter()
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(
                    url,
                    params=params,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            # 网络错误：DNS 失败、连接超时等，与限流同样重试
            logger.warning(
                f"Transient error calling Gemini: {e!r} (attempt {n}/{max_attempts})",
            )
            return Retryable(reason=str(e) or type(e).__name__)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"Gemini request to {url.split('?')[0]} finished in {elapsed_ms}ms (status {resp.status_code})",
            extra={"extra": {"elapsed_ms": elapsed_ms, "status": resp.status_code, "attempt": n}},
        )

        body = resp.text or ""
        if not 200 <= resp.status_code < 300:
            lowered = body.lower()
            if resp.status_code in TRANSIENT_STATUS or any(m in lowered for m in TRANSIENT_MARKERS):
                return Retryable(reason=f"HTTP {resp.status_code}", status_code=resp.status_code)
            return Terminal(
                message=f"Gemini request failed ({resp.status_code}): {body}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            return Retryable(reason=f"invalid JSON in response: {e}")
        text = self._extract_text(data)
        if text is None:
            # 结构不符时保留原始响应体，方便在页面上排查
            return Success(text=body)
        logger.debug(f"Gemini reply length: {len(text)}")
        return Success(text=text)

    def _endpoint(self) -> str:
        explicit = getattr(self._settings, "gemini_api_url", None)
        if explicit:
            return explicit
        model = getattr(self._settings, "gemini_model", None) or GEMINI_CONFIG.default_model
        return f"{GEMINI_CONFIG.base_url}/models/{model}:generateContent"

    def _build_payload(self, message: str) -> Dict[str, Any]:
        prefix = getattr(self._settings, "gemini_prompt_prefix", None)
        text = f"{prefix}\n{message}" if prefix else message
        return {
            "contents": [
                {"role": "user", "parts": [{"text": text}]},
            ],
            "generationConfig": {
                "maxOutputTokens": self._settings.gemini_max_output_tokens,
                "temperature": self._settings.gemini_temperature,
            },
        }

    @staticmethod
    def _extract_text(data: Any) -> Optional[str]:
        if not isinstance(data, dict):
            return None
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return None
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            return None
        text = parts[0].get("text")
        if not isinstance(text, str) or not text.strip():
            return None
        return text
