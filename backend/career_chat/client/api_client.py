"""
Async HTTP client for the career chat API.

Retries only failures the server marks retryable (and transport errors),
with capped exponential backoff.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional

import httpx

from career_chat.client.errors import (
    DEFAULT_BASE_DELAY,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    ChatApiError,
    classify_error,
    get_retry_delay,
    should_retry,
)
from career_chat.core.logger import logger
from career_chat.models.chat import ChatAnalytics, SendMessageResponse
from career_chat.models.chat_session import ChatMessage, ChatSession


class CareerChatClient:
    """Typed wrapper around the chat and session endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self._sleep = sleep

    async def __aenter__(self) -> "CareerChatClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Optional[dict] = None) -> Any:
        attempt = 0
        while True:
            try:
                response = await self._client.request(method, path, json=json)
                if response.is_error:
                    raise ChatApiError.from_response(response)
                return response.json()
            except (ChatApiError, httpx.TransportError) as exc:
                if not should_retry(exc, attempt, self.max_retries):
                    raise
                delay = get_retry_delay(attempt, self.base_delay, self.max_delay)
                logger.info(
                    f"{method} {path} failed ({classify_error(exc).kind}); "
                    f"retry {attempt + 1}/{self.max_retries} in {delay:.1f}s"
                )
                await self._sleep(delay)
                attempt += 1

    # ---- chat ----

    async def send_message(self, content: str, session_id: Optional[str] = None) -> SendMessageResponse:
        payload = {"content": content, "sessionId": session_id}
        data = await self._request("POST", "/api/chat/messages", json=payload)
        return SendMessageResponse.model_validate(data)

    async def get_messages(self, session_id: str) -> list[ChatMessage]:
        data = await self._request("GET", f"/api/chat/messages/{session_id}")
        return [ChatMessage.model_validate(item) for item in data]

    async def get_rate_limit_status(self) -> int:
        """Remaining guest messages (-1 when unlimited)."""
        data = await self._request("GET", "/api/chat/rate-limit")
        return int(data["remaining"])

    async def reset_rate_limit(self) -> bool:
        data = await self._request("POST", "/api/chat/rate-limit/reset")
        return bool(data.get("success"))

    async def get_analytics(self) -> ChatAnalytics:
        data = await self._request("GET", "/api/chat/analytics")
        return ChatAnalytics.model_validate(data)

    # ---- sessions ----

    async def list_sessions(self) -> list[ChatSession]:
        data = await self._request("GET", "/api/sessions")
        return [ChatSession.model_validate(item) for item in data]

    async def create_session(self, title: Optional[str] = None) -> ChatSession:
        data = await self._request("POST", "/api/sessions", json={"title": title})
        return ChatSession.model_validate(data)

    async def delete_session(self, session_id: str) -> bool:
        data = await self._request("DELETE", f"/api/sessions/{session_id}")
        return bool(data.get("success"))
