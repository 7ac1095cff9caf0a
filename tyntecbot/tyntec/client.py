"""tyntec Conversations API 的 HTTP 客户端。"""

from typing import Any

import httpx
from loguru import logger

from tyntecbot.errors import TyntecApiError
from tyntecbot.tyntec.messages import WhatsAppMessageRequest

TYNTEC_API_BASE = "https://api.tyntec.com"
MESSAGES_PATH = "/conversations/v3/messages"


class TyntecClient:
    """
    通过 tyntec Conversations API v3 发送 WhatsApp 消息的客户端。

    每次调用只发送一次请求，不做重试。
    """

    def __init__(
        self,
        api_key: str,
        api_base: str = TYNTEC_API_BASE,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def __repr__(self) -> str:
        return f"TyntecClient(api_base={self.api_base!r})"

    @property
    def messages_url(self) -> str:
        return f"{self.api_base}{MESSAGES_PATH}"

    async def send_whatsapp_message(self, message: WhatsAppMessageRequest) -> str:
        """
        发送一条 WhatsApp 消息。

        Args:
            message: 出站消息。

        Returns:
            tyntec 分配的消息 ID。

        Raises:
            TyntecApiError: API 返回非 2xx 状态。
            httpx.HTTPError: 传输层错误。
        """
        headers = {
            "apikey": self._api_key,
            "Accept": "application/json",
        }
        payload = message.to_wire()

        logger.debug(
            f"正在向 {self.messages_url} 发送 {payload['content']['contentType']} 消息"
        )

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.post(self.messages_url, headers=headers, json=payload)

        if not response.is_success:
            raise _api_error(response)

        message_id = response.json()["messageId"]
        logger.debug(f"tyntec 已接受消息 {message_id}")
        return message_id


def _api_error(response: httpx.Response) -> TyntecApiError:
    """从 problem+json 响应体构建 TyntecApiError。"""
    title = detail = None
    try:
        data: Any = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        title = data.get("title")
        detail = data.get("detail")
    if title is None:
        title = response.reason_phrase or None
    logger.warning(f"tyntec API 返回 {response.status_code}：{title}")
    return TyntecApiError(response.status_code, title=title, detail=detail)
