from typing import Any

import pytest
from loguru import logger

from tyntecbot.tyntec.adapter import TyntecWhatsAppAdapter, TyntecWhatsAppAdapterSettings
from tyntecbot.tyntec.messages import WhatsAppMessageRequest

WABA_NUMBER = "491709999999"
DESTINATION = "491701234567"

TEMPLATE = {
    "templateId": "order_update",
    "templateLanguage": "de",
    "components": {
        "body": [
            {"type": "text", "text": "Max"},
            {"type": "text", "text": "4711"},
        ]
    },
}


class FakeTyntecClient:
    """记录发送的消息，可在第 N 次调用时失败。"""

    def __init__(self, fail_with: Exception | None = None, fail_on_call: int = 0):
        self.sent: list[WhatsAppMessageRequest] = []
        self.fail_with = fail_with
        self.fail_on_call = fail_on_call

    async def send_whatsapp_message(self, message: WhatsAppMessageRequest) -> str:
        call = len(self.sent) + 1
        if self.fail_with is not None and call == self.fail_on_call:
            raise self.fail_with
        self.sent.append(message)
        return f"msg-{call}"


@pytest.fixture
def client() -> FakeTyntecClient:
    return FakeTyntecClient()


@pytest.fixture
def adapter(client: FakeTyntecClient) -> TyntecWhatsAppAdapter:
    settings = TyntecWhatsAppAdapterSettings(tyntec_apikey="secret-key", waba_number=WABA_NUMBER)
    return TyntecWhatsAppAdapter(settings, client=client)


@pytest.fixture
def channel_data() -> dict[str, Any]:
    return {"whatsApp": DESTINATION, "template": TEMPLATE}


@pytest.fixture
def warnings():
    """收集 loguru 的 WARNING 消息。"""
    messages: list[str] = []
    handler_id = logger.add(
        lambda m: messages.append(m.record["message"]),
        level="WARNING",
        format="{message}",
    )
    yield messages
    logger.remove(handler_id)
