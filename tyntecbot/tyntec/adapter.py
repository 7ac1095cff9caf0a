"""通过 tyntec 发送 WhatsApp 模板消息的机器人适配器。"""

from enum import Enum
from typing import Any, Awaitable, Callable

from loguru import logger
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from tyntecbot.bot.activity import Activity, ActivityTypes, ConversationReference, ResourceResponse
from tyntecbot.bot.adapter import BotAdapter, TurnContext
from tyntecbot.errors import OperationNotSupportedError, UnsupportedFieldError
from tyntecbot.tyntec.channel_data import parse_channel_data
from tyntecbot.tyntec.client import TyntecClient
from tyntecbot.tyntec.messages import TemplateContent, WhatsAppMessageRequest


class FieldPolicy(str, Enum):
    """适配器对 Activity 字段的处理方式。"""
    IGNORE = "ignore"  # 静默忽略
    WARN = "warn"  # 记录警告后继续
    REJECT = "reject"  # 拒绝整个 Activity


# 覆盖 Activity 的每个字段。type 和 channel_data 由 compose_whatsapp_message 单独处理。
FIELD_POLICY: dict[str, FieldPolicy] = {
    "action": FieldPolicy.WARN,
    "attachment_layout": FieldPolicy.WARN,
    "attachments": FieldPolicy.REJECT,
    "caller_id": FieldPolicy.WARN,
    "channel_data": FieldPolicy.IGNORE,
    "channel_id": FieldPolicy.IGNORE,
    "code": FieldPolicy.WARN,
    "conversation": FieldPolicy.WARN,
    "delivery_mode": FieldPolicy.WARN,
    "entities": FieldPolicy.WARN,
    "expiration": FieldPolicy.WARN,
    "from_": FieldPolicy.REJECT,
    "history_disclosed": FieldPolicy.WARN,
    "id": FieldPolicy.IGNORE,
    "importance": FieldPolicy.WARN,
    "input_hint": FieldPolicy.WARN,
    "label": FieldPolicy.WARN,
    "listen_for": FieldPolicy.WARN,
    "local_timestamp": FieldPolicy.IGNORE,
    "local_timezone": FieldPolicy.IGNORE,
    "locale": FieldPolicy.IGNORE,
    "members_added": FieldPolicy.WARN,
    "members_removed": FieldPolicy.WARN,
    "name": FieldPolicy.WARN,
    "reactions_added": FieldPolicy.WARN,
    "reactions_removed": FieldPolicy.WARN,
    "recipient": FieldPolicy.REJECT,
    "relates_to": FieldPolicy.WARN,
    "reply_to_id": FieldPolicy.WARN,
    "semantic_action": FieldPolicy.WARN,
    "service_url": FieldPolicy.WARN,
    "speak": FieldPolicy.WARN,
    "suggested_actions": FieldPolicy.WARN,
    "summary": FieldPolicy.WARN,
    "text": FieldPolicy.REJECT,
    "text_format": FieldPolicy.REJECT,
    "text_highlights": FieldPolicy.WARN,
    "timestamp": FieldPolicy.IGNORE,
    "topic_name": FieldPolicy.WARN,
    "type": FieldPolicy.IGNORE,
    "value": FieldPolicy.WARN,
    "value_type": FieldPolicy.WARN,
}


def wire_field_name(name: str) -> str:
    """Activity 属性名在框架中的字段名，例如 service_url -> serviceUrl，from_ -> from。"""
    return to_camel(name.rstrip("_"))


def check_activity_fields(activity: Activity) -> None:
    """
    按 FIELD_POLICY 检查 Activity 的字段。

    WARN 字段每个记录一条警告；遇到第一个 REJECT 字段或非 message 类型时
    抛出 UnsupportedFieldError。
    """
    for name, policy in FIELD_POLICY.items():
        value = getattr(activity, name)
        if value is None or policy is FieldPolicy.IGNORE:
            continue
        message = f"TyntecWhatsAppAdapter: Activity.{wire_field_name(name)} not supported: {value!r}"
        if policy is FieldPolicy.REJECT:
            raise UnsupportedFieldError(name, value, message=message)
        logger.warning(message)

    if activity.type != ActivityTypes.MESSAGE:
        raise UnsupportedFieldError(
            "type",
            activity.type,
            message=(
                f"TyntecWhatsAppAdapter: Activity.type other than "
                f"{ActivityTypes.MESSAGE.value} not supported: {activity.type!r}"
            ),
        )


class TyntecWhatsAppAdapterSettings(BaseModel):
    """构造 TyntecWhatsAppAdapter 所需的设置。"""
    tyntec_apikey: str = Field(min_length=1, repr=False)  # 不记录到日志
    waba_number: str = Field(min_length=1)  # WhatsApp Business 发送号码


class TyntecWhatsAppAdapter(BotAdapter):
    """
    将 message 类型的 Activity 作为 WhatsApp 模板消息发送的适配器。

    目标号码和模板取自 Activity.channel_data：
        {"whatsApp": "491701234567", "template": {...}}
    发送号码取自设置。只支持 send_activities，其余操作总是失败。
    """

    name = "tyntec-whatsapp"

    def __init__(
        self,
        settings: TyntecWhatsAppAdapterSettings,
        client: TyntecClient | None = None,
    ):
        self.tyntec_client = client or TyntecClient(settings.tyntec_apikey)
        self.waba_number = settings.waba_number
        logger.info(f"TyntecWhatsAppAdapter 已创建，发送号码 {self.waba_number}")

    async def continue_conversation(
        self,
        reference: ConversationReference,
        logic: Callable[[TurnContext], Awaitable[None]],
    ) -> None:
        raise OperationNotSupportedError("continueConversation")

    async def delete_activity(
        self,
        context: TurnContext | None,
        reference: ConversationReference,
    ) -> None:
        raise OperationNotSupportedError("deleteActivity")

    async def process_activity(
        self,
        request: Any,
        logic: Callable[[TurnContext], Awaitable[Any]],
    ) -> None:
        raise OperationNotSupportedError("processActivity")

    async def update_activity(
        self,
        context: TurnContext | None,
        activity: Activity,
    ) -> ResourceResponse | None:
        raise OperationNotSupportedError("updateActivity")

    async def send_activities(
        self,
        context: TurnContext | None,
        activities: list[Activity],
    ) -> list[ResourceResponse]:
        """
        逐个发送 Activity。

        前一个请求完成后才发送下一个。任何错误都会中止剩余的批次，
        并原样传播给调用者。
        """
        responses: list[ResourceResponse] = []
        for activity in activities:
            message = self.compose_whatsapp_message(activity)

            message_id = await self.tyntec_client.send_whatsapp_message(message)

            responses.append(ResourceResponse(id=message_id))
        return responses

    def compose_whatsapp_message(self, activity: Activity) -> WhatsAppMessageRequest:
        """检查 Activity 并构建出站模板消息。"""
        check_activity_fields(activity)
        channel_data = parse_channel_data(activity.channel_data)
        return WhatsAppMessageRequest(
            from_=self.waba_number,
            to=channel_data.destination_number,
            content=TemplateContent(template=channel_data.template),
        )
