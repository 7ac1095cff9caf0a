"""机器人框架的通用 Activity 类型。"""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any


class ActivityTypes(str, Enum):
    """Activity.type 的取值。"""
    MESSAGE = "message"
    CONTACT_RELATION_UPDATE = "contactRelationUpdate"
    CONVERSATION_UPDATE = "conversationUpdate"
    TYPING = "typing"
    END_OF_CONVERSATION = "endOfConversation"
    EVENT = "event"
    INVOKE = "invoke"
    INVOKE_RESPONSE = "invokeResponse"
    DELETE_USER_DATA = "deleteUserData"
    MESSAGE_UPDATE = "messageUpdate"
    MESSAGE_DELETE = "messageDelete"
    INSTALLATION_UPDATE = "installationUpdate"
    MESSAGE_REACTION = "messageReaction"
    SUGGESTION = "suggestion"
    TRACE = "trace"
    HANDOFF = "handoff"
    COMMAND = "command"
    COMMAND_RESULT = "commandResult"


@dataclass
class ChannelAccount:
    """通道上的账户（用户或机器人）。"""
    id: str
    name: str | None = None
    role: str | None = None


@dataclass
class ConversationAccount:
    """通道上的会话。"""
    id: str
    name: str | None = None
    is_group: bool | None = None
    conversation_type: str | None = None


@dataclass
class ConversationReference:
    """指向会话中特定位置的引用。"""
    activity_id: str | None = None
    user: ChannelAccount | None = None
    bot: ChannelAccount | None = None
    conversation: ConversationAccount | None = None
    channel_id: str | None = None
    locale: str | None = None
    service_url: str | None = None


@dataclass
class ResourceResponse:
    """发送 Activity 后返回的资源标识符。"""
    id: str


@dataclass
class Activity:
    """
    会话中的一个回合。

    所有字段都是可选的，None 表示字段不存在。
    适配器只读取 Activity，从不构造或修改它。
    """
    action: str | None = None
    attachment_layout: str | None = None
    attachments: list[Any] | None = None
    caller_id: str | None = None
    channel_data: Any = None  # 通道特定的数据
    channel_id: str | None = None
    code: str | None = None
    conversation: ConversationAccount | None = None
    delivery_mode: str | None = None
    entities: list[Any] | None = None
    expiration: datetime | None = None
    from_: ChannelAccount | None = None  # 框架中的 "from"
    history_disclosed: bool | None = None
    id: str | None = None
    importance: str | None = None
    input_hint: str | None = None
    label: str | None = None
    listen_for: list[str] | None = None
    local_timestamp: datetime | None = None
    local_timezone: str | None = None
    locale: str | None = None
    members_added: list[ChannelAccount] | None = None
    members_removed: list[ChannelAccount] | None = None
    name: str | None = None
    reactions_added: list[Any] | None = None
    reactions_removed: list[Any] | None = None
    recipient: ChannelAccount | None = None
    relates_to: ConversationReference | None = None
    reply_to_id: str | None = None
    semantic_action: Any = None
    service_url: str | None = None
    speak: str | None = None
    suggested_actions: Any = None
    summary: str | None = None
    text: str | None = None
    text_format: str | None = None
    text_highlights: list[Any] | None = None
    timestamp: datetime | None = None
    topic_name: str | None = None
    type: str | None = None
    value: Any = None
    value_type: str | None = None

    @classmethod
    def field_names(cls) -> list[str]:
        """Activity 的所有字段名。"""
        return [f.name for f in fields(cls)]


def message_activity(channel_data: Any = None, **kwargs: Any) -> Activity:
    """创建 type 为 message 的 Activity。"""
    return Activity(type=ActivityTypes.MESSAGE.value, channel_data=channel_data, **kwargs)
