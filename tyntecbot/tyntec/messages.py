"""
tyntec Conversations API 的 WhatsApp 消息模式。

字段名和判别字面量就是线上格式，必须与网关保持一致。
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """线上消息模型的基类：camelCase 字段名，创建后不可变。"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """转换为请求体 JSON（省略未设置的可选字段）。"""
        return self.model_dump(by_alias=True, exclude_none=True)


# ============================================================================
# 出站
# ============================================================================


class BaseMedia(WireModel):
    url: str


class WhatsAppImage(BaseMedia):
    caption: str | None = None


class WhatsAppVideo(BaseMedia):
    caption: str | None = None


class WhatsAppDocument(BaseMedia):
    caption: str | None = None
    filename: str | None = None


class TemplateModel(WireModel):
    """模板对象的基类：保留未声明的键（例如 header、buttons），原样发送。"""

    model_config = ConfigDict(extra="allow")


class TemplateTextBodyComponent(TemplateModel):
    """模板正文中的一个文本替换。"""
    type: Literal["text"] = "text"
    text: str


class TemplateComponents(TemplateModel):
    body: list[TemplateTextBodyComponent]


class WhatsAppTemplate(TemplateModel):
    """对预先注册的消息模板的引用。"""
    template_id: str
    template_language: str
    components: TemplateComponents


class AudioContent(WireModel):
    content_type: Literal["audio"] = "audio"
    audio: BaseMedia


class DocumentContent(WireModel):
    content_type: Literal["document"] = "document"
    document: WhatsAppDocument


class ImageContent(WireModel):
    content_type: Literal["image"] = "image"
    image: WhatsAppImage


class StickerContent(WireModel):
    content_type: Literal["sticker"] = "sticker"
    sticker: BaseMedia


class TemplateContent(WireModel):
    content_type: Literal["template"] = "template"
    template: WhatsAppTemplate


class TextContent(WireModel):
    content_type: Literal["text"] = "text"
    text: str


class VideoContent(WireModel):
    content_type: Literal["video"] = "video"
    video: WhatsAppVideo


OutboundContent = Annotated[
    Union[
        AudioContent,
        DocumentContent,
        ImageContent,
        StickerContent,
        TemplateContent,
        TextContent,
        VideoContent,
    ],
    Field(discriminator="content_type"),
]


class WhatsAppMessageRequest(WireModel):
    """发送到网关的出站消息。"""
    from_: str = Field(alias="from")
    to: str
    channel: Literal["whatsapp"] = "whatsapp"
    content: OutboundContent


# ============================================================================
# 入站（仅模式，不做转换）
# ============================================================================


class MoMedia(WireModel):
    caption: str | None = None
    media_id: str | None = None
    type: Literal["audio", "document", "image", "sticker", "video"]
    url: str


class MediaMoContent(WireModel):
    content_type: Literal["media"] = "media"
    media: MoMedia


class TextMoContent(WireModel):
    content_type: Literal["text"] = "text"
    text: str


class WhatsAppLocation(WireModel):
    address: str | None = None
    latitude: float
    longitude: float
    name: str | None = None


class LocationContent(WireModel):
    content_type: Literal["location"] = "location"
    location: WhatsAppLocation


class MoContext(WireModel):
    is_forwarded: bool | None = None
    is_frequently_forwarded: bool | None = None
    message_id: str | None = None


class WhatsAppSender(WireModel):
    sender_name: str | None = None


InboundContent = Annotated[
    Union[MediaMoContent, TextMoContent, LocationContent],
    Field(discriminator="content_type"),
]


class MoMessage(WireModel):
    """网关投递的入站消息。"""
    channel: str
    content: InboundContent
    context: MoContext | None = None
    event: Literal["MoMessage"]
    from_: str = Field(alias="from")
    group_id: str | None = None
    message_id: str
    timestamp: str | None = None
    to: str | None = None
    whatsapp: WhatsAppSender | None = None
