"""Activity.channel_data 中携带的 WhatsApp 负载。"""

from typing import Any

from pydantic import Field, ValidationError

from tyntecbot.errors import ChannelDataError
from tyntecbot.tyntec.messages import WhatsAppTemplate, WireModel


class TyntecChannelData(WireModel):
    """
    发送一条 WhatsApp 模板消息所需的通道数据。

    在 channel_data 中的形状为 {"whatsApp": <目标号码>, "template": {...}}。
    """
    destination_number: str = Field(alias="whatsApp")
    template: WhatsAppTemplate


def parse_channel_data(raw: Any) -> TyntecChannelData:
    """
    将 Activity.channel_data 解析为 TyntecChannelData。

    参数:
        raw: TyntecChannelData 实例，或具有相同形状的字典。

    返回:
        已验证的通道数据。
    """
    if isinstance(raw, TyntecChannelData):
        return raw
    if raw is None:
        raise ChannelDataError(
            "TyntecWhatsAppAdapter: Activity.channel_data is required "
            "(expected {\"whatsApp\": ..., \"template\": ...})"
        )
    try:
        return TyntecChannelData.model_validate(raw)
    except ValidationError as e:
        raise ChannelDataError(f"TyntecWhatsAppAdapter: invalid Activity.channel_data: {e}") from e
