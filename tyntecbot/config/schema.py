"""使用 Pydantic 的配置模式。"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from tyntecbot.tyntec.adapter import TyntecWhatsAppAdapterSettings


class TyntecConfig(BaseModel):
    """tyntec 网关配置。"""
    api_key: str = Field(default="", repr=False)
    waba_number: str = ""  # WhatsApp Business 发送号码，例如 "491709999999"
    api_base: str = "https://api.tyntec.com"
    timeout: float = 30.0  # 秒


class Config(BaseSettings):
    """tyntecbot 的根配置。"""
    model_config = SettingsConfigDict(
        env_prefix="TYNTECBOT_",
        env_nested_delimiter="__",
    )

    tyntec: TyntecConfig = Field(default_factory=TyntecConfig)

    def adapter_settings(self) -> TyntecWhatsAppAdapterSettings:
        """获取适配器设置。缺少 API 密钥或发送号码时抛出 ValueError。"""
        from tyntecbot.tyntec.adapter import TyntecWhatsAppAdapterSettings

        missing = [
            name for name, value in (
                ("tyntec.apiKey", self.tyntec.api_key),
                ("tyntec.wabaNumber", self.tyntec.waba_number),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"缺少配置：{', '.join(missing)}")
        return TyntecWhatsAppAdapterSettings(
            tyntec_apikey=self.tyntec.api_key,
            waba_number=self.tyntec.waba_number,
        )
