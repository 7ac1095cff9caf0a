"""tyntec WhatsApp 网关：消息模式、HTTP 客户端和机器人适配器。"""

from tyntecbot.tyntec.adapter import TyntecWhatsAppAdapter, TyntecWhatsAppAdapterSettings
from tyntecbot.tyntec.client import TyntecClient

__all__ = ["TyntecClient", "TyntecWhatsAppAdapter", "TyntecWhatsAppAdapterSettings"]
