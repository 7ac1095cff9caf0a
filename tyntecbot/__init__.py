"""
tyntecbot - 通过 tyntec 发送 WhatsApp 模板消息的机器人适配器
"""

__version__ = "0.1.0"
__logo__ = "📨"
