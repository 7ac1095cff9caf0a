"""与托管机器人框架对接的通用类型。"""

from tyntecbot.bot.activity import Activity, ActivityTypes, ConversationReference, ResourceResponse
from tyntecbot.bot.adapter import BotAdapter, TurnContext

__all__ = [
    "Activity",
    "ActivityTypes",
    "BotAdapter",
    "ConversationReference",
    "ResourceResponse",
    "TurnContext",
]
