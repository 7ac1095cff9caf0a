"""托管框架所期望的通道适配器接口。"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

from tyntecbot.bot.activity import Activity, ConversationReference, ResourceResponse


class BotAdapter(ABC):
    """
    通道适配器的抽象基类。

    托管框架要求每个通道适配器都提供同一组操作。
    不支持某个操作的适配器仍需实现它，并在调用时失败。
    """

    @abstractmethod
    async def send_activities(
        self,
        context: TurnContext | None,
        activities: list[Activity],
    ) -> list[ResourceResponse]:
        """
        按顺序发送一批 Activity。

        参数:
            context: 当前回合的上下文。
            activities: 要发送的 Activity 列表。

        返回:
            每个 Activity 对应一个 ResourceResponse，顺序与输入一致。
        """
        pass

    @abstractmethod
    async def update_activity(
        self,
        context: TurnContext | None,
        activity: Activity,
    ) -> ResourceResponse | None:
        """替换之前发送的 Activity。"""
        pass

    @abstractmethod
    async def delete_activity(
        self,
        context: TurnContext | None,
        reference: ConversationReference,
    ) -> None:
        """删除之前发送的 Activity。"""
        pass

    @abstractmethod
    async def continue_conversation(
        self,
        reference: ConversationReference,
        logic: Callable[[TurnContext], Awaitable[None]],
    ) -> None:
        """在已有会话中主动恢复一个回合。"""
        pass

    @abstractmethod
    async def process_activity(
        self,
        request: Any,
        logic: Callable[[TurnContext], Awaitable[Any]],
    ) -> None:
        """将入站请求转换为回合并交给处理管道。"""
        pass


class TurnContext:
    """单个回合的上下文：适配器加上触发该回合的 Activity。"""

    def __init__(self, adapter: BotAdapter, activity: Activity | None = None):
        self.adapter = adapter
        self.activity = activity

    async def send_activity(self, activity: Activity) -> ResourceResponse:
        """发送单个 Activity。"""
        responses = await self.adapter.send_activities(self, [activity])
        return responses[0]

    async def send_activities(self, activities: list[Activity]) -> list[ResourceResponse]:
        """通过适配器发送一批 Activity。"""
        return await self.adapter.send_activities(self, activities)
