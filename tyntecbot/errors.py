"""tyntecbot 的异常类型。"""

from typing import Any


class TyntecBotError(Exception):
    """所有 tyntecbot 错误的基类。"""


class OperationNotSupportedError(TyntecBotError, NotImplementedError):
    """适配器不支持的生命周期操作。"""

    def __init__(self, operation: str):
        super().__init__(f"Operation {operation} not supported.")
        self.operation = operation


class UnsupportedFieldError(TyntecBotError):
    """Activity 携带了适配器拒绝的字段（或非 message 类型）。"""

    def __init__(self, field: str, value: Any, message: str | None = None):
        super().__init__(
            message or f"TyntecWhatsAppAdapter: Activity.{field} not supported: {value!r}"
        )
        self.field = field
        self.value = value


class ChannelDataError(TyntecBotError):
    """Activity.channel_data 缺失或无法解析为 WhatsApp 负载。"""


class TyntecApiError(TyntecBotError):
    """tyntec API 返回的非 2xx 响应。"""

    def __init__(
        self,
        status_code: int,
        title: str | None = None,
        detail: str | None = None,
    ):
        message = f"tyntec API error {status_code}"
        if title:
            message += f": {title}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.status_code = status_code
        self.title = title
        self.detail = detail
