from typing import Any

import pytest

from conftest import DESTINATION, TEMPLATE, WABA_NUMBER, FakeTyntecClient
from tyntecbot.bot.activity import (
    Activity,
    ActivityTypes,
    ChannelAccount,
    ConversationReference,
    message_activity,
)
from tyntecbot.bot.adapter import TurnContext
from tyntecbot.errors import (
    ChannelDataError,
    OperationNotSupportedError,
    TyntecApiError,
    UnsupportedFieldError,
)
from tyntecbot.tyntec.adapter import (
    FIELD_POLICY,
    FieldPolicy,
    TyntecWhatsAppAdapter,
    TyntecWhatsAppAdapterSettings,
    wire_field_name,
)
from tyntecbot.tyntec.channel_data import TyntecChannelData
from tyntecbot.tyntec.client import TyntecClient


REJECTED_FIELDS: list[tuple[str, Any]] = [
    ("attachments", [{"contentType": "image/png", "contentUrl": "https://example.com/a.png"}]),
    ("from_", ChannelAccount(id="bot")),
    ("recipient", ChannelAccount(id="user")),
    ("text", "hello"),
    ("text_format", "markdown"),
]


# 测试字段策略表覆盖 Activity 的每个字段
def test_field_policy_covers_every_activity_field() -> None:
    assert set(FIELD_POLICY) == set(Activity.field_names())
    rejected = {name for name, policy in FIELD_POLICY.items() if policy is FieldPolicy.REJECT}
    assert rejected == {name for name, _ in REJECTED_FIELDS}


# 测试批量发送按输入顺序返回 ID
async def test_send_activities_returns_ids_in_order(adapter, client, channel_data) -> None:
    activities = [message_activity(channel_data=channel_data) for _ in range(3)]

    responses = await adapter.send_activities(None, activities)

    assert [r.id for r in responses] == ["msg-1", "msg-2", "msg-3"]
    assert len(client.sent) == 3


# 测试空批次不发送任何请求
async def test_send_activities_empty_batch(adapter, client) -> None:
    assert await adapter.send_activities(None, []) == []
    assert client.sent == []


# 测试构建的消息与线上格式完全一致
def test_compose_whatsapp_message_wire_shape(adapter, channel_data) -> None:
    message = adapter.compose_whatsapp_message(message_activity(channel_data=channel_data))

    assert message.to_wire() == {
        "from": WABA_NUMBER,
        "to": DESTINATION,
        "channel": "whatsapp",
        "content": {"contentType": "template", "template": TEMPLATE},
    }


# 测试接受类型化的通道数据
async def test_send_activities_accepts_typed_channel_data(adapter, client) -> None:
    typed = TyntecChannelData.model_validate({"whatsApp": DESTINATION, "template": TEMPLATE})

    await adapter.send_activities(None, [message_activity(channel_data=typed)])

    assert client.sent[0].to == DESTINATION
    assert client.sent[0].content.template.template_id == "order_update"


# 测试被拒绝的字段在发送前失败
@pytest.mark.parametrize("field, value", REJECTED_FIELDS)
async def test_rejected_field_fails_before_send(adapter, client, channel_data, field, value) -> None:
    activity = message_activity(channel_data=channel_data, **{field: value})

    with pytest.raises(UnsupportedFieldError) as exc_info:
        await adapter.send_activities(None, [activity])

    assert exc_info.value.field == field
    assert exc_info.value.value == value
    assert f"Activity.{wire_field_name(field)} not supported" in str(exc_info.value)
    assert client.sent == []


# 测试非 message 类型被拒绝
@pytest.mark.parametrize("activity_type", [ActivityTypes.TYPING.value, ActivityTypes.EVENT.value, None])
async def test_non_message_type_rejected(adapter, client, channel_data, activity_type) -> None:
    activity = Activity(type=activity_type, channel_data=channel_data)

    with pytest.raises(UnsupportedFieldError) as exc_info:
        await adapter.send_activities(None, [activity])

    assert exc_info.value.field == "type"
    assert "other than message" in str(exc_info.value)
    assert client.sent == []


# 测试第 k 个 Activity 被拒绝时只发送了 k-1 个
async def test_rejection_aborts_remaining_batch(adapter, client, channel_data) -> None:
    activities = [
        message_activity(channel_data=channel_data),
        message_activity(channel_data=channel_data),
        message_activity(channel_data=channel_data, text="not allowed"),
        message_activity(channel_data=channel_data),
    ]

    with pytest.raises(UnsupportedFieldError):
        await adapter.send_activities(None, activities)

    assert len(client.sent) == 2


# 测试客户端错误原样传播并中止批次
async def test_delivery_error_propagates_unchanged(channel_data) -> None:
    error = TyntecApiError(403, title="Forbidden")
    client = FakeTyntecClient(fail_with=error, fail_on_call=2)
    adapter = TyntecWhatsAppAdapter(
        TyntecWhatsAppAdapterSettings(tyntec_apikey="k", waba_number=WABA_NUMBER),
        client=client,
    )
    activities = [message_activity(channel_data=channel_data) for _ in range(3)]

    with pytest.raises(TyntecApiError) as exc_info:
        await adapter.send_activities(None, activities)

    assert exc_info.value is error
    assert len(client.sent) == 1


# 测试仅警告的字段不阻止发送，且每个字段恰好一条警告
async def test_warn_only_fields_log_once_each(adapter, client, channel_data, warnings) -> None:
    activity = message_activity(
        channel_data=channel_data,
        service_url="https://smba.example.com",
        speak="hallo",
    )

    responses = await adapter.send_activities(None, [activity])

    assert [r.id for r in responses] == ["msg-1"]
    assert len(warnings) == 2
    assert sum("Activity.serviceUrl" in w for w in warnings) == 1
    assert sum("Activity.speak" in w for w in warnings) == 1


# 测试所有仅警告的字段同时存在
async def test_all_warn_only_fields(adapter, client, channel_data, warnings) -> None:
    warn_fields = [name for name, policy in FIELD_POLICY.items() if policy is FieldPolicy.WARN]
    activity = message_activity(channel_data=channel_data, **{name: "x" for name in warn_fields})

    await adapter.send_activities(None, [activity])

    assert len(client.sent) == 1
    assert len(warnings) == len(warn_fields)
    for name, warning in zip(warn_fields, warnings):
        assert f"Activity.{wire_field_name(name)} not supported" in warning


# 测试忽略的字段不产生警告
async def test_ignored_fields_are_silent(adapter, client, channel_data, warnings) -> None:
    activity = message_activity(
        channel_data=channel_data,
        id="activity-1",
        channel_id="whatsapp",
        locale="de-DE",
    )

    await adapter.send_activities(None, [activity])

    assert warnings == []
    assert len(client.sent) == 1


# 测试缺失或格式错误的通道数据
@pytest.mark.parametrize(
    "bad_channel_data",
    [None, {"whatsApp": DESTINATION}, {"template": TEMPLATE}, "491701234567"],
)
async def test_invalid_channel_data(adapter, client, bad_channel_data) -> None:
    with pytest.raises(ChannelDataError):
        await adapter.send_activities(None, [message_activity(channel_data=bad_channel_data)])
    assert client.sent == []


# 测试不支持的操作总是失败
async def test_unsupported_operations(adapter) -> None:
    async def logic(context: TurnContext) -> None:
        pass

    reference = ConversationReference(activity_id="1")
    calls = [
        ("continueConversation", adapter.continue_conversation(reference, logic)),
        ("deleteActivity", adapter.delete_activity(None, reference)),
        ("updateActivity", adapter.update_activity(None, message_activity())),
        ("processActivity", adapter.process_activity(object(), logic)),
    ]
    for operation, call in calls:
        with pytest.raises(OperationNotSupportedError) as exc_info:
            await call
        assert str(exc_info.value) == f"Operation {operation} not supported."
        assert isinstance(exc_info.value, NotImplementedError)


# 测试 TurnContext 通过适配器发送
async def test_turn_context_send_activity(adapter, client, channel_data) -> None:
    context = TurnContext(adapter)

    response = await context.send_activity(message_activity(channel_data=channel_data))

    assert response.id == "msg-1"
    assert client.sent[0].from_ == WABA_NUMBER


# 测试默认创建绑定 API 密钥的客户端，且密钥不出现在 repr 中
def test_adapter_builds_default_client() -> None:
    settings = TyntecWhatsAppAdapterSettings(tyntec_apikey="secret-key", waba_number=WABA_NUMBER)
    adapter = TyntecWhatsAppAdapter(settings)

    assert isinstance(adapter.tyntec_client, TyntecClient)
    assert adapter.waba_number == WABA_NUMBER
    assert "secret-key" not in repr(settings)
    assert "secret-key" not in repr(adapter.tyntec_client)


# 测试警告和错误中使用框架的字段名
def test_wire_field_name() -> None:
    assert wire_field_name("service_url") == "serviceUrl"
    assert wire_field_name("from_") == "from"
    assert wire_field_name("text_format") == "textFormat"
    assert wire_field_name("speak") == "speak"


# 测试空字符串、空列表等假值也算作存在的被拒绝字段
@pytest.mark.parametrize("field, value", [("text", ""), ("attachments", []), ("text_format", "")])
async def test_falsy_rejected_field_still_rejected(adapter, client, channel_data, field, value) -> None:
    activity = message_activity(channel_data=channel_data, **{field: value})

    with pytest.raises(UnsupportedFieldError) as exc_info:
        await adapter.send_activities(None, [activity])

    assert exc_info.value.field == field
    assert client.sent == []


# 测试假值的仅警告字段恰好产生一条警告
@pytest.mark.parametrize(
    "field, value",
    [("history_disclosed", False), ("speak", ""), ("entities", []), ("value", 0)],
)
async def test_falsy_warn_only_field_warns_once(adapter, client, channel_data, warnings, field, value) -> None:
    activity = message_activity(channel_data=channel_data, **{field: value})

    responses = await adapter.send_activities(None, [activity])

    assert len(responses) == 1
    assert warnings == [
        f"TyntecWhatsAppAdapter: Activity.{wire_field_name(field)} not supported: {value!r}"
    ]


# 测试模板中未声明的组件和字段原样发送
def test_compose_keeps_extra_template_keys(adapter) -> None:
    template = {
        "templateId": "order_update",
        "templateLanguage": "de",
        "components": {
            "header": [{"type": "image", "image": {"url": "https://example.com/h.png"}}],
            "body": [{"type": "text", "text": "Max", "example": "Erika"}],
            "button": [{"type": "quick_reply", "index": 0, "payload": "yes"}],
        },
    }
    activity = message_activity(channel_data={"whatsApp": DESTINATION, "template": template})

    message = adapter.compose_whatsapp_message(activity)

    assert message.to_wire()["content"] == {"contentType": "template", "template": template}
