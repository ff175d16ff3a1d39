"""Platform adapter and registry tests."""

import pytest

from flowlink.adapters import (
    AdapterRegistry,
    CRMAdapter,
    EmailAdapter,
    GoogleSheetsAdapter,
    PlatformAdapter,
    SlackAdapter,
    WebhookAdapter,
    ZapierAdapter,
    create_default_registry,
)
from flowlink.contracts import Execution, Step
from flowlink.errors import (
    AdapterError,
    ApiError,
    UnsupportedOperationError,
    WorkflowExecutionError,
)


def action(platform, name, **config):
    return Step(type="action", platform=platform, action=name, config=config)


def trigger(platform, event=None, **config):
    return Step(type="trigger", platform=platform, event=event, config=config)


def test_default_registry_knows_builtin_platforms(api_client):
    registry = create_default_registry(api_client)
    assert registry.platforms == [
        "CRM",
        "Email",
        "Google Sheets",
        "Slack",
        "Webhook",
        "Zapier",
    ]
    assert "Slack" in registry
    assert registry.get("Teams") is None
    assert registry.get(None) is None


def test_register_replaces_existing_adapter(api_client):
    registry = AdapterRegistry([SlackAdapter(api_client)])
    replacement = SlackAdapter(api_client)
    registry.register(replacement)
    assert registry.get("Slack") is replacement


def test_register_requires_platform_name(api_client):
    with pytest.raises(ValueError):
        AdapterRegistry().register(PlatformAdapter(api_client))


@pytest.mark.asyncio
async def test_crm_new_record_trigger_uses_last_check(api_client):
    await api_client.create_crm_record({"data": {"name": "John"}})
    execution = Execution(context={"lastCheck": "2024-01-01T00:00:00Z"})

    output = await CRMAdapter(api_client).execute_trigger(
        trigger("CRM", "new_record"), execution
    )

    assert output["newRecords"] == 1
    assert output["records"][0]["data"] == {"name": "John"}
    assert api_client.calls_to("get_crm_records") == [
        {"filters": {"created_after": "2024-01-01T00:00:00Z"}}
    ]


@pytest.mark.asyncio
async def test_crm_updated_record_trigger_defaults_to_start_time(api_client):
    execution = Execution()
    output = await CRMAdapter(api_client).execute_trigger(
        trigger("CRM", "updated_record"), execution
    )
    assert output == {"updatedRecords": 0, "records": []}
    filters = api_client.calls_to("get_crm_records")[0]["filters"]
    assert filters == {"updated_after": execution.start_time.isoformat()}


@pytest.mark.asyncio
async def test_crm_unknown_event_is_rejected(api_client):
    with pytest.raises(UnsupportedOperationError):
        await CRMAdapter(api_client).execute_trigger(
            trigger("CRM", "deleted_record"), Execution()
        )


@pytest.mark.asyncio
async def test_crm_create_and_update_record(api_client):
    adapter = CRMAdapter(api_client)
    execution = Execution(context={"lead": {"name": "Ada", "score": 90}})

    created = await adapter.execute_action(
        action("CRM", "create_record", fields={"name": "{{lead.name}}"}), execution
    )
    assert created["recordId"].startswith("rec_")
    assert created["record"]["data"] == {"name": "Ada"}

    execution.context["steps"] = {"create": created}
    updated = await adapter.execute_action(
        action(
            "CRM",
            "update_record",
            recordId="steps.create.recordId",
            fields={"score": "{{lead.score}}"},
        ),
        execution,
    )
    assert updated["recordId"] == created["recordId"]
    assert api_client.records[created["recordId"]]["data"] == {"score": "90"}


@pytest.mark.asyncio
async def test_crm_update_record_accepts_template_and_literal_ids(api_client):
    adapter = CRMAdapter(api_client)
    record = await api_client.create_crm_record({"data": {}})
    record_id = record["recordId"]
    execution = Execution(context={"id": record_id})

    by_template = await adapter.execute_action(
        action("CRM", "update_record", recordId="{{id}}"), execution
    )
    by_literal = await adapter.execute_action(
        action("CRM", "update_record", recordId=record_id), execution
    )
    assert by_template["recordId"] == by_literal["recordId"] == record_id


@pytest.mark.asyncio
async def test_crm_update_record_requires_record_id(api_client):
    with pytest.raises(WorkflowExecutionError):
        await CRMAdapter(api_client).execute_action(
            action("CRM", "update_record"), Execution()
        )


@pytest.mark.asyncio
async def test_api_failure_is_wrapped_with_step_and_cause(api_client):
    cause = ApiError("Record not found", 404)
    api_client.fail("create_crm_record", cause)
    step = action("CRM", "create_record", fields={})

    with pytest.raises(AdapterError) as exc_info:
        await CRMAdapter(api_client).execute_action(step, Execution())

    assert exc_info.value.step is step
    assert exc_info.value.original_error is cause
    assert "Record not found" in str(exc_info.value)


@pytest.mark.asyncio
async def test_sheets_trigger_and_actions(api_client):
    adapter = GoogleSheetsAdapter(api_client)
    config = {"integrationId": "int-1", "spreadsheetId": "sheet-1", "range": "A1:B"}
    execution = Execution(context={"record": {"name": "John", "email": "j@x.io"}})

    appended = await adapter.execute_action(
        action(
            "Google Sheets",
            "append_row",
            values=["{{record.name}}", "{{record.email}}"],
            **config,
        ),
        execution,
    )
    assert appended == {"rowsAdded": 1, "values": ["John", "j@x.io"]}

    updated = await adapter.execute_action(
        action("Google Sheets", "update_range", values=[["a", "b"], ["c", "d"]], **config),
        execution,
    )
    assert updated["rowsUpdated"] == 2

    polled = await adapter.execute_trigger(trigger("Google Sheets", **config), execution)
    assert polled["rowCount"] == 3
    assert polled["data"][0] == ["John", "j@x.io"]


@pytest.mark.asyncio
async def test_sheets_unknown_action(api_client):
    with pytest.raises(UnsupportedOperationError):
        await GoogleSheetsAdapter(api_client).execute_action(
            action("Google Sheets", "delete_row"), Execution()
        )


@pytest.mark.asyncio
async def test_slack_send_message_interpolates(api_client):
    execution = Execution(context={"record": {"name": "John"}})
    output = await SlackAdapter(api_client).execute_action(
        action(
            "Slack",
            "send_message",
            integrationId="int-9",
            channel="#sales",
            message="New lead: {{record.name}}",
        ),
        execution,
    )
    assert output == {"messageSent": True, "channel": "#sales", "message": "New lead: John"}
    assert api_client.messages == [{"channel": "#sales", "message": "New lead: John"}]

    polled = await SlackAdapter(api_client).execute_trigger(trigger("Slack"), execution)
    assert polled == {"message": "Slack trigger executed"}


@pytest.mark.asyncio
async def test_webhook_trigger_reads_input_payload(api_client):
    adapter = WebhookAdapter(api_client)
    execution = Execution(input_data={"webhook": {"event": "signup"}})
    output = await adapter.execute_trigger(trigger("Webhook"), execution)
    assert output == {"webhookReceived": True, "data": {"event": "signup"}}

    with pytest.raises(UnsupportedOperationError, match="does not support actions"):
        await adapter.execute_action(action("Webhook", "send"), execution)


@pytest.mark.asyncio
async def test_email_action_renders_without_sending(api_client):
    execution = Execution(context={"user": {"email": "a@b.io", "name": "Ada"}})
    output = await EmailAdapter(api_client).execute_action(
        action(
            "Email",
            "send_email",
            to="{{user.email}}",
            subject="Welcome {{user.name}}",
            body="Hi",
        ),
        execution,
    )
    assert output == {
        "emailSent": True,
        "to": "a@b.io",
        "subject": "Welcome Ada",
        "body": "Hi",
    }
    assert api_client.calls == []


@pytest.mark.asyncio
async def test_zapier_action_posts_interpolated_data(api_client):
    execution = Execution(context={"deal": {"amount": 500}})
    output = await ZapierAdapter(api_client).execute_action(
        action(
            "Zapier",
            "trigger_webhook",
            integrationId="int-2",
            webhookUrl="https://hooks.zapier.com/abc",
            data={"amount": "{{deal.amount}}"},
        ),
        execution,
    )
    assert output == {"webhookTriggered": True, "data": {"amount": "500"}}
    assert api_client.webhooks[0]["webhookUrl"] == "https://hooks.zapier.com/abc"

    with pytest.raises(UnsupportedOperationError, match="does not support triggers"):
        await ZapierAdapter(api_client).execute_trigger(trigger("Zapier"), execution)
