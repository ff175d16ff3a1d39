"""End-to-end runs of CRM driven workflows on the in-memory API."""

import pytest

from flowlink import ExecutionStatus, WorkflowEngine
from flowlink.persistence import InMemoryExecutionStore


@pytest.mark.asyncio
async def test_new_lead_notifies_slack(api_client, config, make_workflow):
    store = InMemoryExecutionStore()
    engine = WorkflowEngine(api_client=api_client, store=store, config=config)
    await api_client.create_crm_record({"data": {"name": "John"}})
    workflow = make_workflow(
        {"type": "trigger", "platform": "CRM", "event": "new_record"},
        {
            "type": "action",
            "platform": "Slack",
            "action": "send_message",
            "config": {
                "integrationId": "slack-1",
                "channel": "#sales",
                "message": "New lead: {{record.name}}",
            },
        },
    )

    execution = await engine.execute_workflow(workflow, context={"record": {"name": "John"}})

    assert execution.status is ExecutionStatus.COMPLETED
    assert execution.steps[0].output["newRecords"] == 1
    assert execution.steps[1].output["message"] == "New lead: John"
    assert api_client.calls_to("send_slack_message") == [
        {"integration_id": "slack-1", "channel": "#sales", "message": "New lead: John"}
    ]

    record = await store.get_execution(execution.id)
    assert record.status == "completed"
    assert record.steps == 2


@pytest.mark.asyncio
async def test_qualified_leads_are_logged_to_sheets(api_client, config, make_workflow):
    engine = WorkflowEngine(api_client=api_client, config=config)
    workflow = make_workflow(
        {"type": "trigger", "platform": "Webhook"},
        {
            "type": "condition",
            "platform": "CRM",
            "config": {"field": "webhook.score", "operator": "greater_than", "value": "50"},
        },
        {
            "id": "lead",
            "type": "action",
            "platform": "CRM",
            "action": "create_record",
            "config": {"fields": {"email": "{{webhook.email}}"}},
        },
        {"type": "delay", "config": {"delay": 1}},
        {
            "type": "action",
            "platform": "Google Sheets",
            "action": "append_row",
            "config": {
                "integrationId": "gs-1",
                "spreadsheetId": "leads",
                "range": "A:B",
                "values": ["{{steps.lead.recordId}}", "{{webhook.email}}"],
            },
        },
    )

    hot = {"webhook": {"email": "hot@lead.io", "score": 80}}
    cold = {"webhook": {"email": "cold@lead.io", "score": 20}}
    hot_run = await engine.execute_workflow(workflow, hot, context=hot)
    cold_run = await engine.execute_workflow(workflow, cold, context=cold)

    assert hot_run.status is ExecutionStatus.COMPLETED
    assert cold_run.status is ExecutionStatus.COMPLETED_CONDITIONAL
    assert len(cold_run.steps) == 2

    record_id = hot_run.context["steps"]["lead"]["recordId"]
    assert api_client.sheets[("leads", "A:B")] == [[record_id, "hot@lead.io"]]
    assert len(api_client.records) == 1
    assert [e["status"] for e in api_client.executions] == [
        "completed",
        "completed_conditional",
    ]
