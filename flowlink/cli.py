"""Command line interface for running FlowLink workflows."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml

from flowlink import Workflow, WorkflowEngine, WorkflowValidator, get_api_client, get_store
from flowlink.config import load_config
from flowlink.contracts import Execution, ExecutionStatus
from flowlink.errors import ValidationError

app = typer.Typer(help="CLI for FlowLink workflows")

# Command groups
workflow_app = typer.Typer(help="Commands for running and checking workflows")
execution_app = typer.Typer(help="Commands for inspecting recorded executions")

app.add_typer(workflow_app, name="workflow")
app.add_typer(execution_app, name="execution")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", help="Logging level for engine output"),
) -> None:
    """FlowLink CLI entry point."""
    logging.basicConfig(
        level=log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def _load_workflow(workflow_path: Path) -> Workflow:
    if not workflow_path.exists():
        typer.secho(f"Workflow file not found: {workflow_path}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    data = yaml.safe_load(workflow_path.read_text()) or {}
    return Workflow.model_validate(data)


def _parse_json_option(value: Optional[str], name: str) -> Dict[str, Any]:
    if not value:
        return {}
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError as exc:
        typer.secho(f"Invalid JSON for --{name}: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if not isinstance(parsed, dict):
        typer.secho(f"--{name} must be a JSON object", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    return parsed


def _echo_execution(execution: Execution) -> None:
    typer.echo(f"Execution {execution.id}: {execution.status.value}")
    typer.echo(
        f"Steps: {len(execution.steps)}/{execution.total_steps}"
        f"  Duration: {execution.duration_ms}ms"
    )
    for step in execution.steps:
        line = f"- {step.step_id} [{step.type}"
        line += f" {step.platform}]" if step.platform else "]"
        line += f": {step.status.value}"
        if step.error:
            line += f" ({step.error})"
        typer.echo(line)
        if step.output is not None:
            typer.echo(f"    output: {json.dumps(step.output, default=str)}")
    if execution.error:
        typer.secho(f"Error: {execution.error}", fg=typer.colors.RED)


@workflow_app.command("run")
def workflow_run(
    workflow_path: Path,
    input_json: Optional[str] = typer.Option(
        None, "--input", help="JSON object passed as the execution input data"
    ),
    context_json: Optional[str] = typer.Option(
        None, "--context", help="JSON object used as the initial execution context"
    ),
    api: Optional[str] = typer.Option(
        None, help="API backend to use: 'http' or 'inmemory' (default from config)"
    ),
) -> None:
    """
    Run a workflow definition and print its execution trace.

    The workflow file is YAML or JSON with a name, a workflowId and a list of
    steps. Exits with code 1 when the execution fails.

    Example:
        flowlink workflow run ./lead_alert.yaml --context '{"record": {"name": "John"}}'
        flowlink workflow run ./lead_alert.yaml --api inmemory
    """
    workflow = _load_workflow(workflow_path)
    input_data = _parse_json_option(input_json, "input")
    context = _parse_json_option(context_json, "context")

    config = load_config()
    api_client = get_api_client(api, config)
    store = get_store() if config.database_url else None
    engine = WorkflowEngine(api_client=api_client, store=store, config=config)

    async def _run() -> Execution:
        try:
            return await engine.execute_workflow(workflow, input_data, context)
        finally:
            await api_client.close()

    execution = asyncio.run(_run())
    _echo_execution(execution)
    if execution.status is ExecutionStatus.FAILED:
        raise typer.Exit(code=1)


@workflow_app.command("validate")
def workflow_validate(workflow_path: Path) -> None:
    """Check a workflow definition without running it."""
    workflow = _load_workflow(workflow_path)
    try:
        WorkflowValidator().validate(workflow)
    except ValidationError as exc:
        typer.secho(str(exc), fg=typer.colors.RED)
        for error in exc.errors:
            typer.echo(f"- {error.field}: {error} [{error.code}]")
        raise typer.Exit(code=1)
    typer.echo(f"Workflow '{workflow.name}' is valid")


@execution_app.command("list")
def execution_list(
    limit: int = typer.Option(50, help="Maximum number of executions to show"),
) -> None:
    """
    List recorded executions, most recent first.

    Example:
        flowlink execution list
        # Output: exec_1700000000000_a1b2c3d4e    completed    wf-1
    """
    store = get_store()
    records = asyncio.run(store.list_executions(limit))
    if not records:
        typer.echo("No executions found")
        return
    for record in records:
        typer.echo(f"{record.execution_id}\t{record.status}\t{record.workflow_id}")


@execution_app.command("show")
def execution_show(execution_id: str) -> None:
    """Show the recorded summary of one execution."""
    store = get_store()
    record = asyncio.run(store.get_execution(execution_id))
    if record is None:
        typer.echo("Execution not found")
        raise typer.Exit(code=1)
    typer.echo(f"Execution {record.execution_id}: {record.status}")
    typer.echo(f"Workflow: {record.workflow_id}")
    typer.echo(f"Steps: {record.steps}  Duration: {record.duration_ms}ms")
    if record.input_data:
        typer.echo(f"Input: {json.dumps(record.input_data, default=str)}")
    if record.error:
        typer.echo(f"Error: {record.error}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
