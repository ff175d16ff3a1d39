import pytest

from flowlink import Workflow, WorkflowEngine
from flowlink.api.inmemory import InMemoryApiClient
from flowlink.config import EngineConfig, FlowLinkConfig


@pytest.fixture
def config() -> FlowLinkConfig:
    return FlowLinkConfig(engine=EngineConfig(default_delay_ms=1))


@pytest.fixture
def api_client() -> InMemoryApiClient:
    return InMemoryApiClient()


@pytest.fixture
def engine(api_client, config) -> WorkflowEngine:
    return WorkflowEngine(api_client=api_client, config=config)


@pytest.fixture
def make_workflow():
    """Return a builder for workflows around a list of raw step mappings."""

    def _make(*steps, name="Lead alerts", workflow_id="wf-1"):
        return Workflow.model_validate(
            {"workflowId": workflow_id, "name": name, "stepsJson": list(steps)}
        )

    return _make
