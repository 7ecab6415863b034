import os
import sys

import pytest
from unittest.mock import MagicMock

# Allow running the tests without installing the package
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))


@pytest.fixture(scope="function", autouse=True)
def mock_env_vars(monkeypatch):
    """Remove Azure credentials from the environment to prevent accidental cloud calls."""
    for name in ("AZURE_SUBSCRIPTION_ID", "AZURE_TENANT_ID", "AZURE_CLIENT_ID", "AZURE_CLIENT_SECRET"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_params():
    """Factory for valid DescriptorParameters; keyword arguments override fields."""
    from webapp_deployer.core.context import DescriptorParameters

    def _make(**overrides):
        values = dict(
            location="eastus2",
            environment_name="dev",
            subscription_id="sub-123",
            resource_group="rg-dev",
            resource_token="abc123",
            openai_account_name="shared-openai",
            openai_resource_group="rg-ai",
            openai_subscription_id="sub-ai",
            search_endpoint="https://search-dev.search.windows.net",
        )
        values.update(overrides)
        return DescriptorParameters(**values)

    return _make


@pytest.fixture
def params(make_params):
    return make_params()


@pytest.fixture
def mock_openai_client():
    """Cognitive Services client returning an existing S0 account with both model deployments."""
    client = MagicMock()

    account = MagicMock()
    account.id = "/subscriptions/sub-ai/resourceGroups/rg-ai/providers/Microsoft.CognitiveServices/accounts/shared-openai"
    account.name = "shared-openai"
    account.properties.endpoint = "https://shared-openai.openai.azure.com/"
    account.sku.name = "S0"
    client.accounts.get.return_value = account

    def _deployment(name, model, version):
        deployment = MagicMock()
        deployment.name = name
        deployment.properties.model.name = model
        deployment.properties.model.version = version
        return deployment

    client.deployments.list.return_value = [
        _deployment("gpt-4o", "gpt-4o", "2024-05-13"),
        _deployment("text-embedding-ada-002", "text-embedding-ada-002", "2"),
    ]
    return client


@pytest.fixture
def mock_provider(mock_openai_client):
    """Mock AzureProvider with MagicMock clients."""
    provider = MagicMock()
    provider.subscription_id = "sub-123"
    provider.clients = {
        "resource": MagicMock(),
        "web": MagicMock(),
        "loganalytics": MagicMock(),
        "monitor": MagicMock(),
    }
    provider.openai_client.return_value = mock_openai_client
    return provider
