"""
Request/response schemas shared by the API routers.

Values are passed through to DescriptorParameters unchanged; the descriptor's
own validation decides what is acceptable so the API and CLI reject the same
inputs with the same messages.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .. import constants as CONSTANTS
from ..core.context import DescriptorParameters


class ParametersRequest(BaseModel):
    """Request body carrying descriptor parameters."""
    location: str = Field(..., description="Azure region for all owned resources (e.g., 'eastus2')")
    environment_name: str = Field(..., description="Environment name, part of the resource token")
    subscription_id: str = Field(..., description="Subscription receiving the owned resources")
    resource_group: str = Field(..., description="Resource group receiving the owned resources")

    openai_account_name: str = Field(..., description="Name of the existing Azure OpenAI account")
    openai_resource_group: str = Field(..., description="Resource group of the existing Azure OpenAI account")
    openai_subscription_id: str = Field(..., description="Subscription of the existing Azure OpenAI account")

    resource_token: str = Field("", description="Uniqueness token; derived from scope and environment when empty")
    tags: Optional[Dict[str, str]] = Field(None, description="Base tags; defaults to {'azd-env-name': environment_name}")
    principal_id: str = Field("", description="Identity of the requesting user")
    app_service_name: str = Field("", description="Web app name; defaults to app-{token}")
    app_service_plan_sku: str = Field(
        CONSTANTS.DEFAULT_APP_SERVICE_PLAN_SKU,
        description=f"App Service Plan SKU, one of {list(CONSTANTS.APP_SERVICE_PLAN_SKUS)}"
    )

    openai_service_name: str = Field("", description="Display name of the AI service, reported in outputs")
    openai_sku_name: str = Field(CONSTANTS.DEFAULT_OPENAI_SKU, description="Expected SKU of the AI account")
    openai_chat_model_name: str = Field(CONSTANTS.DEFAULT_CHAT_MODEL_NAME, description="Chat model deployment name")
    openai_chat_model_version: str = Field(CONSTANTS.DEFAULT_CHAT_MODEL_VERSION, description="Chat model version")
    openai_embedding_model_name: str = Field(CONSTANTS.DEFAULT_EMBEDDING_MODEL_NAME, description="Embedding model deployment name")
    openai_embedding_model_version: str = Field(CONSTANTS.DEFAULT_EMBEDDING_MODEL_VERSION, description="Embedding model version")

    search_endpoint: str = Field("", description="Search service URL pushed to the web app")
    search_index_name: str = Field(CONSTANTS.DEFAULT_SEARCH_INDEX_NAME, description="Search index name")
    system_prompt: str = Field(CONSTANTS.DEFAULT_SYSTEM_PROMPT, description="System prompt for the chat app")

    diagnostic_categories: Dict[str, bool] = Field(
        default_factory=dict,
        description="Diagnostic category -> enabled; unnamed categories stay enabled"
    )
    log_retention_days: int = Field(CONSTANTS.DEFAULT_LOG_RETENTION_DAYS, description="Log Analytics retention in days")

    def to_parameters(self) -> DescriptorParameters:
        return DescriptorParameters(**self.model_dump())


class DeclarationSummary(BaseModel):
    symbol: str
    resource_type: str
    name: str
    resource_id: str
    existing: bool
    depends_on: List[str]


class PlanResponse(BaseModel):
    """Response schema for the deployment plan."""
    resource_token: str = Field(..., description="Resolved uniqueness token")
    waves: List[List[DeclarationSummary]] = Field(..., description="Dependency waves in apply order")
    outputs: Dict[str, str] = Field(..., description="Descriptor outputs")
