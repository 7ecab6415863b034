# ==========================================
# 1. Configuration Filenames
# ==========================================
PARAMETERS_FILE = "main.parameters.json"
CREDENTIALS_FILE = "config_credentials.json"

CREDENTIALS_ENV_VARS = {
    "azure_subscription_id": "AZURE_SUBSCRIPTION_ID",
    "azure_tenant_id": "AZURE_TENANT_ID",
    "azure_client_id": "AZURE_CLIENT_ID",
    "azure_client_secret": "AZURE_CLIENT_SECRET",
}

# ==========================================
# 2. Compute Plan
# ==========================================
# SKU name -> App Service Plan tier
APP_SERVICE_PLAN_SKUS = {
    "F1": "Free",
    "D1": "Shared",
    "B1": "Basic",
    "B2": "Basic",
    "B3": "Basic",
    "S1": "Standard",
    "S2": "Standard",
    "S3": "Standard",
    "P1v2": "PremiumV2",
    "P2v2": "PremiumV2",
    "P3v2": "PremiumV2",
    "P1v3": "PremiumV3",
    "P2v3": "PremiumV3",
    "P3v3": "PremiumV3",
}
DEFAULT_APP_SERVICE_PLAN_SKU = "F1"

# App Service Plan names are limited to 40 characters; "plan-" leaves 35 for the token
MAX_RESOURCE_TOKEN_LENGTH = 35

# ==========================================
# 3. Hosted Service
# ==========================================
WEB_RUNTIME_STACK = "PYTHON|3.11"
WEB_SERVICE_TAG_NAME = "azd-service-name"
WEB_SERVICE_TAG_VALUE = "web"
ENV_NAME_TAG = "azd-env-name"

DEFAULT_SEARCH_INDEX_NAME = "documents"
DEFAULT_SYSTEM_PROMPT = (
    "You are an AI assistant that helps people find information. "
    "Answer only from the retrieved sources and say so when the sources do not contain the answer."
)

# Logging / environment settings pushed to the web app after the wired ones
WEB_RUNTIME_SETTINGS = [
    ("SCM_DO_BUILD_DURING_DEPLOYMENT", "true"),
    ("ENABLE_ORYX_BUILD", "true"),
    ("WEBSITE_HTTPLOGGING_RETENTION_DAYS", "7"),
    ("LOG_LEVEL", "INFO"),
    ("APP_ENV", "production"),
]

# ==========================================
# 4. External AI Account
# ==========================================
DEFAULT_OPENAI_SKU = "S0"
DEFAULT_CHAT_MODEL_NAME = "gpt-4o"
DEFAULT_CHAT_MODEL_VERSION = "2024-05-13"
DEFAULT_EMBEDDING_MODEL_NAME = "text-embedding-ada-002"
DEFAULT_EMBEDDING_MODEL_VERSION = "2"

# ==========================================
# 5. Log Workspace / Diagnostics
# ==========================================
LOG_WORKSPACE_SKU = "PerGB2018"
DEFAULT_LOG_RETENTION_DAYS = 30
MIN_LOG_RETENTION_DAYS = 30
MAX_LOG_RETENTION_DAYS = 730

DIAGNOSTIC_LOG_CATEGORIES = [
    "AppServiceHTTPLogs",
    "AppServiceConsoleLogs",
    "AppServiceAppLogs",
    "AppServiceAuditLogs",
    "AppServiceIPSecAuditLogs",
    "AppServicePlatformLogs",
]
DIAGNOSTIC_METRIC_CATEGORIES = ["AllMetrics"]

# ==========================================
# 6. Resource Types / API Versions
# ==========================================
TYPE_APP_SERVICE_PLAN = "Microsoft.Web/serverfarms"
TYPE_WEB_APP = "Microsoft.Web/sites"
TYPE_LOG_WORKSPACE = "Microsoft.OperationalInsights/workspaces"
TYPE_DIAGNOSTIC_SETTING = "Microsoft.Insights/diagnosticSettings"
TYPE_COGNITIVE_ACCOUNT = "Microsoft.CognitiveServices/accounts"

API_VERSIONS = {
    TYPE_APP_SERVICE_PLAN: "2022-03-01",
    TYPE_WEB_APP: "2022-03-01",
    TYPE_LOG_WORKSPACE: "2022-10-01",
    TYPE_DIAGNOSTIC_SETTING: "2021-05-01-preview",
    TYPE_COGNITIVE_ACCOUNT: "2023-05-01",
}

ARM_TEMPLATE_SCHEMA = "https://schema.management.azure.com/schemas/2019-04-01/deploymentTemplate.json#"
ARM_CONTENT_VERSION = "1.0.0.0"
