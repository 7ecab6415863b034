"""
Infrastructure API endpoints.

Credentials come from the AZURE_* environment variables of the API process
(or DefaultAzureCredential when they are unset).
"""

from fastapi import APIRouter, HTTPException, Query

from ..core.config_loader import load_credentials
from ..core.context import DeploymentContext
from ..core.exceptions import ConfigurationError, ExternalReferenceError
from ..logger import logger, print_stack_trace
from ..providers.azure import deploy_arm_template, deploy_descriptor, info_deployment
from .models import ParametersRequest

router = APIRouter(prefix="/infrastructure", tags=["Infrastructure"])


def _create_context(request: ParametersRequest) -> DeploymentContext:
    return DeploymentContext(parameters=request.to_parameters(), credentials=load_credentials())


@router.post(
    "/deploy",
    summary="Deploy the web app environment",
    responses={
        200: {"description": "Deployment successful, returns outputs"},
        400: {"description": "Invalid parameters"},
        404: {"description": "Azure OpenAI account not found"},
        500: {"description": "Deployment failed"}
    }
)
def deploy(
    request: ParametersRequest,
    arm: bool = Query(False, description="Deploy through an ARM template deployment")
):
    """
    Deploys the App Service Plan, web app, Log Analytics workspace and
    diagnostic setting.

    **Deployment process:**
    1. Validates parameters (nothing is created on failure)
    2. Resolves the existing Azure OpenAI account (read-only)
    3. Applies all resources in dependency order (create-or-update)

    **Note:** Resources created before a failure are kept; rerun to converge.
    """
    try:
        context = _create_context(request)
        outputs = deploy_arm_template(context) if arm else deploy_descriptor(context)
        return {"message": "Deployment successful", "outputs": outputs}
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=f"Validation failed: {e}")
    except ExternalReferenceError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        print_stack_trace()
        logger.error(str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/status",
    summary="Check which resources exist",
    responses={
        200: {"description": "Resource symbol -> exists"},
        400: {"description": "Invalid parameters"}
    }
)
def status(request: ParametersRequest):
    """Checks every declared resource, the Azure OpenAI account included."""
    try:
        return info_deployment(_create_context(request))
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=f"Validation failed: {e}")
    except Exception as e:
        print_stack_trace()
        logger.error(str(e))
        raise HTTPException(status_code=500, detail=str(e))
