"""
Descriptor API endpoints.

Offline operations: nothing here talks to Azure.
"""

from fastapi import APIRouter, HTTPException

from ..core.exceptions import ConfigurationError, DeploymentError
from ..descriptor import build_descriptor, render_arm_template
from ..logger import logger, print_stack_trace
from .models import DeclarationSummary, ParametersRequest, PlanResponse

router = APIRouter(prefix="/descriptor", tags=["Descriptor"])


@router.post(
    "/render",
    summary="Render the ARM template",
    responses={
        200: {"description": "ARM deployment template"},
        400: {"description": "Invalid parameters"}
    }
)
def render(request: ParametersRequest):
    """
    Renders the provisioning descriptor as an ARM deployment template.

    The Azure OpenAI endpoint is rendered as a `reference()` expression, so
    the ARM engine checks that the account exists when the template is applied.
    """
    try:
        return render_arm_template(build_descriptor(request.to_parameters()))
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DeploymentError as e:
        print_stack_trace()
        logger.error(str(e))
        raise HTTPException(status_code=500, detail=str(e))


@router.post(
    "/plan",
    response_model=PlanResponse,
    summary="Show resource names and deployment order",
    responses={400: {"description": "Invalid parameters"}}
)
def plan(request: ParametersRequest):
    """
    Returns the resolved resource token, the declarations grouped into
    dependency waves, and the descriptor outputs.
    """
    try:
        descriptor = build_descriptor(request.to_parameters())
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    waves = [
        [
            DeclarationSummary(
                symbol=d.symbol,
                resource_type=d.resource_type,
                name=d.name,
                resource_id=d.resource_id,
                existing=d.existing,
                depends_on=d.depends_on,
            )
            for d in wave
        ]
        for wave in descriptor.deployment_waves()
    ]
    return PlanResponse(
        resource_token=descriptor.resource_token,
        waves=waves,
        outputs={k: str(v) for k, v in descriptor.outputs.items()},
    )
