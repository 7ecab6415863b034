"""
ARM template rendering.

Turns a ProvisioningDescriptor into an Azure Resource Manager deployment
template that the ARM engine can apply to the target resource group.

Rendering rules:
    - Owned declarations become "resources" entries; existing references are
      not rendered (the ARM engine resolves them through reference()).
    - "dependsOn" lists resourceId() expressions of owned dependencies only.
    - Extension resources (diagnostic settings) carry a "scope" relative to
      the resource group.
    - Literal strings starting with "[" are escaped as "[[" so ARM does not
      evaluate them; ArmExpression values are wrapped in "[...]".
"""

from pathlib import Path
from typing import Any, Dict
import json
import logging

from .. import constants as CONSTANTS
from .builder import ProvisioningDescriptor
from .resources import ArmExpression, ResourceDeclaration

logger = logging.getLogger(__name__)


def _render_value(value: Any) -> Any:
    if isinstance(value, ArmExpression):
        return f"[{value}]"
    if isinstance(value, str):
        return "[" + value if value.startswith("[") else value
    if isinstance(value, dict):
        return {k: _render_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_render_value(v) for v in value]
    return value


def _resource_id_expression(declaration: ResourceDeclaration) -> str:
    if declaration.scope:
        parent_type, parent_name = _scope_path(declaration.scope)
        return (
            f"[extensionResourceId(resourceId('{parent_type}', '{parent_name}'), "
            f"'{declaration.resource_type}', '{declaration.name}')]"
        )
    return f"[resourceId('{declaration.resource_type}', '{declaration.name}')]"


def _scope_path(scope: str) -> tuple[str, str]:
    """Split '/subscriptions/../providers/{ns}/{type}/{name}' into ('{ns}/{type}', '{name}')."""
    provider_part = scope.split("/providers/", 1)[1]
    namespace, type_name, name = provider_part.split("/", 2)
    return f"{namespace}/{type_name}", name


def render_resource(descriptor: ProvisioningDescriptor, declaration: ResourceDeclaration) -> Dict[str, Any]:
    """Render one owned declaration as an ARM resources entry."""
    resource: Dict[str, Any] = {
        "type": declaration.resource_type,
        "apiVersion": declaration.api_version,
        "name": declaration.name,
    }
    if declaration.scope:
        parent_type, parent_name = _scope_path(declaration.scope)
        resource["scope"] = f"{parent_type}/{parent_name}"

    resource.update(_render_value(declaration.body()))

    depends_on = [
        _resource_id_expression(descriptor.get(symbol))
        for symbol in declaration.depends_on
        if not descriptor.get(symbol).existing
    ]
    if depends_on:
        resource["dependsOn"] = depends_on
    return resource


def render_arm_template(descriptor: ProvisioningDescriptor) -> Dict[str, Any]:
    """
    Render the descriptor as an ARM deployment template.

    Resources appear in dependency order; ARM sorts by dependsOn itself, but
    the order keeps the file readable and diff-stable.
    """
    resources = [
        render_resource(descriptor, declaration)
        for declaration in descriptor.deployment_order()
        if not declaration.existing
    ]
    outputs = {
        name: {"type": "string", "value": _render_value(value)}
        for name, value in descriptor.outputs.items()
    }
    return {
        "$schema": CONSTANTS.ARM_TEMPLATE_SCHEMA,
        "contentVersion": CONSTANTS.ARM_CONTENT_VERSION,
        "metadata": {"resourceToken": descriptor.resource_token},
        "resources": resources,
        "outputs": outputs,
    }


def write_arm_template(descriptor: ProvisioningDescriptor, path: Path) -> Path:
    """Render the template and write it as indented JSON; returns the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(render_arm_template(descriptor), f, indent=2)
        f.write("\n")
    logger.info(f"✓ ARM template written: {path}")
    return path
