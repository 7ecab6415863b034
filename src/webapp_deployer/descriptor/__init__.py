"""
Provisioning descriptor for the hosted chat web app.

Modules:
    naming: Resource token derivation and resource names
    resources: Desired-state declarations for each resource
    graph: Dependency waves and deployment order
    builder: build_descriptor() and ProvisioningDescriptor
    arm_template: ARM JSON rendering

Usage:
    from webapp_deployer.descriptor import build_descriptor, render_arm_template

    descriptor = build_descriptor(params)
    template = render_arm_template(descriptor)
"""

from .naming import ResourceNaming, derive_resource_token
from .resources import ResourceDeclaration, DiagnosticCategory, ArmExpression, merge_tags
from .graph import deployment_order, deployment_waves
from .builder import ProvisioningDescriptor, build_descriptor, resolve_resource_token
from .arm_template import render_arm_template, write_arm_template

__all__ = [
    "ResourceNaming",
    "derive_resource_token",
    "ResourceDeclaration",
    "DiagnosticCategory",
    "ArmExpression",
    "merge_tags",
    "deployment_order",
    "deployment_waves",
    "ProvisioningDescriptor",
    "build_descriptor",
    "resolve_resource_token",
    "render_arm_template",
    "write_arm_template",
]
