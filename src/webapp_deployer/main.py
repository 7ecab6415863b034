"""
Web App Deployer - CLI Entry Point.

Usage:
    webapp-deployer render --parameters infra/main.parameters.json --output azuredeploy.json
    webapp-deployer plan   --parameters infra/main.parameters.json
    webapp-deployer deploy --parameters infra/main.parameters.json [--arm]
    webapp-deployer status --parameters infra/main.parameters.json

Parameter values in the file may use ${ENV_VAR} placeholders; the scope
options (--subscription-id, --resource-group, ...) override the file.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import constants as CONSTANTS
from .core.config_loader import load_parameters_file, load_credentials
from .core.context import DeploymentContext, DescriptorParameters
from .core.exceptions import DeploymentError
from .descriptor import build_descriptor, write_arm_template
from .logger import setup_logger, print_stack_trace


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="webapp-deployer",
        description="Provision the hosted chat web app on Azure App Service"
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--parameters", default=str(Path("infra") / CONSTANTS.PARAMETERS_FILE),
                        help="Path to the main.parameters.json file")
    common.add_argument("--subscription-id", help="Target subscription (overrides the file)")
    common.add_argument("--resource-group", help="Target resource group (overrides the file)")
    common.add_argument("--environment-name", help="Environment name (overrides the file)")
    common.add_argument("--location", help="Azure region (overrides the file)")
    common.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", parents=[common], help="Write the ARM template")
    render.add_argument("--output", default="azuredeploy.json", help="Template output path")

    subparsers.add_parser("plan", parents=[common], help="Show resource names and deployment order")

    deploy = subparsers.add_parser("deploy", parents=[common], help="Deploy all resources")
    deploy.add_argument("--arm", action="store_true", help="Deploy through an ARM template deployment")
    deploy.add_argument("--deployment-name", help="ARM deployment name (with --arm)")
    deploy.add_argument("--credentials", help=f"Path to {CONSTANTS.CREDENTIALS_FILE} (default: AZURE_* env vars)")

    status = subparsers.add_parser("status", parents=[common], help="Check which resources exist")
    status.add_argument("--credentials", help=f"Path to {CONSTANTS.CREDENTIALS_FILE} (default: AZURE_* env vars)")

    return parser


def _load_parameters(args: argparse.Namespace) -> DescriptorParameters:
    overrides = {
        "subscription_id": args.subscription_id,
        "resource_group": args.resource_group,
        "environment_name": args.environment_name,
        "location": args.location,
    }
    return load_parameters_file(Path(args.parameters), overrides=overrides)


def _print_plan(params: DescriptorParameters) -> None:
    descriptor = build_descriptor(params)
    print(f"Resource token: {descriptor.resource_token}")
    for number, wave in enumerate(descriptor.deployment_waves()):
        print(f"Wave {number}:")
        for declaration in wave:
            marker = "existing" if declaration.existing else "create/update"
            print(f"  {declaration.symbol:<24} {declaration.resource_type:<42} {declaration.name} ({marker})")


def run(args: argparse.Namespace) -> int:
    params = _load_parameters(args)

    if args.command == "render":
        write_arm_template(build_descriptor(params), Path(args.output))
        return 0

    if args.command == "plan":
        _print_plan(params)
        return 0

    from .providers.azure import deploy_descriptor, deploy_arm_template, info_deployment

    credentials = load_credentials(Path(args.credentials) if args.credentials else None)
    context = DeploymentContext(parameters=params, credentials=credentials)

    if args.command == "deploy":
        if args.arm:
            outputs = deploy_arm_template(context, args.deployment_name)
        else:
            outputs = deploy_descriptor(context)
        print(json.dumps(outputs, indent=2))
        return 0

    status = info_deployment(context)
    print(json.dumps(status, indent=2))
    return 0 if all(status.values()) else 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logger = setup_logger(debug_mode=args.debug)

    try:
        return run(args)
    except DeploymentError as e:
        print_stack_trace()
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
