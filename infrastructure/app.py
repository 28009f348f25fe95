#!/usr/bin/env python3
"""
CDK Application entry point.

Deploy with: cdk deploy -c environment=dev
"""

import sys

import aws_cdk as cdk
import structlog
from pydantic import ValidationError

from cdk_template.config import get_settings
from cdk_template.exceptions import ParameterError
from cdk_template.logging_config import configure_logging
from cdk_template.parameter import load_parameter
from stack import InfraStack

logger = structlog.get_logger(__name__)


def main():
    """Create and configure the CDK app."""
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"error: invalid CDK_TEMPLATE_* setting\n{e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level, settings.log_format)

    app = cdk.App()

    # Get environment from context or default to 'dev'
    environment = app.node.try_get_context("environment") or "dev"

    try:
        parameter = load_parameter(environment)
    except ParameterError as e:
        logger.error("Cannot synthesize", environment=environment, error_type=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    env = cdk.Environment(
        account=parameter.dot_env.aws_account_id,
        region=parameter.region,
    )

    InfraStack(
        app,
        f"{parameter.prefix}-InfraStack",
        parameter=parameter,
        code_path=settings.agent_code_path,
        env=env,
        description=f"{parameter.project} infrastructure ({parameter.prefix})",
    )

    # Add tags to all resources
    for key, value in parameter.tags().items():
        cdk.Tags.of(app).add(key, value)
    cdk.Tags.of(app).add("ManagedBy", "CDK")

    app.synth()


if __name__ == "__main__":
    main()
