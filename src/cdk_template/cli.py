"""
Command Line Interface for cdk-template.

Resolves and checks the deployment parameters for an environment without
running CDK.
"""

import argparse
import json
import sys
from typing import Optional

import structlog
from pydantic import ValidationError

from cdk_template.config import get_settings
from cdk_template.envname import EnvName
from cdk_template.exceptions import InvalidEnvironmentName, ParameterError
from cdk_template.logging_config import configure_logging
from cdk_template.parameter import Parameter, load_parameter

logger = structlog.get_logger(__name__)

EXIT_INVALID_ENV = 2
EXIT_INVALID_CONFIG = 1


def format_parameter(
    parameter: Parameter,
    format_type: str = "pretty",
    show_secrets: bool = False,
) -> str:
    """Format a parameter as JSON or pretty print."""
    data = parameter.model_dump(by_alias=True) if show_secrets else parameter.masked()

    if format_type == "json":
        return json.dumps(data, indent=2, default=str)

    output = []
    output.append("=" * 60)
    output.append(f"Parameters for {parameter.prefix}")
    output.append("=" * 60)
    for key in ("prefix", "region", "owner", "project", "cost"):
        output.append(f"{key}: {data[key]}")
    output.append("")
    output.append("dotEnv:")
    output.append("-" * 60)
    for key, value in data["dotEnv"].items():
        output.append(f"  {key}={value}")
    output.append("")
    output.append("diffEnv:")
    output.append("-" * 60)
    if data["diffEnv"]:
        for key, value in data["diffEnv"].items():
            output.append(f"  {key}={value}")
    else:
        output.append("  (none)")
    return "\n".join(output)


def show(env: str, env_file: Optional[str], format_type: str, show_secrets: bool) -> None:
    """Print the resolved parameters."""
    parameter = load_parameter(env, env_file=env_file)
    print(format_parameter(parameter, format_type, show_secrets))


def check(env: str, env_file: Optional[str]) -> None:
    """Validate the parameters and report OK."""
    load_parameter(env, env_file=env_file)
    print("OK")


def list_envs() -> None:
    """Print every known environment name."""
    for name in EnvName.names():
        print(name)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cdk-template",
        description="cdk-template deployment parameters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Show command
    show_parser = subparsers.add_parser("show", help="Print resolved parameters")
    show_parser.add_argument("--env", required=True, help="Environment name")
    show_parser.add_argument("--env-file", help="Path of the .env file")
    show_parser.add_argument(
        "--format", choices=["pretty", "json"], default="pretty", help="Output format"
    )
    show_parser.add_argument(
        "--show-secrets", action="store_true", help="Print secret values unmasked"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Validate parameters")
    check_parser.add_argument("--env", required=True, help="Environment name")
    check_parser.add_argument("--env-file", help="Path of the .env file")

    # Envs command
    subparsers.add_parser("envs", help="List environment names")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"error: invalid CDK_TEMPLATE_* setting\n{e}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    configure_logging(settings.log_level, settings.log_format)

    try:
        if args.command == "show":
            show(args.env, args.env_file, args.format, args.show_secrets)

        elif args.command == "check":
            check(args.env, args.env_file)

        elif args.command == "envs":
            list_envs()

        else:
            parser.print_help()
            return EXIT_INVALID_CONFIG

    except InvalidEnvironmentName as e:
        logger.error("Invalid environment", value=e.value)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_ENV

    except ParameterError as e:
        logger.error("Parameter resolution failed", error_type=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_CONFIG

    return 0


if __name__ == "__main__":
    sys.exit(main())
