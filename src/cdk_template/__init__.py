"""
cdk-template - deployment parameters for the AgentCore CDK stacks.

Resolves a deployment environment name, the validated .env and the
per-environment parameters into one immutable Parameter object.
"""

__version__ = "0.1.0"
__author__ = "Developer"

from cdk_template.envname import EnvName
from cdk_template.parameter import Parameter, load_parameter, resolve_parameter
from cdk_template.validate_dotenv import DotEnv, validate_dotenv

__all__ = [
    "EnvName",
    "DotEnv",
    "Parameter",
    "load_parameter",
    "resolve_parameter",
    "validate_dotenv",
    "__version__",
]
