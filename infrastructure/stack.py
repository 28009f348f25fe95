"""
AWS CDK Stack for the AgentCore application.

Creates the AWS resources for one deployment environment:
- S3 asset holding the agent code package
- Bedrock AgentCore Runtime running that package
- IAM execution role with Bedrock model access
- Secrets Manager secret for the agent API key
- VPC and security group (optional)
- CloudWatch log group for the agent
"""

from pathlib import Path

from constructs import Construct
from aws_cdk import (
    Stack,
    RemovalPolicy,
    SecretValue,
    CfnOutput,
    aws_bedrockagentcore as agentcore,
    aws_ec2 as ec2,
    aws_iam as iam,
    aws_logs as logs,
    aws_s3_assets as s3_assets,
    aws_secretsmanager as secretsmanager,
)

from cdk_template.envname import EnvName
from cdk_template.parameter import Parameter

PYTHON_RUNTIME = "PYTHON_3_13"
ENTRY_POINT = "main.py"


class AgentCoreRuntime(Construct):
    """
    AgentCore Runtime deployed from a local code directory.

    The directory is uploaded as an S3 asset and run with the Python
    runtime, starting from main.py.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        parameter: Parameter,
        code_path: str,
        api_key_secret: secretsmanager.ISecret,
        vpc: ec2.IVpc | None = None,
        security_group: ec2.ISecurityGroup | None = None,
    ) -> None:
        super().__init__(scope, construct_id)

        dot_env = parameter.dot_env
        stack = Stack.of(self)

        # Code package uploaded to the CDK assets bucket
        self.asset = s3_assets.Asset(self, "CodeAsset", path=code_path)

        # Execution role assumed by the runtime
        self.role = iam.Role(
            self,
            "ExecutionRole",
            assumed_by=iam.ServicePrincipal("bedrock-agentcore.amazonaws.com"),
            description=f"AgentCore runtime role ({parameter.prefix})",
        )
        self.asset.grant_read(self.role)
        api_key_secret.grant_read(self.role)

        # Bedrock model access for the configured model only
        self.role.add_to_policy(
            iam.PolicyStatement(
                sid="BedrockModelAccess",
                effect=iam.Effect.ALLOW,
                actions=[
                    "bedrock:InvokeModel",
                    "bedrock:InvokeModelWithResponseStream",
                ],
                resources=[
                    f"arn:aws:bedrock:{stack.region}::foundation-model/{dot_env.bedrock_model_id}",
                ],
            )
        )

        self.role.add_to_policy(
            iam.PolicyStatement(
                sid="CloudWatchLogs",
                effect=iam.Effect.ALLOW,
                actions=[
                    "logs:CreateLogGroup",
                    "logs:CreateLogStream",
                    "logs:PutLogEvents",
                    "logs:DescribeLogStreams",
                ],
                resources=[
                    f"arn:aws:logs:{stack.region}:{stack.account}:log-group:/aws/bedrock-agentcore/runtimes/*",
                ],
            )
        )

        if vpc is not None and security_group is not None:
            network_configuration = agentcore.CfnRuntime.NetworkConfigurationProperty(
                network_mode="VPC",
                network_mode_config=agentcore.CfnRuntime.VpcConfigProperty(
                    subnets=[
                        subnet.subnet_id
                        for subnet in vpc.select_subnets(
                            subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS
                        ).subnets
                    ],
                    security_groups=[security_group.security_group_id],
                ),
            )
        else:
            network_configuration = agentcore.CfnRuntime.NetworkConfigurationProperty(
                network_mode="PUBLIC",
            )

        self.runtime = agentcore.CfnRuntime(
            self,
            "Runtime",
            agent_runtime_name=f"{parameter.prefix}_{dot_env.agent_runtime_name}",
            agent_runtime_artifact={
                "codeConfiguration": {
                    "code": {
                        "s3": {
                            "bucket": self.asset.s3_bucket_name,
                            "prefix": self.asset.s3_object_key,
                        }
                    },
                    "entryPoint": [ENTRY_POINT],
                    "runtime": PYTHON_RUNTIME,
                }
            },
            role_arn=self.role.role_arn,
            network_configuration=network_configuration,
            environment_variables={
                "AWS_REGION": stack.region,
                "MODEL_ID": dot_env.bedrock_model_id,
                "API_KEY_SECRET_ARN": api_key_secret.secret_arn,
                "ENV_NAME": parameter.prefix,
            },
            description=f"Agent runtime for {parameter.project} ({parameter.prefix})",
        )
        self.runtime.node.add_dependency(self.role)


class InfraStack(Stack):
    """
    CDK Stack for the AgentCore application.

    Everything environment-specific is read from the resolved Parameter.
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        parameter: Parameter,
        code_path: str,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        dot_env = parameter.dot_env
        prefix = f"{parameter.project}-{parameter.prefix}"
        removal_policy = (
            RemovalPolicy.RETAIN
            if parameter.env_name == EnvName.PRD
            else RemovalPolicy.DESTROY
        )

        self.vpc: ec2.IVpc | None = None
        self.sg_runtime: ec2.ISecurityGroup | None = None

        if dot_env.enable_vpc:
            self.vpc = ec2.Vpc(
                self,
                "Vpc",
                max_azs=2,
                nat_gateways=1,
                subnet_configuration=[
                    ec2.SubnetConfiguration(
                        name="Public",
                        subnet_type=ec2.SubnetType.PUBLIC,
                        cidr_mask=24,
                    ),
                    ec2.SubnetConfiguration(
                        name="Private",
                        subnet_type=ec2.SubnetType.PRIVATE_WITH_EGRESS,
                        cidr_mask=24,
                    ),
                ],
            )
            self.sg_runtime = ec2.SecurityGroup(
                self,
                "RuntimeSecurityGroup",
                vpc=self.vpc,
                description=f"AgentCore runtime ({parameter.prefix})",
                allow_all_outbound=True,
            )

        # API key for the agent, kept out of the runtime environment
        self.api_key_secret = secretsmanager.Secret(
            self,
            "ApiKeySecret",
            secret_name=f"{prefix}/api-key",
            description="Agent API key",
            secret_string_value=SecretValue.unsafe_plain_text(dot_env.api_key),
            removal_policy=removal_policy,
        )

        self.agentcore = AgentCoreRuntime(
            self,
            "AgentCore",
            parameter=parameter,
            code_path=str(Path(code_path).resolve()),
            api_key_secret=self.api_key_secret,
            vpc=self.vpc,
            security_group=self.sg_runtime,
        )

        # Application log group for the agent
        self.log_group = logs.CfnLogGroup(
            self,
            "AgentLogGroup",
            log_group_name=f"/{parameter.project}/{parameter.prefix}/agent",
            retention_in_days=dot_env.log_retention_days,
        )
        self.log_group.apply_removal_policy(removal_policy)

        # Outputs
        CfnOutput(
            self,
            "RuntimeArn",
            value=self.agentcore.runtime.attr_agent_runtime_arn,
            description="AgentCore Runtime ARN",
            export_name=f"{prefix}-runtime-arn",
        )

        CfnOutput(
            self,
            "RuntimeId",
            value=self.agentcore.runtime.attr_agent_runtime_id,
            description="AgentCore Runtime ID",
            export_name=f"{prefix}-runtime-id",
        )

        CfnOutput(
            self,
            "ExecutionRoleArn",
            value=self.agentcore.role.role_arn,
            description="IAM role ARN for the runtime",
            export_name=f"{prefix}-runtime-role-arn",
        )
