"""
AWS CDK Infrastructure for cdk-template.

Defines the cloud infrastructure using AWS CDK for deploying the agent
on Bedrock AgentCore, driven by the resolved deployment parameters.
"""
