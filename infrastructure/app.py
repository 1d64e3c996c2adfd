#!/usr/bin/env python3
"""CDK application entry point for static website infrastructure."""

import os
import sys
from pathlib import Path

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

import aws_cdk as cdk
import boto3

from infrastructure.config import Config
from infrastructure.logs import bind_context, configure_logging
from infrastructure.stacks.site_stack import StaticSiteStack


def get_account_id() -> str:
  """Get AWS account ID from current credentials."""
  sts = boto3.client("sts")
  return str(sts.get_caller_identity()["Account"])


def main() -> None:
  """Create CDK app with a stack for each configured site."""
  configure_logging(os.environ.get("LOG_LEVEL", "INFO"))
  app = cdk.App()

  # Load configuration
  config_path = app.node.try_get_context("config") or "sites.yaml"
  config = Config.from_yaml(Path(config_path))

  # Credentials are only consulted for sites that do not pin an account
  account_id: str | None = None

  for site in config.sites:
    log = bind_context(domain=site.domain_name, prefix=site.resource_prefix)
    account = site.account
    if account is None:
      account_id = account_id or get_account_id()
      account = account_id

    stack_name = site.stack_name
    StaticSiteStack(
      app,
      stack_name,
      site_config=site,
      env=cdk.Environment(
        account=account,
        region=site.region,
      ),
      description=f"Static website infrastructure for {site.domain_name}",
    )
    log.info("stack_declared", stack=stack_name, region=site.region)

  app.synth()


if __name__ == "__main__":
  main()
