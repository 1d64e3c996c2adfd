"""Pytest fixtures for composer and CDK construct tests."""

import logging

import aws_cdk as cdk
import pytest
import structlog

from infrastructure.config import SiteConfig


def pytest_configure(config: pytest.Config) -> None:
  """Keep structlog quiet below warning level during tests."""
  logging.basicConfig(level=logging.WARNING, force=True)
  structlog.configure(
    processors=[
      structlog.stdlib.filter_by_level,
      structlog.processors.add_log_level,
      structlog.processors.format_exc_info,
      structlog.dev.ConsoleRenderer(),
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
  )


@pytest.fixture
def app() -> cdk.App:
  """Create a CDK App for testing."""
  return cdk.App()


@pytest.fixture
def stack(app: cdk.App) -> cdk.Stack:
  """Create a CDK Stack for testing."""
  return cdk.Stack(app, "TestStack", env=cdk.Environment(region="us-east-1"))


@pytest.fixture
def site_config() -> SiteConfig:
  """Site configuration that needs no hosted zone lookup."""
  return SiteConfig(
    resource_prefix="cdk-web-static",
    hosted_zone_name="example.com",
    domain_name="example.com",
    hosted_zone_id="Z1234567890",
  )
