"""Tests for the configuration loader."""

import tempfile
from pathlib import Path

import pytest

from infrastructure.composer import InvalidConfigurationError
from infrastructure.config import Config, OutputIds, SiteConfig


def load(yaml_content: str) -> Config:
  with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
    f.write(yaml_content)
    f.flush()

    return Config.from_yaml(Path(f.name))


class TestSiteConfig:
  """Test SiteConfig dataclass."""

  def test_default_values(self) -> None:
    """Verify default values are set correctly."""
    config = SiteConfig(
      resource_prefix="cdk-web-static",
      hosted_zone_name="example.com",
      domain_name="example.com",
    )

    assert config.include_www is True
    assert config.site_source_path is None
    assert config.hosted_zone_id is None
    assert config.removal_policy == "retain"
    assert config.deploy_content is True
    assert config.account is None
    assert config.region == "us-east-1"

  def test_output_ids_derived_from_prefix(self) -> None:
    """Output ids default to identifiers under the resource prefix."""
    config = SiteConfig(
      resource_prefix="cdk-web-static",
      hosted_zone_name="example.com",
      domain_name="example.com",
    )

    assert config.output_ids == OutputIds(
      bucket_name="cdk-web-static--bucket-name",
      distribution_id="cdk-web-static--distribution-id",
    )

  def test_stack_name(self) -> None:
    """Stack names are derived from the domain."""
    config = SiteConfig(
      resource_prefix="site",
      hosted_zone_name="example.com",
      domain_name="www.example.com",
    )

    assert config.stack_name == "StaticSite-www-example-com"

  def test_empty_domain(self) -> None:
    """Required options cannot be empty."""
    with pytest.raises(InvalidConfigurationError) as exc_info:
      SiteConfig(resource_prefix="site", hosted_zone_name="example.com", domain_name="")

    assert exc_info.value.option == "domain_name"

  def test_unknown_removal_policy(self) -> None:
    """Removal policies are checked."""
    with pytest.raises(InvalidConfigurationError) as exc_info:
      SiteConfig(
        resource_prefix="site",
        hosted_zone_name="example.com",
        domain_name="example.com",
        removal_policy="shred",
      )

    assert exc_info.value.option == "removal_policy"

  def test_region_must_host_cloudfront_certificates(self) -> None:
    """Sites outside us-east-1 are rejected before anything is synthesised."""
    with pytest.raises(InvalidConfigurationError) as exc_info:
      SiteConfig(
        resource_prefix="site",
        hosted_zone_name="example.com",
        domain_name="example.com",
        region="eu-central-1",
      )

    assert exc_info.value.option == "region"


class TestConfigFromYaml:
  """Test Config.from_yaml loading."""

  def test_load_simple_config(self) -> None:
    """Test loading a simple configuration."""
    config = load(
      """
sites:
  - resource_prefix: cdk-web-static
    hosted_zone_name: example.com
    domain_name: example.com
"""
    )

    assert len(config.sites) == 1
    assert config.sites[0].resource_prefix == "cdk-web-static"
    assert config.sites[0].hosted_zone_name == "example.com"
    assert config.sites[0].domain_name == "example.com"

  def test_load_with_defaults(self) -> None:
    """Test loading configuration with defaults."""
    config = load(
      """
defaults:
  account: "123456789012"
  include_www: false
  removal_policy: destroy

sites:
  - resource_prefix: cdk-web-static
    hosted_zone_name: example.com
    domain_name: example.com
"""
    )

    assert config.sites[0].account == "123456789012"
    assert config.sites[0].include_www is False
    assert config.sites[0].removal_policy == "destroy"

  def test_site_overrides_defaults(self) -> None:
    """Test that site-specific config overrides defaults."""
    config = load(
      """
defaults:
  include_www: false

sites:
  - resource_prefix: cdk-web-static
    hosted_zone_name: example.com
    domain_name: example.com
    include_www: true
"""
    )

    assert config.sites[0].include_www is True

  def test_load_multiple_sites(self) -> None:
    """Test loading multiple sites."""
    config = load(
      """
sites:
  - resource_prefix: one
    hosted_zone_name: site1.com
    domain_name: site1.com

  - resource_prefix: two
    hosted_zone_name: site2.com
    domain_name: site2.com
"""
    )

    assert [s.domain_name for s in config.sites] == ["site1.com", "site2.com"]

  def test_output_ids(self) -> None:
    """Configured output ids override the derived ones."""
    config = load(
      """
sites:
  - resource_prefix: cdk-web-static
    hosted_zone_name: example.com
    domain_name: example.com
    output_ids:
      bucket_name: SiteBucketName
"""
    )

    assert config.sites[0].output_ids == OutputIds(
      bucket_name="SiteBucketName",
      distribution_id="cdk-web-static--distribution-id",
    )

  def test_account_and_hosted_zone_id(self) -> None:
    """Account ids are kept as strings."""
    config = load(
      """
sites:
  - resource_prefix: cdk-web-static
    hosted_zone_name: example.com
    domain_name: example.com
    account: 123456789012
    hosted_zone_id: Z1234567890
"""
    )

    assert config.sites[0].account == "123456789012"
    assert config.sites[0].hosted_zone_id == "Z1234567890"

  def test_relative_source_path_resolved_against_file(self, tmp_path: Path) -> None:
    """Source paths are relative to the YAML file."""
    config_file = tmp_path / "sites.yaml"
    config_file.write_text(
      """
sites:
  - resource_prefix: cdk-web-static
    hosted_zone_name: example.com
    domain_name: example.com
    site_source_path: dist
"""
    )

    config = Config.from_yaml(config_file)

    assert config.sites[0].site_source_path == str((tmp_path / "dist").resolve())

  def test_missing_required_option(self) -> None:
    """A site without a domain names the missing option."""
    with pytest.raises(InvalidConfigurationError) as exc_info:
      load(
        """
sites:
  - resource_prefix: cdk-web-static
    hosted_zone_name: example.com
"""
      )

    assert exc_info.value.option == "domain_name"

  def test_empty_file(self) -> None:
    """An empty file has no sites."""
    assert load("").sites == []
