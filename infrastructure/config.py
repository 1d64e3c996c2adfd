"""Configuration loader for static site deployments."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from infrastructure.composer.errors import InvalidConfigurationError
from infrastructure.composer.identifiers import identify

REMOVAL_POLICIES = ("retain", "destroy", "snapshot")

# CloudFront only accepts ACM certificates issued in this region
CERTIFICATE_REGION = "us-east-1"


@dataclass
class OutputIds:
  """Export names other deployments use to read this site's outputs."""

  bucket_name: str
  distribution_id: str

  @classmethod
  def for_prefix(cls, prefix: str) -> "OutputIds":
    return cls(
      bucket_name=identify(prefix, "bucket-name"),
      distribution_id=identify(prefix, "distribution-id"),
    )


@dataclass
class SiteConfig:
  """Configuration for a single static site."""

  resource_prefix: str
  hosted_zone_name: str
  domain_name: str
  include_www: bool = True
  site_source_path: str | None = None
  # Derived from resource_prefix when omitted
  output_ids: OutputIds = field(default=None)  # type: ignore[assignment]
  hosted_zone_id: str | None = None
  removal_policy: str = "retain"
  deploy_content: bool = True
  account: str | None = None
  region: str = CERTIFICATE_REGION

  def __post_init__(self) -> None:
    for option in ("resource_prefix", "hosted_zone_name", "domain_name"):
      if not getattr(self, option):
        raise InvalidConfigurationError(option, "must not be empty")
    if self.removal_policy.lower() not in REMOVAL_POLICIES:
      raise InvalidConfigurationError(
        "removal_policy", f"expected one of {', '.join(REMOVAL_POLICIES)}"
      )
    self.removal_policy = self.removal_policy.lower()
    if self.region != CERTIFICATE_REGION:
      raise InvalidConfigurationError(
        "region",
        f"must be {CERTIFICATE_REGION}, where CloudFront certificates are issued",
      )
    if self.output_ids is None:
      self.output_ids = OutputIds.for_prefix(self.resource_prefix)

  @property
  def www_domain(self) -> str:
    return f"www.{self.domain_name}"

  @property
  def stack_name(self) -> str:
    return f"StaticSite-{self.domain_name.replace('.', '-')}"


def _site_from_dict(data: dict[str, Any]) -> SiteConfig:
  for option in ("resource_prefix", "hosted_zone_name", "domain_name"):
    if option not in data:
      raise InvalidConfigurationError(option, "required for every site")

  output_ids = None
  output_data = data.get("output_ids")
  if output_data:
    defaults = OutputIds.for_prefix(data["resource_prefix"])
    output_ids = OutputIds(
      bucket_name=output_data.get("bucket_name", defaults.bucket_name),
      distribution_id=output_data.get("distribution_id", defaults.distribution_id),
    )

  source_path = data.get("site_source_path")
  return SiteConfig(
    resource_prefix=data["resource_prefix"],
    hosted_zone_name=data["hosted_zone_name"],
    domain_name=data["domain_name"],
    include_www=data.get("include_www", True),
    site_source_path=str(source_path) if source_path else None,
    output_ids=output_ids,
    hosted_zone_id=data.get("hosted_zone_id"),
    removal_policy=str(data.get("removal_policy", "retain")),
    deploy_content=data.get("deploy_content", True),
    account=str(data["account"]) if data.get("account") else None,
    region=data.get("region", CERTIFICATE_REGION),
  )


@dataclass
class Config:
  """Multi-site configuration."""

  sites: list[SiteConfig] = field(default_factory=list)

  @classmethod
  def from_yaml(cls, path: Path | str = "sites.yaml") -> "Config":
    """Load configuration from YAML file.

    Keys under `defaults` apply to every site unless the site sets them.
    Relative `site_source_path` values are resolved against the YAML file.
    """
    path = Path(path)
    with open(path) as f:
      data = yaml.safe_load(f) or {}

    defaults = data.get("defaults", {})
    sites: list[SiteConfig] = []

    for site_data in data.get("sites", []):
      merged = {**defaults, **site_data}
      source_path = merged.get("site_source_path")
      if source_path and not Path(source_path).is_absolute():
        merged["site_source_path"] = str((path.parent / source_path).resolve())
      sites.append(_site_from_dict(merged))

    return cls(sites=sites)
