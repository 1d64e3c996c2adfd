"""Declarations for a static website served over HTTPS from a private bucket."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from . import declarations as decl
from .declarations import Ref, ResourceDeclaration
from .graph import DependencyGraph, build
from .identifiers import IdentifierRegistry
from .outputs import OutputSpec
from .plan import Plan, compile_plan

if TYPE_CHECKING:
  from infrastructure.config import SiteConfig

logger = structlog.get_logger()


@dataclass(frozen=True)
class Composition:
  """Declarations and exported outputs of one deployment."""

  prefix: str
  declarations: tuple[ResourceDeclaration, ...]
  outputs: tuple[OutputSpec, ...]

  def graph(self) -> DependencyGraph:
    return build(self.declarations)

  def plan(self) -> Plan:
    return compile_plan(self.graph())

  def names(self) -> list[str]:
    return sorted(d.name for d in self.declarations)

  def declaration(self, name: str) -> ResourceDeclaration:
    for declaration in self.declarations:
      if declaration.name == name:
        return declaration
    raise KeyError(name)

  def output(self, output_id: str) -> OutputSpec:
    for output in self.outputs:
      if output.output_id == output_id:
        return output
    raise KeyError(output_id)


def compose_static_site(config: "SiteConfig") -> Composition:
  """Declare the resources hosting one static site.

  Creates:
  - Hosted zone lookup for the site's zone
  - Origin access identity for the CDN
  - Private bucket readable only through that identity
  - DNS-validated certificate (plus www when enabled)
  - CDN distribution enforcing TLS 1.2
  - Alias records for the apex and (optionally) www names
  - (Optional) Upload of the built site from `site_source_path`
  """
  ids = IdentifierRegistry(config.resource_prefix)
  zone = ids.identify("hosted-zone")
  oai = ids.identify("cloudfront-OAI")
  bucket = ids.identify("site-bucket")
  cert = ids.identify("site-certificate")
  distribution = ids.identify("site-distribution")

  aliases = [config.domain_name]
  if config.include_www:
    aliases.append(config.www_domain)

  declarations = [
    decl.hosted_zone(
      zone, zone_name=config.hosted_zone_name, zone_id=config.hosted_zone_id
    ),
    decl.identity(oai, comment=f"OAI for {config.resource_prefix}"),
    decl.storage_bucket(
      bucket,
      bucket_name=config.domain_name,
      removal_policy=config.removal_policy,
      read_access=Ref(oai),
    ),
    decl.certificate(
      cert,
      domain_name=config.domain_name,
      zone=Ref(zone),
      subject_alternative_names=aliases[1:],
    ),
    decl.cdn_distribution(
      distribution,
      origin_bucket=Ref(bucket),
      origin_identity=Ref(oai),
      certificate=Ref(cert),
      aliases=aliases,
    ),
    decl.dns_record(
      ids.identify("site-alias-record-01"),
      zone=Ref(zone),
      target=Ref(distribution),
      record_name=config.domain_name,
    ),
  ]

  if config.include_www:
    declarations.append(
      decl.dns_record(
        ids.identify("site-alias-record-02"),
        zone=Ref(zone),
        target=Ref(distribution),
        record_name=config.www_domain,
      )
    )

  if config.site_source_path and config.deploy_content:
    declarations.append(
      decl.content_deployment(
        ids.identify("site-content"),
        source_path=config.site_source_path,
        bucket=Ref(bucket),
        distribution=Ref(distribution),
      )
    )

  outputs = (
    OutputSpec(
      output_id=config.output_ids.bucket_name,
      source=bucket,
      attribute="bucket_name",
      description="S3 bucket name",
    ),
    OutputSpec(
      output_id=config.output_ids.distribution_id,
      source=distribution,
      attribute="distribution_id",
      description="CloudFront distribution ID",
    ),
  )

  logger.debug(
    "site_composed",
    prefix=config.resource_prefix,
    domain=config.domain_name,
    declarations=len(declarations),
  )
  return Composition(config.resource_prefix, tuple(declarations), outputs)
