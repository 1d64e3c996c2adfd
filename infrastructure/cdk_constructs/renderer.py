"""Realises a compiled plan as CDK constructs."""

from collections.abc import Callable, Mapping
from typing import Any

import structlog
from aws_cdk import RemovalPolicy
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from constructs import Construct

from infrastructure.composer import (
  InvalidConfigurationError,
  Plan,
  PlanStep,
  ProvisioningLedger,
  Ref,
  ResourceKind,
)

from .certificate import SiteCertificate
from .content import ContentDeployment
from .distribution import (
  ALLOWED_METHODS,
  PROTOCOL_VERSIONS,
  SSL_METHODS,
  CloudFrontDistribution,
  error_response,
)
from .dns import AliasRecord, HostedZoneLookup
from .storage import StorageBucket

logger = structlog.get_logger()

REMOVAL_POLICIES = {
  "retain": RemovalPolicy.RETAIN,
  "destroy": RemovalPolicy.DESTROY,
  "snapshot": RemovalPolicy.SNAPSHOT,
}


def _lookup(table: Mapping[str, Any], option: str, value: str) -> Any:
  try:
    return table[value]
  except KeyError:
    raise InvalidConfigurationError(
      option, f"{value!r} is not one of {', '.join(sorted(table))}"
    ) from None


class PlanRenderer:
  """Creates one construct per plan step, in plan order.

  Refs in a step's config resolve to the resources of steps rendered before
  it; plan ordering guarantees they exist. Each step is reported to the
  ledger as it is rendered.
  """

  def __init__(self, scope: Construct) -> None:
    self.scope = scope
    self.resources: dict[str, Any] = {}
    self.ledger: ProvisioningLedger | None = None
    self._builders: dict[ResourceKind, Callable[[str, Mapping[str, Any]], Any]] = {
      ResourceKind.HOSTED_ZONE: self._hosted_zone,
      ResourceKind.IDENTITY: self._identity,
      ResourceKind.STORAGE_BUCKET: self._storage_bucket,
      ResourceKind.CERTIFICATE: self._certificate,
      ResourceKind.CDN_DISTRIBUTION: self._distribution,
      ResourceKind.DNS_RECORD: self._dns_record,
      ResourceKind.CONTENT_DEPLOYMENT: self._content_deployment,
    }

  def render(
    self, plan: Plan, ledger: ProvisioningLedger | None = None
  ) -> dict[str, Any]:
    """Render every step and return the resources by declaration name.

    Args:
      plan: Compiled plan to render
      ledger: Ledger to report steps to; a new one is started from the plan
        when omitted
    """
    if ledger is None:
      ledger = ProvisioningLedger.from_plan(plan)
    self.ledger = ledger
    for step in plan:
      self._render_step(step, ledger)
    logger.info("plan_rendered", steps=len(plan))
    return dict(self.resources)

  def _render_step(self, step: PlanStep, ledger: ProvisioningLedger) -> None:
    declaration = step.declaration
    ledger.start(step.name)
    try:
      resource = self._builders[declaration.kind](step.name, declaration.config)
    except Exception as e:
      ledger.fail(step.name, str(e))
      raise
    self.resources[step.name] = resource
    ledger.succeed(step.name)
    logger.debug("step_rendered", declaration=step.name, kind=declaration.kind.value)

  def resolve(self, ref: Ref) -> Any:
    """Rendered resource for a ref, or one of its attributes."""
    resource = self.resources[ref.name]
    if ref.attribute is None:
      return resource
    return getattr(resource, ref.attribute)

  def _optional(self, config: Mapping[str, Any], option: str) -> Any:
    value = config.get(option)
    return self.resolve(value) if isinstance(value, Ref) else value

  def _zone(self, name: str, value: Ref | str) -> Any:
    if isinstance(value, Ref):
      return self.resolve(value)
    return route53.HostedZone.from_lookup(self.scope, f"{name}-zone", domain_name=value)

  def _certificate_for(self, name: str, value: Ref | str) -> Any:
    if isinstance(value, Ref):
      return self.resolve(value)
    return acm.Certificate.from_certificate_arn(self.scope, f"{name}-certificate", value)

  def _hosted_zone(self, name: str, config: Mapping[str, Any]) -> Any:
    return HostedZoneLookup(
      self.scope,
      name,
      zone_name=config["zone_name"],
      zone_id=config.get("zone_id"),
    ).hosted_zone

  def _identity(self, name: str, config: Mapping[str, Any]) -> Any:
    return cloudfront.OriginAccessIdentity(self.scope, name, comment=config["comment"])

  def _storage_bucket(self, name: str, config: Mapping[str, Any]) -> Any:
    return StorageBucket(
      self.scope,
      name,
      bucket_name=config["bucket_name"],
      index_document=config.get("index_document", "index.html"),
      error_document=config.get("error_document", "error.html"),
      block_public_access=config.get("block_public_access", True),
      removal_policy=_lookup(
        REMOVAL_POLICIES, "removal_policy", config.get("removal_policy", "retain")
      ),
      read_identity=self._optional(config, "read_access"),
    ).bucket

  def _certificate(self, name: str, config: Mapping[str, Any]) -> Any:
    return SiteCertificate(
      self.scope,
      name,
      domain_name=config["domain_name"],
      hosted_zone=self._zone(name, config["zone"]),
      subject_alternative_names=list(config.get("subject_alternative_names", ())),
    ).certificate

  def _distribution(self, name: str, config: Mapping[str, Any]) -> Any:
    return CloudFrontDistribution(
      self.scope,
      name,
      bucket=self.resolve(config["origin_bucket"]),
      certificate=self._certificate_for(name, config["certificate"]),
      domain_names=list(config["aliases"]),
      origin_identity=self._optional(config, "origin_identity"),
      default_root_object=config.get("default_root_object", "index.html"),
      compress=config.get("compress", True),
      allowed_methods=_lookup(
        ALLOWED_METHODS, "allowed_methods", config.get("allowed_methods", "GET_HEAD_OPTIONS")
      ),
      minimum_protocol_version=_lookup(
        PROTOCOL_VERSIONS,
        "minimum_protocol_version",
        config.get("minimum_protocol_version", "TLSv1.2_2021"),
      ),
      ssl_method=_lookup(SSL_METHODS, "ssl_method", config.get("ssl_method", "sni-only")),
      error_responses=[
        error_response(**response) for response in config.get("error_responses", ())
      ],
    ).distribution

  def _dns_record(self, name: str, config: Mapping[str, Any]) -> Any:
    return AliasRecord(
      self.scope,
      name,
      zone=self._zone(name, config["zone"]),
      record_name=config["record_name"],
      distribution=self.resolve(config["target"]),
      record_type=config.get("record_type", "A"),
    ).record

  def _content_deployment(self, name: str, config: Mapping[str, Any]) -> Any:
    return ContentDeployment(
      self.scope,
      name,
      source_path=config["source_path"],
      bucket=self.resolve(config["bucket"]),
      distribution=self._optional(config, "distribution"),
      invalidation_paths=list(config.get("invalidation_paths", ("/*",))),
      prune=config.get("prune", True),
    ).deployment
