"""Route 53 DNS constructs."""

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as targets
from constructs import Construct


class HostedZoneLookup(Construct):
  """Existing Route 53 hosted zone, imported by id or looked up by name."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    zone_name: str,
    zone_id: str | None = None,
  ) -> None:
    super().__init__(scope, id)

    if zone_id:
      self.hosted_zone = route53.HostedZone.from_hosted_zone_attributes(
        self,
        "HostedZone",
        hosted_zone_id=zone_id,
        zone_name=zone_name,
      )
    else:
      # Needs an explicit account and region on the stack
      self.hosted_zone = route53.HostedZone.from_lookup(
        self,
        "HostedZone",
        domain_name=zone_name,
      )


class AliasRecord(Construct):
  """A or AAAA alias record pointing at a CloudFront distribution."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    zone: route53.IHostedZone,
    record_name: str,
    distribution: cloudfront.IDistribution,
    record_type: str = "A",
  ) -> None:
    super().__init__(scope, id)

    target = route53.RecordTarget.from_alias(targets.CloudFrontTarget(distribution))
    record_class = route53.AaaaRecord if record_type == "AAAA" else route53.ARecord
    self.record = record_class(
      self,
      "Record",
      zone=zone,
      record_name=record_name,
      target=target,
    )
