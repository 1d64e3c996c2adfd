"""ACM certificate with DNS validation."""

from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_route53 as route53
from constructs import Construct


class SiteCertificate(Construct):
  """ACM certificate with DNS validation (no email approval needed)."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    domain_name: str,
    hosted_zone: route53.IHostedZone,
    subject_alternative_names: list[str] | None = None,
  ) -> None:
    super().__init__(scope, id)

    self.certificate = acm.Certificate(
      self,
      "Certificate",
      domain_name=domain_name,
      subject_alternative_names=subject_alternative_names or None,
      validation=acm.CertificateValidation.from_dns(hosted_zone),
    )
