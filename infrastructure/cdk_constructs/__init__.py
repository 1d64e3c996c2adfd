"""CDK constructs for static website infrastructure."""

from .certificate import SiteCertificate
from .content import ContentDeployment
from .distribution import CloudFrontDistribution
from .dns import AliasRecord, HostedZoneLookup
from .renderer import PlanRenderer
from .static_site import StaticSiteConstruct
from .storage import StorageBucket

__all__ = [
  "AliasRecord",
  "CloudFrontDistribution",
  "ContentDeployment",
  "HostedZoneLookup",
  "PlanRenderer",
  "SiteCertificate",
  "StaticSiteConstruct",
  "StorageBucket",
]
