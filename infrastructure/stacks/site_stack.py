"""CDK stack for a single static website."""

from typing import Any

import aws_cdk as cdk
from constructs import Construct

from infrastructure.cdk_constructs import StaticSiteConstruct
from infrastructure.composer import InvalidConfigurationError, compose_static_site
from infrastructure.config import CERTIFICATE_REGION, SiteConfig


class StaticSiteStack(cdk.Stack):
  """Stack for a single static website.

  The site's certificate is issued in this stack, so the stack must deploy to
  the region CloudFront reads certificates from. Environment-agnostic stacks
  are not checked.
  """

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    site_config: SiteConfig,
    **kwargs: Any,
  ) -> None:
    super().__init__(scope, id, **kwargs)

    if not cdk.Token.is_unresolved(self.region) and self.region != CERTIFICATE_REGION:
      raise InvalidConfigurationError(
        "region",
        f"stack {id} is in {self.region}, CloudFront certificates must be in {CERTIFICATE_REGION}",
      )

    self.composition = compose_static_site(site_config)
    self.site = StaticSiteConstruct(self, "Site", composition=self.composition)

    cdk.Tags.of(self).add("Project", "static-sites")
    cdk.Tags.of(self).add("Domain", site_config.domain_name)
    cdk.Tags.of(self).add("ResourcePrefix", site_config.resource_prefix)
