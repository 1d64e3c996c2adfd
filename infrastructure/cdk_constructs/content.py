"""Deployment of the built site into its bucket."""

from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_s3 as s3
from aws_cdk import aws_s3_deployment as s3_deploy
from constructs import Construct


class ContentDeployment(Construct):
  """Uploads a local build directory and invalidates the CDN cache."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    source_path: str,
    bucket: s3.IBucket,
    distribution: cloudfront.IDistribution | None = None,
    invalidation_paths: list[str] | None = None,
    prune: bool = True,
  ) -> None:
    super().__init__(scope, id)

    self.deployment = s3_deploy.BucketDeployment(
      self,
      "Deployment",
      sources=[s3_deploy.Source.asset(source_path)],
      destination_bucket=bucket,
      distribution=distribution,
      distribution_paths=invalidation_paths if distribution is not None else None,
      prune=prune,
    )
