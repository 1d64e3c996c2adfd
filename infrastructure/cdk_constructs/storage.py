"""Private S3 bucket for static website content."""

from aws_cdk import RemovalPolicy
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_iam as iam
from aws_cdk import aws_s3 as s3
from constructs import Construct


class StorageBucket(Construct):
  """S3 bucket holding the site, readable only through the CDN identity."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket_name: str,
    index_document: str = "index.html",
    error_document: str = "error.html",
    block_public_access: bool = True,
    removal_policy: RemovalPolicy = RemovalPolicy.RETAIN,
    read_identity: cloudfront.IOriginAccessIdentity | None = None,
  ) -> None:
    super().__init__(scope, id)

    self.bucket = s3.Bucket(
      self,
      "Bucket",
      bucket_name=bucket_name,
      website_index_document=index_document,
      website_error_document=error_document,
      public_read_access=False,
      block_public_access=s3.BlockPublicAccess.BLOCK_ALL if block_public_access else None,
      removal_policy=removal_policy,
      # Emptying the bucket on delete only makes sense when it is destroyed
      auto_delete_objects=removal_policy == RemovalPolicy.DESTROY,
    )

    if read_identity is not None:
      self.bucket.add_to_resource_policy(
        iam.PolicyStatement(
          actions=["s3:GetObject"],
          resources=[self.bucket.arn_for_objects("*")],
          principals=[
            iam.CanonicalUserPrincipal(
              read_identity.cloud_front_origin_access_identity_s3_canonical_user_id
            )
          ],
        )
      )
