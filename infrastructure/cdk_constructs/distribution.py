"""CloudFront distribution for static website."""

from aws_cdk import Duration
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from aws_cdk import aws_s3 as s3
from constructs import Construct

ALLOWED_METHODS = {
  "GET_HEAD": cloudfront.AllowedMethods.ALLOW_GET_HEAD,
  "GET_HEAD_OPTIONS": cloudfront.AllowedMethods.ALLOW_GET_HEAD_OPTIONS,
  "ALL": cloudfront.AllowedMethods.ALLOW_ALL,
}

PROTOCOL_VERSIONS = {
  "TLSv1.2_2018": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2018,
  "TLSv1.2_2019": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2019,
  "TLSv1.2_2021": cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021,
}

SSL_METHODS = {
  "sni-only": cloudfront.SSLMethod.SNI,
  "vip": cloudfront.SSLMethod.VIP,
}


class CloudFrontDistribution(Construct):
  """HTTPS-only CloudFront distribution in front of a private S3 bucket."""

  def __init__(
    self,
    scope: Construct,
    id: str,
    *,
    bucket: s3.IBucket,
    certificate: acm.ICertificate,
    domain_names: list[str],
    origin_identity: cloudfront.IOriginAccessIdentity | None = None,
    default_root_object: str = "index.html",
    compress: bool = True,
    allowed_methods: cloudfront.AllowedMethods = cloudfront.AllowedMethods.ALLOW_GET_HEAD_OPTIONS,
    minimum_protocol_version: cloudfront.SecurityPolicyProtocol = (
      cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021
    ),
    ssl_method: cloudfront.SSLMethod = cloudfront.SSLMethod.SNI,
    error_responses: list[cloudfront.ErrorResponse] | None = None,
  ) -> None:
    super().__init__(scope, id)

    if origin_identity is not None:
      origin = origins.S3BucketOrigin.with_origin_access_identity(
        bucket, origin_access_identity=origin_identity
      )
    else:
      origin = origins.S3StaticWebsiteOrigin(bucket)

    self.distribution = cloudfront.Distribution(
      self,
      "Distribution",
      default_behavior=cloudfront.BehaviorOptions(
        origin=origin,
        viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
        allowed_methods=allowed_methods,
        cached_methods=cloudfront.CachedMethods.CACHE_GET_HEAD,
        compress=compress,
      ),
      domain_names=domain_names,
      certificate=certificate,
      default_root_object=default_root_object,
      minimum_protocol_version=minimum_protocol_version,
      ssl_support_method=ssl_method,
      error_responses=error_responses,
    )


def error_response(
  error_code: int,
  response_code: int,
  response_page_path: str,
  error_caching_min_ttl: int,
) -> cloudfront.ErrorResponse:
  """Map an origin error status to the page served in its place."""
  return cloudfront.ErrorResponse(
    http_status=error_code,
    response_http_status=response_code,
    response_page_path=response_page_path,
    ttl=Duration.seconds(error_caching_min_ttl),
  )
