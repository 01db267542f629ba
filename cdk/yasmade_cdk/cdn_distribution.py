"""CloudFront distribution for the React single-page app.

This module creates and configures:
- S3 origin signed through the bucket's Origin Access Control
- Default, /static/* and /service-worker.js cache behaviors
- Security response headers
- SPA error rewrites to index.html
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from aws_cdk import CfnOutput, Duration, Stack
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_cloudfront_origins as origins
from aws_cdk import aws_s3 as s3
from constructs import Construct

from .config import ErrorConfiguration
from .constants import CLOUDFRONT_SETTINGS, SECURITY_HEADERS, SERVICE_WORKER_PATH, STATIC_ASSETS_PATH
from .errors import ConfigError, ErrorCode
from .logging import StructuredLogger

logger = StructuredLogger(__name__)


@dataclass(frozen=True)
class CdnDistribution:
    """Resources produced by create_cdn_distribution."""

    construct: Construct
    distribution: cloudfront.Distribution
    response_headers_policy: cloudfront.ResponseHeadersPolicy

    @property
    def taggable(self) -> list[Construct]:
        return [self.distribution]


def security_headers_behavior() -> cloudfront.ResponseSecurityHeadersBehavior:
    """Translate SECURITY_HEADERS into a CloudFront security headers behavior."""
    hsts = SECURITY_HEADERS["Strict-Transport-Security"]
    max_age = re.search(r"max-age=(\d+)", hsts)
    if max_age is None:
        raise ConfigError("Strict-Transport-Security header has no max-age", {"value": hsts})

    return cloudfront.ResponseSecurityHeadersBehavior(
        content_security_policy=cloudfront.ResponseHeadersContentSecurityPolicy(
            content_security_policy=SECURITY_HEADERS["Content-Security-Policy"],
            override=True,
        ),
        content_type_options=cloudfront.ResponseHeadersContentTypeOptions(override=True),
        frame_options=cloudfront.ResponseHeadersFrameOptions(
            frame_option=getattr(cloudfront.HeadersFrameOption, SECURITY_HEADERS["X-Frame-Options"]),
            override=True,
        ),
        strict_transport_security=cloudfront.ResponseHeadersStrictTransportSecurity(
            access_control_max_age=Duration.seconds(int(max_age.group(1))),
            include_subdomains="includeSubDomains" in hsts,
            override=True,
        ),
        xss_protection=cloudfront.ResponseHeadersXSSProtection(
            protection=SECURITY_HEADERS["X-XSS-Protection"].startswith("1"),
            mode_block="mode=block" in SECURITY_HEADERS["X-XSS-Protection"],
            override=True,
        ),
    )


def create_cdn_distribution(
    scope: Construct,
    construct_id: str,
    origin_bucket: s3.IBucket,
    origin_access_control: cloudfront.IOriginAccessControl,
    comment: str,
    default_root_object: str,
    error_configurations: Sequence[ErrorConfiguration],
    certificate: Optional[acm.ICertificate] = None,
    domain_names: Optional[list[str]] = None,
    enabled: bool = True,
) -> CdnDistribution:
    """Create the CloudFront distribution in front of the website bucket.

    Args:
        scope: CDK construct scope
        construct_id: ID of the construct grouping the distribution resources
        origin_bucket: S3 bucket with the built site
        origin_access_control: OAC created alongside the bucket
        comment: Distribution description
        default_root_object: Object served for "/" (usually index.html)
        error_configurations: Error rewrites for client-side routing
        certificate: ACM certificate (us-east-1) for the custom domains
        domain_names: Custom domain names (require a certificate)
        enabled: Whether the distribution accepts requests

    Returns:
        CdnDistribution with the distribution and headers policy

    Raises:
        ConfigError: If domain names are given without a certificate
    """
    if domain_names and certificate is None:
        raise ConfigError(
            "Custom domain names require a certificate",
            {"domainNames": domain_names},
            error_code=ErrorCode.MISSING_CERTIFICATE,
        )

    construct = Construct(scope, construct_id)

    s3_origin = origins.S3BucketOrigin.with_origin_access_control(
        origin_bucket,
        origin_access_control=origin_access_control,
    )

    response_headers_policy = cloudfront.ResponseHeadersPolicy(
        construct,
        "SecurityHeaders",
        comment=f"Security headers for {comment}",
        security_headers_behavior=security_headers_behavior(),
    )

    compress = CLOUDFRONT_SETTINGS["COMPRESS"]

    def cached_behavior() -> cloudfront.BehaviorOptions:
        return cloudfront.BehaviorOptions(
            origin=s3_origin,
            viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
            allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD,
            cache_policy=cloudfront.CachePolicy.CACHING_OPTIMIZED,
            response_headers_policy=response_headers_policy,
            compress=compress,
        )

    additional_behaviors = {
        STATIC_ASSETS_PATH: cached_behavior(),
        # Never cache the service worker so PWA updates reach clients immediately
        SERVICE_WORKER_PATH: cloudfront.BehaviorOptions(
            origin=s3_origin,
            viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
            allowed_methods=cloudfront.AllowedMethods.ALLOW_GET_HEAD,
            cache_policy=cloudfront.CachePolicy.CACHING_DISABLED,
            response_headers_policy=response_headers_policy,
            compress=False,
        ),
    }

    error_responses = [
        cloudfront.ErrorResponse(
            http_status=error.error_code,
            response_http_status=error.response_code,
            response_page_path=error.response_page_path,
            ttl=Duration.seconds(CLOUDFRONT_SETTINGS["ERROR_CACHING_TTL_SECONDS"]),
        )
        for error in error_configurations
    ]

    logger.info(
        "Defining CloudFront distribution",
        comment=comment,
        domain_names=domain_names,
        enabled=enabled,
    )

    distribution = cloudfront.Distribution(
        construct,
        "Distribution",
        default_behavior=cached_behavior(),
        additional_behaviors=additional_behaviors,
        domain_names=domain_names or None,
        certificate=certificate,
        default_root_object=default_root_object,
        error_responses=error_responses or None,
        comment=comment,
        enabled=enabled,
        http_version=cloudfront.HttpVersion.HTTP2_AND_3,
        price_class=getattr(cloudfront.PriceClass, CLOUDFRONT_SETTINGS["PRICE_CLASS"]),
        minimum_protocol_version=(
            cloudfront.SecurityPolicyProtocol.TLS_V1_2_2021 if certificate is not None else None
        ),
    )

    stack_name = Stack.of(construct).stack_name
    CfnOutput(
        construct,
        "DistributionId",
        value=distribution.distribution_id,
        description="CloudFront Distribution ID",
        export_name=f"{stack_name}-DistributionId",
    )
    CfnOutput(
        construct,
        "DistributionDomainName",
        value=distribution.distribution_domain_name,
        description="CloudFront Distribution Domain Name",
        export_name=f"{stack_name}-DistributionDomainName",
    )

    return CdnDistribution(
        construct=construct,
        distribution=distribution,
        response_headers_policy=response_headers_policy,
    )
