"""Static site stack wiring storage, DNS, certificate and CDN for one environment."""

from aws_cdk import Stack
from aws_cdk import aws_route53 as route53
from constructs import Construct

from .cdn_distribution import create_cdn_distribution
from .config import EnvironmentConfig
from .constants import S3_SETTINGS
from .domain_setup import create_domain_setup, resolve_hosted_zone
from .logging import StructuredLogger
from .naming import create_distribution_name, create_hosted_zone_name
from .ssl_certificate import create_ssl_certificate
from .static_website import create_artifacts_bucket, create_static_website
from .tagging import apply_tags

logger = StructuredLogger(__name__)


class StaticSiteStack(Stack):
    """
    YasMade - Static Website Stack

    Creates, in dependency order:
    - S3 buckets for the site and build artifacts
    - Route53 hosted zone (created or looked up)
    - ACM certificate for the domain and its www alias
    - CloudFront distribution over the site bucket
    - Route53 alias records pointing at the distribution
    """

    def __init__(
        self, scope: Construct, construct_id: str, config: EnvironmentConfig, **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.config = config
        env_name = config.environment
        domain_name = config.domain.name

        logger.info(
            "Synthesizing static site stack",
            stack_name=self.stack_name,
            environment=env_name,
            domain_name=domain_name,
        )

        # ====================================================================
        # Storage
        # ====================================================================

        self.website = create_static_website(
            self,
            "StaticWebsite",
            bucket_name=config.buckets.static_website,
            versioned=S3_SETTINGS["VERSIONED"],
        )
        self.artifacts_bucket = create_artifacts_bucket(
            self, "BuildArtifacts", config.buckets.build_artifacts
        )

        # ====================================================================
        # DNS zone & certificate
        # ====================================================================

        self.hosted_zone = resolve_hosted_zone(
            self,
            "HostedZone",
            domain_name,
            create_hosted_zone=config.domain.create_hosted_zone,
        )

        self.certificate = create_ssl_certificate(
            self,
            "SslCertificate",
            domain_name=domain_name,
            hosted_zone=self.hosted_zone,
            environment=env_name,
            region=config.domain.certificate_region,
        )

        # ====================================================================
        # CloudFront
        # ====================================================================

        domain_names = [domain_name]
        if config.domain.include_www:
            domain_names.append(f"www.{domain_name}")

        self.cdn = create_cdn_distribution(
            self,
            "CdnDistribution",
            origin_bucket=self.website.bucket,
            origin_access_control=self.website.origin_access_control,
            comment=config.cloudfront.comment,
            default_root_object=config.cloudfront.default_root_object,
            error_configurations=config.cloudfront.error_configurations,
            certificate=self.certificate.certificate,
            domain_names=domain_names,
            enabled=config.cloudfront.enabled,
        )

        # ====================================================================
        # DNS records
        # ====================================================================

        self.domain_setup = create_domain_setup(
            self,
            "DomainSetup",
            domain_name=domain_name,
            distribution=self.cdn.distribution,
            hosted_zone=self.hosted_zone,
            include_www_redirect=config.domain.include_www,
        )

        # ====================================================================
        # Tags
        # ====================================================================

        taggable = [
            *self.website.taggable,
            self.artifacts_bucket,
            *self.certificate.taggable,
            *self.cdn.taggable,
            *self.domain_setup.taggable,
        ]
        owns_zone = isinstance(self.hosted_zone, route53.HostedZone)
        if owns_zone:
            taggable.append(self.hosted_zone)

        apply_tags(taggable, config.tags)
        apply_tags([self.cdn.distribution], {"Name": create_distribution_name(env_name)})
        if owns_zone:
            apply_tags([self.hosted_zone], {"Name": create_hosted_zone_name(env_name, domain_name)})
