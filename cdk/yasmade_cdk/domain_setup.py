"""
Route53 hosted zone and alias records for the CloudFront distribution.

This module creates:
- A new hosted zone, or a lookup of an existing one
- A and AAAA alias records for the site domain
- An optional A alias record for the www subdomain
"""

from dataclasses import dataclass
from typing import Optional

from aws_cdk import CfnOutput, Fn, Stack
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_route53 as route53
from aws_cdk import aws_route53_targets as targets
from constructs import Construct

from .logging import StructuredLogger

logger = StructuredLogger(__name__)


@dataclass(frozen=True)
class DomainSetup:
    """Resources produced by create_domain_setup."""

    construct: Construct
    hosted_zone: route53.IHostedZone
    a_record: route53.ARecord
    aaaa_record: route53.AaaaRecord
    www_record: Optional[route53.ARecord] = None
    owns_zone: bool = False

    @property
    def taggable(self) -> list[Construct]:
        # Zones passed in or looked up belong to someone else
        return [self.hosted_zone] if self.owns_zone else []


def resolve_hosted_zone(
    scope: Construct,
    construct_id: str,
    domain_name: str,
    create_hosted_zone: bool = True,
) -> route53.IHostedZone:
    """Create a hosted zone for the domain or look up the existing one.

    Lookups need account and region on the stack and credentials at synth
    time; the result is cached in cdk.context.json.
    """
    if create_hosted_zone:
        logger.info("Defining hosted zone", domain_name=domain_name)
        return route53.HostedZone(
            scope,
            construct_id,
            zone_name=domain_name,
            comment=f"Hosted zone for {domain_name}",
        )

    logger.info("Looking up existing hosted zone", domain_name=domain_name)
    return route53.HostedZone.from_lookup(scope, construct_id, domain_name=domain_name)


def create_domain_setup(
    scope: Construct,
    construct_id: str,
    domain_name: str,
    distribution: cloudfront.IDistribution,
    hosted_zone: Optional[route53.IHostedZone] = None,
    create_hosted_zone: bool = True,
    include_www_redirect: bool = True,
) -> DomainSetup:
    """Point the domain at a CloudFront distribution.

    Args:
        scope: CDK construct scope
        construct_id: ID of the construct grouping the DNS resources
        domain_name: Domain name (e.g., 'dev.yasmade.net')
        distribution: CloudFront distribution the records alias
        hosted_zone: Zone to use; when None it is created or looked up
        create_hosted_zone: Create the zone instead of looking it up
                            (ignored when hosted_zone is given)
        include_www_redirect: Also alias www.<domain_name>

    Returns:
        DomainSetup with the zone and records
    """
    construct = Construct(scope, construct_id)

    owns_zone = hosted_zone is None and create_hosted_zone
    if hosted_zone is None:
        hosted_zone = resolve_hosted_zone(construct, "HostedZone", domain_name, create_hosted_zone)

    alias_target = route53.RecordTarget.from_alias(targets.CloudFrontTarget(distribution))

    a_record = route53.ARecord(
        construct,
        "ARecord",
        zone=hosted_zone,
        record_name=domain_name,
        target=alias_target,
        comment=f"A record for {domain_name} pointing to CloudFront",
    )

    aaaa_record = route53.AaaaRecord(
        construct,
        "AAAARecord",
        zone=hosted_zone,
        record_name=domain_name,
        target=alias_target,
        comment=f"AAAA record for {domain_name} pointing to CloudFront",
    )

    www_record = None
    if include_www_redirect:
        www_record = route53.ARecord(
            construct,
            "WwwRecord",
            zone=hosted_zone,
            record_name=f"www.{domain_name}",
            target=alias_target,
            comment=f"WWW record for www.{domain_name} pointing to CloudFront",
        )

    logger.info(
        "Defining alias records",
        domain_name=domain_name,
        include_www=include_www_redirect,
    )

    stack_name = Stack.of(construct).stack_name
    CfnOutput(
        construct,
        "HostedZoneId",
        value=hosted_zone.hosted_zone_id,
        description="Route53 Hosted Zone ID",
        export_name=f"{stack_name}-HostedZoneId",
    )

    # Imported zones do not expose their name servers
    if isinstance(hosted_zone, route53.HostedZone):
        CfnOutput(
            construct,
            "NameServers",
            value=Fn.join(", ", hosted_zone.hosted_zone_name_servers or []),
            description="Route53 Name Servers (update in domain registrar)",
            export_name=f"{stack_name}-NameServers",
        )

    CfnOutput(
        construct,
        "DomainName",
        value=domain_name,
        description="Domain Name",
        export_name=f"{stack_name}-DomainName",
    )

    return DomainSetup(
        construct=construct,
        hosted_zone=hosted_zone,
        a_record=a_record,
        aaaa_record=aaaa_record,
        www_record=www_record,
        owns_zone=owns_zone,
    )
