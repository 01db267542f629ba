"""ACM certificate for the site domain, validated through Route53 DNS."""

from dataclasses import dataclass

from aws_cdk import CfnOutput, RemovalPolicy, Stack, Token
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_route53 as route53
from constructs import Construct

from .constants import AWS_REGIONS
from .logging import StructuredLogger
from .naming import create_certificate_name

logger = StructuredLogger(__name__)


@dataclass(frozen=True)
class SslCertificate:
    """Resources produced by create_ssl_certificate."""

    construct: Construct
    certificate: acm.Certificate
    region: str

    @property
    def taggable(self) -> list[Construct]:
        return [self.certificate]


def create_ssl_certificate(
    scope: Construct,
    construct_id: str,
    domain_name: str,
    hosted_zone: route53.IHostedZone,
    environment: str,
    region: str = AWS_REGIONS["CERTIFICATE"],
) -> SslCertificate:
    """Create a certificate for a domain and its www alias.

    Validation records are written into `hosted_zone`; issuance is left
    to ACM and nothing here waits on it.

    Args:
        scope: CDK construct scope
        construct_id: ID of the construct grouping the certificate
        domain_name: Primary domain (e.g., dev.yasmade.net)
        hosted_zone: Zone that receives the DNS validation records
        environment: Environment name, used for the certificate name
        region: Region the certificate must live in (us-east-1 for CloudFront)

    Returns:
        SslCertificate with the ACM certificate
    """
    construct = Construct(scope, construct_id)

    stack_region = Stack.of(construct).region
    if not Token.is_unresolved(stack_region) and stack_region != region:
        logger.warning(
            "Certificate stack region differs from required certificate region",
            stack_region=stack_region,
            certificate_region=region,
            domain_name=domain_name,
        )

    certificate_name = create_certificate_name(environment, domain_name)
    logger.info("Defining certificate", domain_name=domain_name, certificate_name=certificate_name)

    certificate = acm.Certificate(
        construct,
        "Certificate",
        domain_name=domain_name,
        subject_alternative_names=[f"www.{domain_name}"],
        validation=acm.CertificateValidation.from_dns(hosted_zone),
        certificate_name=certificate_name,
        key_algorithm=acm.KeyAlgorithm.RSA_2048,
    )
    certificate.apply_removal_policy(RemovalPolicy.RETAIN)

    CfnOutput(
        construct,
        "CertificateArn",
        value=certificate.certificate_arn,
        description="ACM Certificate ARN",
        export_name=f"{Stack.of(construct).stack_name}-CertificateArn",
    )

    return SslCertificate(construct=construct, certificate=certificate, region=region)
