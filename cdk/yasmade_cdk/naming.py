"""
Resource naming for all infrastructure.

Names follow `{prefix}-{resource_type}-{environment}[-{suffix}]` and are
checked against the AWS length limit. Too-long names raise; they are
never truncated.
"""

from typing import Optional

from .constants import NAMING
from .errors import NameTooLongError


def create_name(resource_type: str, environment: str, suffix: Optional[str] = None) -> str:
    """Create a standardized resource name.

    Args:
        resource_type: Type of AWS resource (e.g., 's3', 'cloudfront', 'cert')
        environment: Environment name (dev, staging, prod)
        suffix: Optional additional identifier

    Returns:
        Formatted resource name

    Raises:
        NameTooLongError: If the name exceeds NAMING["MAX_LENGTH"]
    """
    parts = [NAMING["PREFIX"], resource_type, environment]
    if suffix:
        parts.append(suffix)
    name = NAMING["SEPARATOR"].join(parts)

    if len(name) > NAMING["MAX_LENGTH"]:
        raise NameTooLongError(name, NAMING["MAX_LENGTH"])

    return name


def _domain_safe(domain: str) -> str:
    return domain.replace(".", "-")


def create_bucket_name(environment: str, purpose: str) -> str:
    """Create an S3 bucket name (globally unique and DNS compliant).

    Args:
        environment: Environment name
        purpose: Bucket purpose (e.g., 'static-website', 'build-artifacts')
    """
    return create_name("s3", environment, purpose).lower()


def create_distribution_name(environment: str) -> str:
    """Create a CloudFront distribution name."""
    return create_name("cloudfront", environment, "distribution")


def create_certificate_name(environment: str, domain: str) -> str:
    """Create an ACM certificate name; dots in the domain become dashes."""
    return create_name("cert", environment, _domain_safe(domain))


def create_hosted_zone_name(environment: str, domain: str) -> str:
    """Create a Route53 hosted zone resource name."""
    return create_name("hz", environment, _domain_safe(domain))
