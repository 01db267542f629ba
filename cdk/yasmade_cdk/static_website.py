"""
S3 buckets for static website hosting.

Creates:
- Private website bucket served through CloudFront
- Origin Access Control the distribution signs bucket requests with
- Build artifacts bucket
"""

from dataclasses import dataclass

from aws_cdk import CfnOutput, Duration, RemovalPolicy, Stack
from aws_cdk import aws_cloudfront as cloudfront
from aws_cdk import aws_s3 as s3
from constructs import Construct

from .constants import S3_SETTINGS
from .logging import StructuredLogger

logger = StructuredLogger(__name__)


@dataclass(frozen=True)
class StaticWebsite:
    """Resources produced by create_static_website."""

    construct: Construct
    bucket: s3.Bucket
    origin_access_control: cloudfront.S3OriginAccessControl

    @property
    def taggable(self) -> list[Construct]:
        return [self.bucket]


def create_static_website(
    scope: Construct,
    construct_id: str,
    bucket_name: str,
    versioned: bool = True,
    lifecycle_rules: bool = True,
) -> StaticWebsite:
    """Create the S3 bucket backing the CloudFront distribution.

    Args:
        scope: CDK construct scope
        construct_id: ID of the construct grouping the bucket resources
        bucket_name: Globally unique bucket name
        versioned: Keep object versions for rollback
        lifecycle_rules: Add the noncurrent-version lifecycle rule (versioned
                         buckets only)

    Returns:
        StaticWebsite with the bucket and its Origin Access Control
    """
    construct = Construct(scope, construct_id)
    logger.info("Defining static website bucket", bucket_name=bucket_name, versioned=versioned)

    bucket = s3.Bucket(
        construct,
        "WebsiteBucket",
        bucket_name=bucket_name,
        # CloudFront is the only reader
        block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
        versioned=versioned,
        encryption=s3.BucketEncryption.S3_MANAGED,
        enforce_ssl=True,
        removal_policy=RemovalPolicy.RETAIN,
        cors=[
            s3.CorsRule(
                allowed_methods=[s3.HttpMethods.GET, s3.HttpMethods.HEAD],
                allowed_origins=["*"],  # CloudFront restricts this
                allowed_headers=["*"],
                max_age=S3_SETTINGS["CORS_MAX_AGE_SECONDS"],
            )
        ],
    )

    # Noncurrent versions only exist on versioned buckets
    if lifecycle_rules and versioned:
        bucket.add_lifecycle_rule(
            id="OptimizeStorage",
            enabled=True,
            noncurrent_version_transitions=[
                s3.NoncurrentVersionTransition(
                    storage_class=s3.StorageClass.INFREQUENT_ACCESS,
                    transition_after=Duration.days(S3_SETTINGS["TRANSITION_TO_IA_DAYS"]),
                )
            ],
            noncurrent_version_expiration=Duration.days(S3_SETTINGS["NONCURRENT_EXPIRE_DAYS"]),
        )

    origin_access_control = cloudfront.S3OriginAccessControl(
        construct,
        "OAC",
        origin_access_control_name=f"{bucket_name}-oac",
        description=f"Origin Access Control for {bucket_name}",
        signing=cloudfront.Signing.SIGV4_ALWAYS,
    )

    stack_name = Stack.of(construct).stack_name
    CfnOutput(
        construct,
        "BucketArn",
        value=bucket.bucket_arn,
        description="S3 Bucket ARN",
        export_name=f"{stack_name}-BucketArn",
    )
    CfnOutput(
        construct,
        "BucketName",
        value=bucket.bucket_name,
        description="S3 Bucket Name",
        export_name=f"{stack_name}-BucketName",
    )

    return StaticWebsite(
        construct=construct,
        bucket=bucket,
        origin_access_control=origin_access_control,
    )


def create_artifacts_bucket(scope: Construct, construct_id: str, bucket_name: str) -> s3.Bucket:
    """Create the bucket CI uploads build artifacts to before publishing."""
    logger.info("Defining build artifacts bucket", bucket_name=bucket_name)

    bucket = s3.Bucket(
        scope,
        construct_id,
        bucket_name=bucket_name,
        block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
        versioned=False,
        encryption=s3.BucketEncryption.S3_MANAGED,
        enforce_ssl=True,
        removal_policy=RemovalPolicy.RETAIN,
    )
    bucket.add_lifecycle_rule(
        id="ExpireArtifacts",
        enabled=True,
        expiration=Duration.days(S3_SETTINGS["EXPIRE_DAYS"]),
    )
    return bucket
