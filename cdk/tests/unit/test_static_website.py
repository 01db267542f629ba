"""Tests for the static_website module."""

import pytest
from aws_cdk import App, Stack, assertions
from aws_cdk import aws_s3 as s3

from yasmade_cdk.static_website import (
    StaticWebsite,
    create_artifacts_bucket,
    create_static_website,
)

BUCKET_NAME = "yasmade-s3-test-static-website"


class TestCreateStaticWebsite:
    """Tests for create_static_website function."""

    @pytest.fixture
    def stack(self):
        """Create a test stack."""
        app = App()
        return Stack(app, "TestStack")

    def test_returns_bucket_and_oac(self, stack):
        """Should return the bucket and its Origin Access Control."""
        result = create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME)

        assert isinstance(result, StaticWebsite)
        assert isinstance(result.bucket, s3.Bucket)
        assert result.origin_access_control is not None
        assert result.taggable == [result.bucket]

    def test_bucket_is_private_encrypted_and_versioned(self, stack):
        """Bucket blocks public access, encrypts at rest and keeps versions."""
        create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME)
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::S3::Bucket",
            {
                "BucketName": BUCKET_NAME,
                "PublicAccessBlockConfiguration": {
                    "BlockPublicAcls": True,
                    "BlockPublicPolicy": True,
                    "IgnorePublicAcls": True,
                    "RestrictPublicBuckets": True,
                },
                "VersioningConfiguration": {"Status": "Enabled"},
                "BucketEncryption": {
                    "ServerSideEncryptionConfiguration": [
                        {"ServerSideEncryptionByDefault": {"SSEAlgorithm": "AES256"}}
                    ]
                },
            },
        )

    def test_bucket_is_retained(self, stack):
        """Bucket survives stack deletion."""
        create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME)
        template = assertions.Template.from_stack(stack)

        template.has_resource(
            "AWS::S3::Bucket",
            {"DeletionPolicy": "Retain", "UpdateReplacePolicy": "Retain"},
        )

    def test_bucket_enforces_ssl(self, stack):
        """Bucket policy denies non-TLS requests."""
        create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME)
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::S3::BucketPolicy",
            {
                "PolicyDocument": {
                    "Statement": assertions.Match.array_with(
                        [
                            assertions.Match.object_like(
                                {
                                    "Effect": "Deny",
                                    "Condition": {"Bool": {"aws:SecureTransport": "false"}},
                                }
                            )
                        ]
                    )
                }
            },
        )

    def test_cors_allows_get_and_head(self, stack):
        """CORS allows GET/HEAD from any origin for an hour."""
        create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME)
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::S3::Bucket",
            {
                "CorsConfiguration": {
                    "CorsRules": [
                        {
                            "AllowedMethods": ["GET", "HEAD"],
                            "AllowedOrigins": ["*"],
                            "AllowedHeaders": ["*"],
                            "MaxAge": 3600,
                        }
                    ]
                }
            },
        )

    def test_lifecycle_rule_for_noncurrent_versions(self, stack):
        """Noncurrent versions go to IA after 30 days and expire after 90."""
        create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME)
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::S3::Bucket",
            {
                "LifecycleConfiguration": {
                    "Rules": [
                        {
                            "Id": "OptimizeStorage",
                            "Status": "Enabled",
                            "NoncurrentVersionTransitions": [
                                {"StorageClass": "STANDARD_IA", "TransitionInDays": 30}
                            ],
                            "NoncurrentVersionExpiration": {"NoncurrentDays": 90},
                        }
                    ]
                }
            },
        )

    def test_lifecycle_rule_can_be_disabled(self, stack):
        """No lifecycle configuration when lifecycle_rules is False."""
        create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME, lifecycle_rules=False)
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::S3::Bucket",
            {"LifecycleConfiguration": assertions.Match.absent()},
        )

    def test_no_lifecycle_rule_when_unversioned(self, stack):
        """The noncurrent-version rule is skipped on an unversioned bucket."""
        create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME, versioned=False)
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::S3::Bucket",
            {
                "VersioningConfiguration": assertions.Match.absent(),
                "LifecycleConfiguration": assertions.Match.absent(),
            },
        )

    def test_origin_access_control(self, stack):
        """OAC signs every request with SigV4."""
        create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME)
        template = assertions.Template.from_stack(stack)

        template.resource_count_is("AWS::CloudFront::OriginAccessControl", 1)
        template.has_resource_properties(
            "AWS::CloudFront::OriginAccessControl",
            {
                "OriginAccessControlConfig": {
                    "Name": f"{BUCKET_NAME}-oac",
                    "OriginAccessControlOriginType": "s3",
                    "SigningBehavior": "always",
                    "SigningProtocol": "sigv4",
                }
            },
        )

    def test_outputs_are_exported(self, stack):
        """Bucket ARN and name are exported under the stack name."""
        create_static_website(stack, "StaticWebsite", bucket_name=BUCKET_NAME)
        template = assertions.Template.from_stack(stack)

        template.has_output("*", {"Export": {"Name": "TestStack-BucketArn"}})
        template.has_output("*", {"Export": {"Name": "TestStack-BucketName"}})


class TestCreateArtifactsBucket:
    """Tests for create_artifacts_bucket function."""

    def test_artifacts_expire_after_a_year(self):
        """Build artifacts bucket is private and expires objects."""
        stack = Stack(App(), "TestStack")
        bucket = create_artifacts_bucket(stack, "BuildArtifacts", "yasmade-s3-test-build-artifacts")
        template = assertions.Template.from_stack(stack)

        assert isinstance(bucket, s3.Bucket)
        template.has_resource_properties(
            "AWS::S3::Bucket",
            {
                "BucketName": "yasmade-s3-test-build-artifacts",
                "LifecycleConfiguration": {
                    "Rules": [{"Id": "ExpireArtifacts", "Status": "Enabled", "ExpirationInDays": 365}]
                },
            },
        )
