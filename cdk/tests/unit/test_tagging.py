"""Tests for the tagging module."""

from aws_cdk import App, Stack, assertions
from aws_cdk import aws_s3 as s3

from yasmade_cdk.tagging import apply_tags


class TestApplyTags:
    """Tests for apply_tags function."""

    def test_tags_every_resource(self):
        """All tags land on all given resources."""
        stack = Stack(App(), "TestStack")
        first = s3.Bucket(stack, "First")
        second = s3.Bucket(stack, "Second")

        count = apply_tags([first, second], {"Environment": "dev", "Project": "yasmade"})
        template = assertions.Template.from_stack(stack)

        assert count == 2
        buckets = template.find_resources("AWS::S3::Bucket")
        for bucket in buckets.values():
            tags = {t["Key"]: t["Value"] for t in bucket["Properties"]["Tags"]}
            assert tags == {"Environment": "dev", "Project": "yasmade"}

    def test_untouched_resources_have_no_tags(self):
        """Only the listed resources are tagged."""
        stack = Stack(App(), "TestStack")
        tagged = s3.Bucket(stack, "Tagged")
        s3.Bucket(stack, "Untagged")

        apply_tags([tagged], {"Owner": "elprince-dev"})
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::S3::Bucket",
            {"Tags": [{"Key": "Owner", "Value": "elprince-dev"}]},
        )
        template.has_resource_properties("AWS::S3::Bucket", {"Tags": assertions.Match.absent()})

    def test_empty_inputs(self):
        """No resources means nothing is tagged."""
        assert apply_tags([], {"Environment": "dev"}) == 0
