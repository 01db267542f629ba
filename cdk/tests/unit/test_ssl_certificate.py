"""Tests for the ssl_certificate module."""

import json

import pytest
from aws_cdk import App, Environment, Stack, assertions
from aws_cdk import aws_certificatemanager as acm
from aws_cdk import aws_route53 as route53

from yasmade_cdk.ssl_certificate import SslCertificate, create_ssl_certificate

DOMAIN = "dev.yasmade.net"


def _stack_with_zone(env=None):
    stack = Stack(App(), "TestStack", env=env)
    zone = route53.HostedZone(stack, "Zone", zone_name=DOMAIN)
    return stack, zone


class TestCreateSslCertificate:
    """Tests for create_ssl_certificate function."""

    @pytest.fixture
    def stack_and_zone(self):
        return _stack_with_zone()

    def test_returns_certificate(self, stack_and_zone):
        """Should return an SslCertificate wrapping an ACM certificate."""
        stack, zone = stack_and_zone
        result = create_ssl_certificate(stack, "SslCertificate", DOMAIN, zone, "dev")

        assert isinstance(result, SslCertificate)
        assert isinstance(result.certificate, acm.Certificate)
        assert result.region == "us-east-1"
        assert result.taggable == [result.certificate]

    def test_certificate_covers_domain_and_www(self, stack_and_zone):
        """Certificate includes www as a subject alternative name."""
        stack, zone = stack_and_zone
        create_ssl_certificate(stack, "SslCertificate", DOMAIN, zone, "dev")
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::CertificateManager::Certificate",
            {
                "DomainName": DOMAIN,
                "SubjectAlternativeNames": [f"www.{DOMAIN}"],
                "ValidationMethod": "DNS",
                "KeyAlgorithm": "RSA_2048",
            },
        )

    def test_certificate_name_tag(self, stack_and_zone):
        """Certificate is named from the environment and domain."""
        stack, zone = stack_and_zone
        create_ssl_certificate(stack, "SslCertificate", DOMAIN, zone, "dev")
        template = assertions.Template.from_stack(stack)

        template.has_resource_properties(
            "AWS::CertificateManager::Certificate",
            {
                "Tags": assertions.Match.array_with(
                    [{"Key": "Name", "Value": "yasmade-cert-dev-dev-yasmade-net"}]
                )
            },
        )

    def test_certificate_is_retained(self, stack_and_zone):
        """Certificate survives stack deletion."""
        stack, zone = stack_and_zone
        create_ssl_certificate(stack, "SslCertificate", DOMAIN, zone, "dev")
        template = assertions.Template.from_stack(stack)

        template.has_resource("AWS::CertificateManager::Certificate", {"DeletionPolicy": "Retain"})

    def test_certificate_arn_output(self, stack_and_zone):
        """Certificate ARN is exported."""
        stack, zone = stack_and_zone
        create_ssl_certificate(stack, "SslCertificate", DOMAIN, zone, "dev")
        template = assertions.Template.from_stack(stack)

        template.has_output("*", {"Export": {"Name": "TestStack-CertificateArn"}})

    def test_warns_when_stack_region_differs(self, capsys):
        """A stack outside us-east-1 logs a warning but still builds."""
        stack, zone = _stack_with_zone(env=Environment(account="123456789012", region="eu-west-1"))
        create_ssl_certificate(stack, "SslCertificate", DOMAIN, zone, "dev")

        warnings = [
            json.loads(line)
            for line in capsys.readouterr().err.splitlines()
            if line.startswith("{") and '"WARNING"' in line
        ]
        assert len(warnings) == 1
        assert warnings[0]["stack_region"] == "eu-west-1"
        assert warnings[0]["certificate_region"] == "us-east-1"

    def test_no_warning_for_env_agnostic_stack(self, stack_and_zone, capsys):
        """Stacks without a concrete region do not warn."""
        stack, zone = stack_and_zone
        create_ssl_certificate(stack, "SslCertificate", DOMAIN, zone, "dev")

        assert '"WARNING"' not in capsys.readouterr().err
