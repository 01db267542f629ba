"""
Per-environment configuration for the static site.

Each environment is a frozen pydantic model validated once when the app
starts. Constructs receive the pieces they need as arguments and never
import these records directly.
"""

import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import APP_NAME, AWS_REGIONS, BASE_DOMAIN
from .errors import ConfigError, ErrorCode
from .helpers import get_account, get_site_domain
from .naming import create_bucket_name

REQUIRED_TAGS = ("Environment", "Project", "Owner")

# S3 bucket naming rules: lower case, digits, dots and dashes, 3-63 chars
BUCKET_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class DomainConfig(_Frozen):
    """Custom domain settings."""

    name: str = Field(min_length=1)
    # Must be us-east-1 for CloudFront
    certificate_region: str = AWS_REGIONS["CERTIFICATE"]
    create_hosted_zone: bool = True
    include_www: bool = True


class BucketConfig(_Frozen):
    """S3 bucket names (globally unique)."""

    static_website: str
    build_artifacts: str

    @field_validator("static_website", "build_artifacts")
    @classmethod
    def _valid_bucket_name(cls, value: str) -> str:
        if not BUCKET_NAME_PATTERN.match(value):
            raise ValueError(f"invalid S3 bucket name: {value!r}")
        return value


class ErrorConfiguration(_Frozen):
    """CloudFront error rewrite for SPA routing."""

    error_code: int = Field(ge=400, le=599)
    response_code: int = Field(ge=200, le=599)
    response_page_path: str

    @field_validator("response_page_path")
    @classmethod
    def _absolute_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("response_page_path must start with '/'")
        return value


class CloudFrontConfig(_Frozen):
    """CloudFront distribution settings."""

    enabled: bool = True
    comment: str
    default_root_object: str = "index.html"
    error_configurations: tuple[ErrorConfiguration, ...] = ()


class EnvironmentConfig(_Frozen):
    """Complete configuration for one deployment environment."""

    environment: str = Field(min_length=1)
    account: Optional[str] = None
    region: str = AWS_REGIONS["PRIMARY"]
    domain: DomainConfig
    buckets: BucketConfig
    cloudfront: CloudFrontConfig
    tags: dict[str, str]

    @field_validator("tags")
    @classmethod
    def _required_tags(cls, value: dict[str, str]) -> dict[str, str]:
        missing = [key for key in REQUIRED_TAGS if not value.get(key)]
        if missing:
            raise ValueError(f"missing required tags: {', '.join(missing)}")
        return value


def _spa_error_configurations() -> list[dict[str, Any]]:
    return [
        {"error_code": 404, "response_code": 200, "response_page_path": "/index.html"},
        {"error_code": 403, "response_code": 200, "response_page_path": "/index.html"},
    ]


def _dev_config() -> dict[str, Any]:
    return {
        "environment": "dev",
        "region": AWS_REGIONS["PRIMARY"],
        "domain": {
            "name": get_site_domain(BASE_DOMAIN, "dev"),
            # Dev owns its own delegated subdomain zone
            "create_hosted_zone": True,
        },
        "buckets": {
            "static_website": create_bucket_name("dev", "static-website"),
            "build_artifacts": create_bucket_name("dev", "build-artifacts"),
        },
        "cloudfront": {
            "enabled": True,
            "comment": "YasMade Development Website Distribution",
            "error_configurations": _spa_error_configurations(),
        },
        "tags": {"Environment": "dev", "Project": APP_NAME, "Owner": "elprince-dev"},
    }


def _prod_config() -> dict[str, Any]:
    return {
        "environment": "prod",
        "region": AWS_REGIONS["PRIMARY"],
        "domain": {
            "name": get_site_domain(BASE_DOMAIN, "prod"),
            # Apex zone is registered outside this stack
            "create_hosted_zone": False,
        },
        "buckets": {
            "static_website": create_bucket_name("prod", "static-website"),
            "build_artifacts": create_bucket_name("prod", "build-artifacts"),
        },
        "cloudfront": {
            "enabled": True,
            "comment": "YasMade Production Website Distribution",
            "error_configurations": _spa_error_configurations(),
        },
        "tags": {"Environment": "prod", "Project": APP_NAME, "Owner": "elprince-dev"},
    }


ENVIRONMENTS = {
    "dev": _dev_config,
    "prod": _prod_config,
}


def _merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_environment_config(
    env_name: str, overrides: Optional[dict[str, Any]] = None
) -> EnvironmentConfig:
    """Build and validate the configuration for an environment.

    Args:
        env_name: Environment name ('dev' or 'prod')
        overrides: Nested values layered over the environment defaults
                   (e.g. {"domain": {"create_hosted_zone": False}})

    Returns:
        Validated, immutable EnvironmentConfig

    Raises:
        ConfigError: If the environment is unknown or the record is invalid
    """
    factory = ENVIRONMENTS.get(env_name)
    if factory is None:
        raise ConfigError(
            f"Unknown environment: {env_name}",
            {"environment": env_name, "known": sorted(ENVIRONMENTS)},
            error_code=ErrorCode.UNKNOWN_ENVIRONMENT,
        )

    raw = factory()
    raw["account"] = get_account()
    if overrides:
        raw = _merge(raw, overrides)

    try:
        return EnvironmentConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid configuration for environment {env_name}",
            {
                "environment": env_name,
                "errors": [
                    {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                    for err in e.errors()
                ],
            },
        ) from e
