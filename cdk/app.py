#!/usr/bin/env python3
import os
import sys
from pathlib import Path

import aws_cdk as cdk

from yasmade_cdk.config import load_environment_config
from yasmade_cdk.constants import APP_NAME
from yasmade_cdk.errors import InfraError, handle_error
from yasmade_cdk.helpers import get_context_bool, get_region_abbrev, load_dotenv
from yasmade_cdk.logging import StructuredLogger
from yasmade_cdk.static_site_stack import StaticSiteStack

logger = StructuredLogger("yasmade_cdk.app")

# Load environment variables from .env file if it exists
load_dotenv(Path(__file__).parent / ".env")

app = cdk.App()

# Get environment from context or environment variable (dev/prod)
env_name = app.node.try_get_context("environment") or os.getenv("ENVIRONMENT", "dev")

# Context flags override the per-environment defaults
domain_overrides = {}
if app.node.try_get_context("create_hosted_zone") is not None:
    domain_overrides["create_hosted_zone"] = get_context_bool(app, "create_hosted_zone")
if app.node.try_get_context("include_www") is not None:
    domain_overrides["include_www"] = get_context_bool(app, "include_www")

try:
    config = load_environment_config(
        env_name,
        overrides={"domain": domain_overrides} if domain_overrides else None,
    )

    region_abbrev = get_region_abbrev(config.region)

    # Environment-specific stack name with region: yasmade-{region}-{env}
    stack_name = f"{APP_NAME}-{region_abbrev}-{env_name}"

    StaticSiteStack(
        app,
        f"YasMadeStaticSite-{region_abbrev}-{env_name}",
        config=config,
        stack_name=stack_name,
        env=cdk.Environment(account=config.account, region=config.region),
        description=f"YasMade - Static Website ({region_abbrev}-{env_name})",
    )
except InfraError as e:
    logger.error("Synthesis aborted", error=handle_error(e))
    sys.exit(1)

app.synth()
