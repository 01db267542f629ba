"""
Shared helper utilities for CDK stack construction.

This module provides:
- Region abbreviation mapping for stack naming
- Environment and context lookups
- Domain name derivation per environment
"""

import os
from pathlib import Path
from typing import Optional

from constructs import Construct

# Region abbreviation mapping for stack naming
# Pattern: {app}-{region_abbrev}-{env} e.g. yasmade-ue1-dev
REGION_ABBREVIATIONS: dict[str, str] = {
    "us-east-1": "ue1",
    "us-east-2": "ue2",
    "us-west-1": "uw1",
    "us-west-2": "uw2",
    "eu-west-1": "ew1",
    "eu-west-2": "ew2",
    "eu-west-3": "ew3",
    "eu-central-1": "ec1",
    "eu-north-1": "en1",
    "ap-northeast-1": "ane1",  # Tokyo
    "ap-southeast-1": "ase1",  # Singapore
    "ap-southeast-2": "ase2",  # Sydney
    "ap-south-1": "as1",  # Mumbai
    "ca-central-1": "cc1",  # Canada
}


def get_region_abbrev(region: str) -> str:
    """Get the region abbreviation for stack naming.

    Args:
        region: AWS region code

    Returns:
        Region abbreviation (e.g., 'ue1' for 'us-east-1')
    """
    return REGION_ABBREVIATIONS.get(region, region[:3])


def get_account() -> Optional[str]:
    """Get the AWS account ID from environment variables, if any."""
    return os.getenv("CDK_DEFAULT_ACCOUNT") or os.getenv("AWS_ACCOUNT_ID") or None


def get_context_bool(construct: Construct, key: str, default: bool = False) -> bool:
    """Read a boolean CDK context value.

    Context passed with `-c key=value` arrives as a string, so "false"
    (any case) is treated as False and any other string as True.

    Args:
        construct: Construct whose node holds the context (usually the App)
        key: Context key
        default: Value returned when the key is not set

    Returns:
        Parsed boolean
    """
    value = construct.node.try_get_context(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).lower() != "false"


def get_site_domain(base_domain: str, env_name: str) -> str:
    """Get the site domain for the given environment.

    Args:
        base_domain: Base domain (e.g., 'yasmade.net')
        env_name: Environment name (e.g., 'dev', 'prod')

    Returns:
        The apex domain for prod, '<env>.<base_domain>' otherwise
    """
    if env_name == "prod":
        return base_domain
    return f"{env_name}.{base_domain}"


def load_dotenv(env_file: Path) -> None:
    """Load KEY=VALUE lines from a .env file into os.environ.

    Variables already present in the environment are left untouched so
    the shell can always override the file.
    """
    if not env_file.exists():
        return

    with open(env_file) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                if key.strip() and not os.getenv(key.strip()):
                    os.environ[key.strip()] = value.strip()
