"""
AWS-specific constants used across all infrastructure.
"""

APP_NAME = "yasmade"

BASE_DOMAIN = "yasmade.net"

AWS_REGIONS: dict[str, str] = {
    # Primary region for most resources
    "PRIMARY": "us-east-1",
    # ACM certificates for CloudFront MUST be in us-east-1
    "CERTIFICATE": "us-east-1",
}

# CloudFront distribution settings
CLOUDFRONT_SETTINGS: dict = {
    "PRICE_CLASS": "PRICE_CLASS_100",  # US, Canada, Europe only
    "COMPRESS": True,
    # SPA rewrites are never cached
    "ERROR_CACHING_TTL_SECONDS": 0,
}

# S3 bucket settings
S3_SETTINGS: dict = {
    "VERSIONED": True,
    # Noncurrent versions move to Infrequent Access, then expire
    "TRANSITION_TO_IA_DAYS": 30,
    "NONCURRENT_EXPIRE_DAYS": 90,
    # Build artifacts are deleted after a year
    "EXPIRE_DAYS": 365,
    "CORS_MAX_AGE_SECONDS": 3600,
}

# Resource naming patterns
NAMING: dict = {
    "PREFIX": APP_NAME,
    "MAX_LENGTH": 63,
    "SEPARATOR": "-",
}

# Security headers for CloudFront responses
SECURITY_HEADERS: dict[str, str] = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    # Basic CSP for React apps
    "Content-Security-Policy": (
        "default-src 'self'; script-src 'self' 'unsafe-inline'; style-src 'self' 'unsafe-inline'"
    ),
}

# Paths with dedicated cache behaviors
STATIC_ASSETS_PATH = "/static/*"
SERVICE_WORKER_PATH = "/service-worker.js"
