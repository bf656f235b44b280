"""
Process configuration.

Settings are parsed once at process entry (handler.py, server.py) from an
explicit mapping, normally os.environ after load_dotenv(), and then passed to
the components that need them.

Environment variables:
    ENVIRONMENT            development | production (required)
    BUCKET_NAME            bucket holding the credentials documents (required)
    AWS_REGION             region for boto3 clients (default: us-east-1)
    LOG_LEVEL              root log level (default: INFO)
    MAX_WORKERS            concurrent secret-store calls per request (default: 8)
    SECRET_PARAMETER_TYPE  String | SecureString (default: String)
"""

import logging
from dataclasses import dataclass
from typing import Mapping

from .errors import ConfigurationError

ENVIRONMENTS = ("development", "production")
PARAMETER_TYPES = ("String", "SecureString")

DEFAULT_REGION = "us-east-1"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class Settings:
    environment: str
    bucket_name: str
    region: str = DEFAULT_REGION
    log_level: str = DEFAULT_LOG_LEVEL
    max_workers: int = DEFAULT_MAX_WORKERS
    parameter_type: str = "String"


def load_settings(environ: Mapping[str, str]) -> Settings:
    """
    Build Settings from an environment mapping.

    Raises:
        ConfigurationError: naming the first invalid variable.
    """
    environment = environ.get("ENVIRONMENT", "")
    if environment not in ENVIRONMENTS:
        raise ConfigurationError(
            "ENVIRONMENT", f"must be one of {', '.join(ENVIRONMENTS)}", environment
        )

    bucket_name = environ.get("BUCKET_NAME", "").strip()
    if not bucket_name:
        raise ConfigurationError("BUCKET_NAME", "is required")

    log_level = environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigurationError("LOG_LEVEL", "is not a logging level", log_level)

    raw_workers = environ.get("MAX_WORKERS", str(DEFAULT_MAX_WORKERS))
    try:
        max_workers = int(raw_workers)
    except ValueError:
        raise ConfigurationError("MAX_WORKERS", "must be an integer", raw_workers) from None
    if max_workers < 1:
        raise ConfigurationError("MAX_WORKERS", "must be at least 1", raw_workers)

    parameter_type = environ.get("SECRET_PARAMETER_TYPE", "String")
    if parameter_type not in PARAMETER_TYPES:
        raise ConfigurationError(
            "SECRET_PARAMETER_TYPE", f"must be one of {', '.join(PARAMETER_TYPES)}", parameter_type
        )

    return Settings(
        environment=environment,
        bucket_name=bucket_name,
        region=environ.get("AWS_REGION") or DEFAULT_REGION,
        log_level=log_level,
        max_workers=max_workers,
        parameter_type=parameter_type,
    )
