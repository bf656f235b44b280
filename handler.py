"""
Credential Redactor - S3 Object Lambda handler

Serves GetObject requests made through an S3 Object Lambda access point in
front of the credentials bucket. The caller receives the credentials document
with every API key unmasked; the document at rest is rewritten so it only
ever holds masked keys, with the full keys kept in SSM Parameter Store.

Configuration is read from the environment (and a .env file, if present) on
the first invocation and reused for the lifetime of the container.
"""

import logging
import os
from typing import Any, Optional

from dotenv import load_dotenv

from credentials import TransformOrchestrator, load_settings
from credentials.aws import build_orchestrator
from credentials.log import configure_logging
from credentials.models import parse_transform_request

logger = logging.getLogger(__name__)

_orchestrator: Optional[TransformOrchestrator] = None


def get_orchestrator() -> TransformOrchestrator:
    """Build the orchestrator once per container."""
    global _orchestrator
    if _orchestrator is None:
        load_dotenv()
        settings = load_settings(os.environ)
        configure_logging(settings.log_level)
        logger.info(f"Initialised for bucket {settings.bucket_name} ({settings.environment})")
        _orchestrator = build_orchestrator(settings)
    return _orchestrator


def reset_orchestrator() -> None:
    """Drop the cached orchestrator so the next invocation rebuilds it."""
    global _orchestrator
    _orchestrator = None


def handler(event: dict[str, Any], context: Any = None) -> None:
    """
    Lambda entry point.

    Raises:
        ValidationError: if the event envelope is malformed
        CredentialError: from the failing stage; the response is not written
    """
    request = parse_transform_request(event).unwrap("S3 Object Lambda event")
    get_orchestrator().handle(request)


if __name__ == "__main__":
    import json
    import sys

    # Replay a captured event: python handler.py event.json
    with open(sys.argv[1]) as f:
        handler(json.load(f))
