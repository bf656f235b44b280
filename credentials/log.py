"""Logging setup shared by the Lambda handler and the operator server."""

import logging
import sys
from typing import Optional

from redaction import RedactionEngine, ScrubbingFilter

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", engine: Optional[RedactionEngine] = None) -> logging.Handler:
    """
    Install a single scrubbed stream handler on the root logger.

    Any handlers already on the root logger (the Lambda runtime installs one)
    are replaced so each record is written exactly once. Logs go to stderr,
    leaving stdout free for the MCP stdio transport.
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(ScrubbingFilter(engine))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)

    # botocore logs request bodies at DEBUG
    logging.getLogger("botocore").setLevel(max(root.level, logging.INFO))
    return handler
