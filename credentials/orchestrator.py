"""
Request orchestration for the credentials transform.

Stages, each attempted once:
    1. resolve    object key from the caller's request URL
    2. fetch      read and parse the credentials document
    3. reconcile  against the secret store, then rewrite masked if needed
    4. respond    deliver the unmasked document to the caller

A failure at any stage aborts the request and no response is delivered.
"""

import logging
from urllib.parse import urlparse

from .errors import CredentialError, ValidationError
from .models import CredentialsFile, TransformRequest, parse_credentials_file
from .reconciler import CredentialReconciler
from .rewriter import ObjectRewriter
from .stores import JSON_CONTENT_TYPE, ObjectStore, ResponseWriter

logger = logging.getLogger(__name__)


def resolve_object_key(url: str) -> str:
    """
    Object key addressed by a request URL: its path without the leading slash.

    The key is kept percent-encoded exactly as it appears in the URL.

    Raises:
        ValidationError: if the URL is not absolute or has no path.
    """
    parsed = urlparse(url)
    key = parsed.path[1:] if parsed.path.startswith("/") else ""
    if not (parsed.scheme and parsed.netloc and key):
        raise ValidationError("request URL", [f"unable to parse object key from URL: {url}"])
    return key


class TransformOrchestrator:
    """Drives one transform request through resolve, fetch, reconcile and respond."""

    def __init__(
        self,
        object_store: ObjectStore,
        reconciler: CredentialReconciler,
        rewriter: ObjectRewriter,
        response_writer: ResponseWriter,
    ):
        self._object_store = object_store
        self._reconciler = reconciler
        self._rewriter = rewriter
        self._response_writer = response_writer

    def fetch(self, key: str) -> CredentialsFile:
        raw = self._object_store.get(key)
        return parse_credentials_file(raw).unwrap(f"credentials document {key}")

    def transform(self, key: str) -> CredentialsFile:
        """Run stages 2 and 3 for key and return the unmasked document."""
        original = self.fetch(key)
        logger.debug(f"Fetched {key} with {len(original.credentials)} credential(s)")

        result = self._reconciler.reconcile(original.credentials)
        return self._rewriter.rewrite(key, original, result)

    def handle(self, request: TransformRequest) -> CredentialsFile:
        """
        Process a transform request end to end.

        Returns:
            The unmasked document that was delivered.

        Raises:
            CredentialError: from whichever stage failed, after logging it.
        """
        try:
            key = resolve_object_key(request.url)
            document = self.transform(key)
            self._response_writer.deliver(
                request.output_route,
                request.output_token,
                document.to_json().encode("utf-8"),
                JSON_CONTENT_TYPE,
            )
        except CredentialError as e:
            logger.error(f"Error processing request {request.request_id}: {e}")
            raise

        logger.info(f"Successfully processed and redacted {key}")
        return document
