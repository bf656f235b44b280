"""Writes the masked form of a credentials document back to the object store."""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from redaction import mask_credential

from .models import CredentialsFile
from .reconciler import ReconcileResult
from .stores import JSON_CONTENT_TYPE, ObjectStore

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. 2025-10-23T12:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ObjectRewriter:
    """
    Re-masks a document at rest when reconciliation saw plaintext.

    Args:
        object_store: Where the document lives.
        clock: Returns the lastUpdated stamp for rewritten documents.
    """

    def __init__(self, object_store: ObjectStore, clock: Optional[Callable[[], str]] = None):
        self._object_store = object_store
        self._clock = clock or utc_timestamp

    def rewrite(self, key: str, original: CredentialsFile, result: ReconcileResult) -> CredentialsFile:
        """
        Return the unmasked document to hand to the caller.

        If result.any_plaintext, every entry is masked (including ones that
        were already masked), stamped with a fresh lastUpdated and written to
        key. Otherwise nothing is written and original.last_updated is kept.
        """
        if not result.any_plaintext:
            return CredentialsFile(credentials=result.credentials, last_updated=original.last_updated)

        last_updated = self._clock()
        masked = CredentialsFile(
            credentials=tuple(mask_credential(c) for c in result.credentials),
            last_updated=last_updated,
        )
        self._object_store.put(key, masked.to_json(indent=2).encode("utf-8"), JSON_CONTENT_TYPE)
        logger.info(f"Rewrote {key} with {len(masked.credentials)} masked credential(s)")

        return CredentialsFile(credentials=result.credentials, last_updated=last_updated)
