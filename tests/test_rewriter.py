"""Tests for ObjectRewriter."""

import json
import re

from credentials.models import Credential, CredentialsFile
from credentials.reconciler import ReconcileResult
from credentials.rewriter import ObjectRewriter, utc_timestamp

ORIGINAL = CredentialsFile(
    credentials=(Credential("client-1", "****3xyz"), Credential("client-2", "sk_test_def456uvw")),
    last_updated="2025-10-23T12:00:00Z",
)
RESOLVED = (Credential("client-1", "sk_live_abc123xyz"), Credential("client-2", "sk_test_def456uvw"))


def fixed_clock():
    return "2026-01-01T00:00:00.000Z"


class TestObjectRewriter:

    def test_rewrites_every_entry_masked(self, object_store):
        """Every entry is masked at rest and the document is restamped."""
        rewriter = ObjectRewriter(object_store, clock=fixed_clock)

        document = rewriter.rewrite("test-key.json", ORIGINAL, ReconcileResult(RESOLVED, any_plaintext=True))

        assert len(object_store.puts) == 1
        key, body, content_type = object_store.puts[0]
        assert key == "test-key.json"
        assert content_type == "application/json"
        assert json.loads(body) == {
            "credentials": [
                {"clientId": "client-1", "apiKey": "****3xyz"},
                {"clientId": "client-2", "apiKey": "****6uvw"},
            ],
            "lastUpdated": "2026-01-01T00:00:00.000Z",
        }
        assert b"\n  " in body

        assert document.credentials == RESOLVED
        assert document.last_updated == "2026-01-01T00:00:00.000Z"

    def test_no_write_without_plaintext(self, object_store):
        """Without plaintext nothing is written and lastUpdated is kept."""
        rewriter = ObjectRewriter(object_store, clock=fixed_clock)

        document = rewriter.rewrite("test-key.json", ORIGINAL, ReconcileResult(RESOLVED, any_plaintext=False))

        assert object_store.puts == []
        assert document.last_updated == "2025-10-23T12:00:00Z"
        assert document.credentials == RESOLVED

    def test_default_clock_format(self):
        """Timestamps are UTC ISO-8601 with milliseconds."""
        assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())
