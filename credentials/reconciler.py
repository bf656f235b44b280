"""
Credential reconciliation against the secret store.

For every entry of a credentials document:

    masked     -> read the canonical credential from the secret store
    plaintext  -> write the credential to the secret store (overwrite)

The result holds the fully resolved (unmasked) entries in document order,
plus whether any entry was plaintext, which tells the rewriter that the
backing document still holds secrets and must be re-masked.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from redaction import is_masked

from .errors import ValidationError
from .models import Credential, parse_credential
from .stores import SecretStore, secret_key_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    credentials: tuple[Credential, ...]
    any_plaintext: bool


class CredentialReconciler:
    """
    Resolves credentials against a SecretStore.

    Per-entry store calls are independent and run on a thread pool of at most
    max_workers threads. Results keep input order. The first failing entry
    aborts the whole batch; entries already written stay written.

    Example:
        reconciler = CredentialReconciler(ParameterStoreSecretStore(ssm))
        result = reconciler.reconcile(document.credentials)
        result.any_plaintext  # True if the document needs rewriting
    """

    def __init__(self, secret_store: SecretStore, max_workers: int = 8):
        self._secret_store = secret_store
        self._max_workers = max_workers

    def resolve(self, credential: Credential) -> Credential:
        """Return the unmasked form of one entry, storing it if plaintext."""
        key = secret_key_for(credential.client_id)

        if not is_masked(credential.api_key):
            self._secret_store.put(key, credential.to_json(), overwrite=True)
            logger.debug(f"Stored plaintext credential for {credential.client_id}")
            return credential

        stored = parse_credential(self._secret_store.get(key)).unwrap(f"secret store record {key}")
        # A masked canonical value could never be unmasked again
        if is_masked(stored.api_key):
            raise ValidationError(f"secret store record {key}", ["apiKey is masked"])
        logger.debug(f"Resolved masked credential for {credential.client_id}")
        return stored

    def reconcile(self, credentials: Sequence[Credential]) -> ReconcileResult:
        if not credentials:
            return ReconcileResult(credentials=(), any_plaintext=False)

        plaintext_count = sum(1 for c in credentials if not is_masked(c.api_key))

        workers = min(self._max_workers, len(credentials))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="reconcile") as pool:
            # map() yields in submission order and re-raises the first failure
            resolved = tuple(pool.map(self.resolve, credentials))

        logger.info(f"Reconciled {len(resolved)} credential(s), {plaintext_count} plaintext")
        return ReconcileResult(credentials=resolved, any_plaintext=plaintext_count > 0)
