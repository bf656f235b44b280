"""
Credentials Module - Reconciles credentials documents with the secret store

A credentials document in S3 lists {clientId, apiKey} entries. Plaintext keys
are moved into SSM Parameter Store and masked at rest; masked keys are
resolved back to their canonical value for authorized readers.

Architecture:
    - models: Credential / CredentialsFile / TransformRequest and parsers
    - stores: SecretStore, ObjectStore and ResponseWriter adapters
    - reconciler: per-entry fetch-or-store against the secret store
    - rewriter: masks the document at rest when plaintext was seen
    - orchestrator: resolve -> fetch -> reconcile/rewrite -> respond
"""

from .config import Settings, load_settings
from .errors import (
    ConfigurationError,
    CredentialError,
    NotFoundError,
    StoreUnavailable,
    ValidationError,
)
from .models import Credential, CredentialsFile, TransformRequest
from .orchestrator import TransformOrchestrator
from .reconciler import CredentialReconciler, ReconcileResult
from .rewriter import ObjectRewriter

__all__ = [
    "ConfigurationError",
    "Credential",
    "CredentialError",
    "CredentialReconciler",
    "CredentialsFile",
    "NotFoundError",
    "ObjectRewriter",
    "ReconcileResult",
    "Settings",
    "StoreUnavailable",
    "TransformOrchestrator",
    "TransformRequest",
    "ValidationError",
    "load_settings",
]
