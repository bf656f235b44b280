"""
Masking codec for credential secrets.

A masked value is the fixed marker followed by the last few characters of the
real secret, e.g. "sk_live_abc123xyz" -> "****3xyz". Masked values are what
callers see at rest; the canonical secret lives only in the secret store.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from credentials.models import Credential

MASK_MARKER = "****"
VISIBLE_SUFFIX_LENGTH = 4


def mask(secret: str) -> str:
    """
    Mask a secret, keeping only its trailing characters visible.

    Secrets shorter than the visible suffix are revealed in full after the
    marker ("ab" -> "****ab").

    Example:
        mask("sk-abc123xyz")  # "****3xyz"
    """
    return MASK_MARKER + secret[-VISIBLE_SUFFIX_LENGTH:]


def is_masked(value: str) -> bool:
    """
    Return True if the value carries the mask marker.

    This is a prefix check only: a plaintext secret that happens to start
    with the marker is indistinguishable from a masked one.
    """
    return value.startswith(MASK_MARKER)


def mask_credential(credential: "Credential") -> "Credential":
    """Return a copy of the credential with its API key masked."""
    return replace(credential, api_key=mask(credential.api_key))
