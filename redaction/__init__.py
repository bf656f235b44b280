"""
Redaction Module - Secret masking and log scrubbing for the credential redactor

Architecture:
    - codec: mask()/is_masked(), the at-rest representation of API keys
    - RedactionEngine: scrubs secrets out of log messages using profiles
    - ScrubbingFilter: logging.Filter wrapper around the engine
    - profiles/: Directory containing scrubbing profile implementations

Example:
    from redaction import mask, is_masked

    masked = mask("sk-abc123xyz")   # "****3xyz"
    is_masked(masked)               # True
"""

from .base_profile import ComplianceProfile
from .codec import MASK_MARKER, is_masked, mask, mask_credential
from .engine import RedactionEngine, ScrubbingFilter

__all__ = [
    "MASK_MARKER",
    "ComplianceProfile",
    "RedactionEngine",
    "ScrubbingFilter",
    "is_masked",
    "mask",
    "mask_credential",
]
