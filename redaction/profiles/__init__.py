"""
Scrubbing Profiles Package

Profiles describe secret shapes the RedactionEngine removes from log output.

Available profiles:
    - credentials: API keys, bearer tokens, AWS access key ids (default)

To add a new profile, subclass ComplianceProfile, implement get_patterns(),
and load it with engine.load_profile().
"""

from .credentials import CredentialProfile, DEFAULT_PROFILE

__all__ = ["CredentialProfile", "DEFAULT_PROFILE"]
