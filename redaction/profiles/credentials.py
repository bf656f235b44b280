"""
Credential Scrubbing Profile - Default log scrubbing rules.

Covers the secret shapes this service handles, so that a plaintext API key
read from a credentials document or the secret store never lands in a log
line:
    - "apiKey" fields in JSON payloads (masked values are left intact)
    - Stripe-style keys (sk-..., sk_live_..., sk_test_...)
    - AWS Access Key IDs (AKIA...)
    - Bearer tokens
"""

import re

from ..base_profile import ComplianceProfile, RedactionPattern
from ..codec import MASK_MARKER


class CredentialProfile(ComplianceProfile):
    """Default profile loaded by the RedactionEngine."""

    @property
    def name(self) -> str:
        return "credentials"

    @property
    def description(self) -> str:
        return "API keys, bearer tokens and AWS credentials"

    def get_patterns(self) -> list[RedactionPattern]:
        marker = re.escape(MASK_MARKER)
        return [
            # JSON field, both quoted and escaped-quoted (SSM values in
            # botocore error messages arrive with \" quotes)
            RedactionPattern(
                name="api_key_field",
                pattern=re.compile(
                    r'(\\?"apiKey\\?"\s*:\s*\\?")(?!' + marker + r')([^"\\]+)(\\?")'
                ),
                replacement=r"\1{{API_KEY}}\3",
                description="apiKey value in a JSON document"
            ),

            RedactionPattern(
                name="secret_key",
                pattern=re.compile(
                    r'\bsk[-_](?:live_|test_)?[A-Za-z0-9_\-]{6,}'
                ),
                replacement="{{SECRET_KEY}}",
                description="sk- / sk_live_ / sk_test_ style API key"
            ),

            RedactionPattern(
                name="aws_access_key",
                pattern=re.compile(
                    r'\b(AKIA|ABIA|ACCA|ASIA)[A-Z0-9]{16}\b'
                ),
                replacement="{{AWS_ACCESS_KEY}}",
                description="AWS Access Key ID"
            ),

            RedactionPattern(
                name="bearer_token",
                pattern=re.compile(
                    r'(?i)\bBearer\s+[A-Za-z0-9_\-.=]+'
                ),
                replacement="Bearer {{TOKEN}}",
                description="Bearer token in an Authorization header"
            ),
        ]


DEFAULT_PROFILE = CredentialProfile()
