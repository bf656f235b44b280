"""
Base Scrubbing Profile - Abstract base class for log scrubbing rules.

Extend this class to describe additional secret shapes that must never
reach log output. For example:
    - a provider-specific token format
    - internal service credentials with a known prefix

Each profile defines:
    - name: Unique identifier for the profile
    - description: Human-readable description
    - get_patterns(): Returns regex patterns for detection
    - get_scrubadub_detectors(): Optional custom scrubadub detectors
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Pattern


@dataclass
class RedactionPattern:
    """A single scrubbing pattern definition."""
    name: str  # e.g., "api_key_field", "bearer_token"
    pattern: Pattern[str]  # Compiled regex pattern
    replacement: str  # e.g., r"\1{{API_KEY}}\3"
    description: str = ""


class ComplianceProfile(ABC):
    """
    Abstract base class for scrubbing profiles.

    Subclass this to teach the RedactionEngine about new secret formats
    without modifying the engine itself.

    Example:
        class PartnerTokenProfile(ComplianceProfile):
            @property
            def name(self) -> str:
                return "partner_tokens"

            @property
            def description(self) -> str:
                return "Partner API tokens (ptk_...)"

            def get_patterns(self) -> list[RedactionPattern]:
                return [
                    RedactionPattern(
                        name="partner_token",
                        pattern=re.compile(r'\\bptk_[A-Za-z0-9]{20,}\\b'),
                        replacement="{{PARTNER_TOKEN}}",
                    ),
                ]
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this profile (e.g., 'credentials')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def get_patterns(self) -> list[RedactionPattern]:
        """
        Return the RedactionPattern objects to apply.

        These patterns are applied AFTER scrubadub's built-in detectors.
        """
        pass

    def get_scrubadub_detectors(self) -> list:
        """Optional custom scrubadub Detector classes. None by default."""
        return []

    def __repr__(self) -> str:
        return f"<ComplianceProfile: {self.name}>"
