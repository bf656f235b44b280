"""
RedactionEngine - Scrubs secrets out of log messages.

This engine orchestrates:
1. Scrubadub's built-in PII detection (emails, URLs, etc.)
2. Patterns from the loaded scrubbing profiles (API keys, tokens, ...)
3. Tracking of whether any redaction occurred

ScrubbingFilter wires the engine into the logging module so every record is
scrubbed before a handler formats it.
"""

import logging
from typing import Optional

import scrubadub

from .base_profile import ComplianceProfile
from .profiles import DEFAULT_PROFILE

logger = logging.getLogger(__name__)


class RedactionEngine:
    """
    Engine for scrubbing secrets from text.

    Example:
        engine = RedactionEngine()
        safe_text, was_redacted = engine.redact('{"apiKey": "sk_live_abc123xyz"}')
        # safe_text: '{"apiKey": "{{API_KEY}}"}'
        # was_redacted: True

    Thread Safety:
        redact() is safe to call from the reconciliation worker threads.
        load_profile() should only be called during initialization.
    """

    def __init__(self, load_default_profile: bool = True):
        self._profiles: dict[str, ComplianceProfile] = {}
        self._scrubber = scrubadub.Scrubber()

        if load_default_profile:
            self.load_profile(DEFAULT_PROFILE)

    def load_profile(self, profile: ComplianceProfile) -> None:
        """Load a profile, replacing any profile with the same name."""
        self._profiles[profile.name] = profile
        logger.debug(f"Loaded scrubbing profile: {profile.name}")

        for detector in profile.get_scrubadub_detectors():
            self._scrubber.add_detector(detector)

    def unload_profile(self, profile_name: str) -> bool:
        """
        Remove a profile from the engine.

        Returns:
            True if profile was removed, False if not found.
        """
        if profile_name in self._profiles:
            del self._profiles[profile_name]
            logger.debug(f"Unloaded scrubbing profile: {profile_name}")
            return True
        return False

    def list_profiles(self) -> list[str]:
        return list(self._profiles.keys())

    def redact(self, text: str) -> tuple[str, bool]:
        """
        Scrub secrets from the given text.

        Args:
            text: The input text to sanitize.

        Returns:
            A tuple of (redacted_text, was_redacted).
        """
        if not text:
            return text, False

        original_text = text

        # Profile patterns run first so scrubadub's URL/email detectors cannot
        # split a JSON apiKey field before it is recognised
        for profile in self._profiles.values():
            for pattern in profile.get_patterns():
                try:
                    text = pattern.pattern.sub(pattern.replacement, text)
                except Exception as e:
                    logger.warning(f"Pattern '{pattern.name}' error: {e}")

        try:
            text = self._scrubber.clean(text)
        except Exception as e:
            logger.warning(f"Scrubadub error (continuing with regex output): {e}")

        return text, text != original_text


class ScrubbingFilter(logging.Filter):
    """
    Logging filter that scrubs every record through a RedactionEngine.

    The formatted message replaces the record's msg/args so handlers further
    down the chain never see the original arguments. The filter never raises:
    a record whose arguments do not format is passed through untouched so the
    handler reports it through handleError.
    """

    def __init__(self, engine: Optional[RedactionEngine] = None):
        super().__init__()
        self._engine = engine or get_default_engine()

    def filter(self, record: logging.LogRecord) -> bool:
        # The engine's own warnings must not be scrubbed again
        if record.name == __name__:
            return True

        try:
            message = record.getMessage()
        except Exception:
            return True

        scrubbed, was_redacted = self._engine.redact(message)
        if was_redacted:
            record.msg = scrubbed
            record.args = ()
        return True


_default_engine: Optional[RedactionEngine] = None


def get_default_engine() -> RedactionEngine:
    """Get the process-wide RedactionEngine instance."""
    global _default_engine
    if _default_engine is None:
        _default_engine = RedactionEngine()
    return _default_engine
