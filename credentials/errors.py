"""Exceptions raised by the credential redactor.

Exception Hierarchy:
    CredentialError (base)
    ├── ValidationError (malformed request, document or stored record)
    ├── NotFoundError (missing document or secret-store record)
    ├── StoreUnavailable (secret store / object store failure)
    └── ConfigurationError (invalid process configuration)

Adapters translate botocore exceptions into this hierarchy, so the reconciler
and orchestrator only ever see CredentialError subclasses.
"""

from typing import Optional


class CredentialError(Exception):
    """Base exception for all credential redactor errors."""

    pass


class ValidationError(CredentialError):
    """Raised when a request, document or stored record fails validation.

    Attributes:
        subject: What was being validated (e.g. "credentials document")
        problems: Individual validation failures, one per offending field
    """

    def __init__(self, subject: str, problems: list[str]) -> None:
        self.subject = subject
        self.problems = list(problems)
        super().__init__(f"Invalid {subject}: {'; '.join(self.problems)}")


class NotFoundError(CredentialError):
    """Raised when a key has no value in the store that was asked for it.

    For a masked credential entry this signals that the document and the
    secret store disagree; it is not retried.

    Attributes:
        store: Name of the store that was queried ("ssm", "s3")
        key: The missing parameter name or object key
    """

    def __init__(self, store: str, key: str) -> None:
        self.store = store
        self.key = key
        super().__init__(f"'{key}' not found in {store}")


class StoreUnavailable(CredentialError):
    """Raised when a store call fails for any reason other than absence.

    Attributes:
        store: Name of the store that failed
        code: AWS error code, or the botocore exception name
        details: Error message from the store
    """

    def __init__(self, store: str, code: str, details: str) -> None:
        self.store = store
        self.code = code
        self.details = details
        super().__init__(f"{store} error ({code}): {details}")


class ConfigurationError(CredentialError):
    """Raised at process entry when a configuration variable is invalid."""

    def __init__(self, variable: str, reason: str, value: Optional[str] = None) -> None:
        self.variable = variable
        self.reason = reason
        message = f"{variable} {reason}"
        if value is not None:
            message += f" (got {value!r})"
        super().__init__(message)
