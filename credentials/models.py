"""
Data model and parsers for credentials documents and transform requests.

Parsing never raises: each parse_* function returns a ParseResult that is
either ok (holding the parsed value) or failed (holding the list of
problems). Callers that want an exception call ParseResult.unwrap().

Wire format of a credentials document:

    {"credentials": [{"clientId": "...", "apiKey": "..."}, ...],
     "lastUpdated": "2025-10-23T12:00:00Z"}
"""

import json
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, Optional, TypeVar, Union

from .errors import ValidationError

T = TypeVar("T")

GET_OBJECT_CONTEXT_FIELDS = ("inputS3Url", "outputRoute", "outputToken")
CONFIGURATION_FIELDS = ("accessPointArn", "supportingAccessPointArn", "payload")
USER_IDENTITY_FIELDS = ("type", "principalId", "arn", "accountId", "accessKeyId")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Tagged result of a parse: a value, or the problems that prevented one."""
    value: Optional[T] = None
    problems: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.problems

    def unwrap(self, subject: str) -> T:
        """Return the parsed value, or raise ValidationError naming the subject."""
        if not self.ok:
            raise ValidationError(subject, list(self.problems))
        return self.value

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, problems: list[str]) -> "ParseResult[T]":
        return cls(problems=tuple(problems))


@dataclass(frozen=True)
class Credential:
    """A single credentials document entry. api_key is plaintext or masked."""
    client_id: str
    api_key: str

    def to_dict(self) -> dict[str, str]:
        return {"clientId": self.client_id, "apiKey": self.api_key}

    def to_json(self) -> str:
        """Compact JSON, the format stored as the secret-store record value."""
        return json.dumps(self.to_dict(), separators=(",", ":"))


@dataclass(frozen=True)
class CredentialsFile:
    """A credentials document. Entry order is significant."""
    credentials: tuple[Credential, ...]
    last_updated: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "credentials": [credential.to_dict() for credential in self.credentials],
            "lastUpdated": self.last_updated,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        """
        Serialize the document.

        Compact by default (response bodies); pass indent=2 for the
        pretty-printed form written back to the object store.
        """
        if indent is None:
            return json.dumps(self.to_dict(), separators=(",", ":"))
        return json.dumps(self.to_dict(), indent=indent)


@dataclass(frozen=True)
class TransformRequest:
    """The parts of an S3 Object Lambda event the orchestrator relies on."""
    request_id: str
    input_s3_url: str
    output_route: str
    output_token: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    configuration: dict[str, str] = field(default_factory=dict)
    user_identity: dict[str, str] = field(default_factory=dict)
    protocol_version: str = "1.00"


def _require_str(data: Mapping[str, Any], name: str, path: str, problems: list[str]) -> str:
    value = data.get(name)
    if not isinstance(value, str):
        problems.append(f"{path}{name} must be a string")
        return ""
    return value


def _require_object(data: Mapping[str, Any], name: str, problems: list[str]) -> Optional[Mapping[str, Any]]:
    value = data.get(name)
    if not isinstance(value, Mapping):
        problems.append(f"{name} must be an object")
        return None
    return value


def _require_fields(data: Optional[Mapping[str, Any]], names: tuple[str, ...], path: str, problems: list[str]) -> dict[str, str]:
    if data is None:
        return {}
    return {name: _require_str(data, name, path, problems) for name in names}


def _load_json(raw: Union[bytes, str, Mapping[str, Any]], problems: list[str]) -> Any:
    if isinstance(raw, Mapping):
        return raw
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        problems.append(f"not valid JSON: {e}")
        return None


def parse_credential(raw: Union[bytes, str, Mapping[str, Any]], path: str = "") -> ParseResult[Credential]:
    """Parse one {clientId, apiKey} entry from JSON text or a decoded mapping."""
    problems: list[str] = []
    data = _load_json(raw, problems)
    if problems:
        return ParseResult.failure(problems)
    if not isinstance(data, Mapping):
        return ParseResult.failure([f"{path or 'credential'} must be an object"])

    client_id = _require_str(data, "clientId", path, problems)
    api_key = _require_str(data, "apiKey", path, problems)
    if problems:
        return ParseResult.failure(problems)
    return ParseResult.success(Credential(client_id=client_id, api_key=api_key))


def parse_credentials_file(raw: Union[bytes, str, Mapping[str, Any]]) -> ParseResult[CredentialsFile]:
    """
    Parse a credentials document.

    Fails closed on invalid JSON, missing or mistyped fields, and duplicate
    clientIds. Unknown fields are dropped.
    """
    problems: list[str] = []
    data = _load_json(raw, problems)
    if problems:
        return ParseResult.failure(problems)
    if not isinstance(data, Mapping):
        return ParseResult.failure(["document must be a JSON object"])

    last_updated = _require_str(data, "lastUpdated", "", problems)

    entries = data.get("credentials")
    if not isinstance(entries, list):
        problems.append("credentials must be an array")
        entries = []

    credentials: list[Credential] = []
    seen: set[str] = set()
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            problems.append(f"credentials[{index}] must be an object")
            continue
        result = parse_credential(entry, path=f"credentials[{index}].")
        if not result.ok:
            problems.extend(result.problems)
            continue
        if result.value.client_id in seen:
            problems.append(f"credentials[{index}].clientId '{result.value.client_id}' is duplicated")
            continue
        seen.add(result.value.client_id)
        credentials.append(result.value)

    if problems:
        return ParseResult.failure(problems)
    return ParseResult.success(
        CredentialsFile(credentials=tuple(credentials), last_updated=last_updated)
    )


def parse_transform_request(event: Any) -> ParseResult[TransformRequest]:
    """Parse and validate an S3 Object Lambda event envelope."""
    if not isinstance(event, Mapping):
        return ParseResult.failure(["event must be an object"])

    problems: list[str] = []
    request_id = _require_str(event, "xAmzRequestId", "", problems)
    protocol_version = _require_str(event, "protocolVersion", "", problems)

    context_values = _require_fields(
        _require_object(event, "getObjectContext", problems),
        GET_OBJECT_CONTEXT_FIELDS, "getObjectContext.", problems,
    )
    configuration_values = _require_fields(
        _require_object(event, "configuration", problems),
        CONFIGURATION_FIELDS, "configuration.", problems,
    )
    identity_values = _require_fields(
        _require_object(event, "userIdentity", problems),
        USER_IDENTITY_FIELDS, "userIdentity.", problems,
    )

    url = ""
    headers: Any = None
    user_request = _require_object(event, "userRequest", problems)
    if user_request is not None:
        url = _require_str(user_request, "url", "userRequest.", problems)
        headers = user_request.get("headers")
        if not isinstance(headers, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in headers.items()
        ):
            problems.append("userRequest.headers must be an object of strings")

    if problems:
        return ParseResult.failure(problems)

    return ParseResult.success(TransformRequest(
        request_id=request_id,
        input_s3_url=context_values["inputS3Url"],
        output_route=context_values["outputRoute"],
        output_token=context_values["outputToken"],
        url=url,
        headers=dict(headers),
        configuration=configuration_values,
        user_identity=identity_values,
        protocol_version=protocol_version,
    ))
