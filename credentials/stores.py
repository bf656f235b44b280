"""
Store adapters: the secret store, the object store and the response writer.

The abstract classes are what the reconciler, rewriter and orchestrator
depend on. The boto3-backed implementations translate botocore exceptions
into the credentials.errors hierarchy:

    - a missing parameter or object  -> NotFoundError
    - any other ClientError          -> StoreUnavailable (with the AWS code)
    - missing credentials / network  -> StoreUnavailable
"""

import logging
from abc import ABC, abstractmethod

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from .errors import NotFoundError, StoreUnavailable

logger = logging.getLogger(__name__)

SECRET_KEY_TEMPLATE = "/pii/{client_id}/credentials"
JSON_CONTENT_TYPE = "application/json"

_MISSING_CODES = frozenset({"ParameterNotFound", "NoSuchKey", "404"})


def secret_key_for(client_id: str) -> str:
    """Secret store key holding the canonical credential for a client."""
    return SECRET_KEY_TEMPLATE.format(client_id=client_id)


def _translate(store: str, key: str, error: Exception) -> Exception:
    """Map a botocore exception onto NotFoundError / StoreUnavailable."""
    if isinstance(error, ClientError):
        error_code = error.response.get("Error", {}).get("Code", "Unknown")
        error_message = error.response.get("Error", {}).get("Message", str(error))
        if error_code in _MISSING_CODES:
            return NotFoundError(store, key)
        return StoreUnavailable(store, error_code, error_message)
    if isinstance(error, NoCredentialsError):
        return StoreUnavailable(store, "NoCredentials", "AWS credentials not found")
    return StoreUnavailable(store, type(error).__name__, str(error))


class SecretStore(ABC):
    """Canonical secret storage keyed by secret_key_for(client_id)."""

    @abstractmethod
    def get(self, key: str) -> str:
        """
        Return the stored value.

        Raises:
            NotFoundError: if nothing is stored under key
            StoreUnavailable: if the store cannot be reached
        """

    @abstractmethod
    def put(self, key: str, value: str, overwrite: bool = True) -> None:
        """Store value under key; last write wins."""


class ObjectStore(ABC):
    """Blob storage for credentials documents."""

    @abstractmethod
    def get(self, key: str) -> bytes:
        """
        Return the object body.

        Raises:
            NotFoundError: if the object does not exist
            StoreUnavailable: if the store fails or returns no body
        """

    @abstractmethod
    def put(self, key: str, body: bytes, content_type: str = JSON_CONTENT_TYPE) -> None:
        """Write body at key, overwriting any existing object."""


class ResponseWriter(ABC):
    """Delivers the transformed object back to the caller of the transform."""

    @abstractmethod
    def deliver(self, route: str, token: str, body: bytes, content_type: str = JSON_CONTENT_TYPE) -> None:
        pass


class ParameterStoreSecretStore(SecretStore):
    """
    SecretStore backed by AWS Systems Manager Parameter Store.

    Args:
        client: A boto3 "ssm" client.
        parameter_type: "String" or "SecureString" for newly written values.
    """

    store_name = "ssm"

    def __init__(self, client, parameter_type: str = "String"):
        self._client = client
        self._parameter_type = parameter_type

    def get(self, key: str) -> str:
        try:
            response = self._client.get_parameter(Name=key, WithDecryption=True)
        except (ClientError, BotoCoreError) as e:
            raise _translate(self.store_name, key, e) from e

        value = response.get("Parameter", {}).get("Value")
        if value is None:
            raise NotFoundError(self.store_name, key)
        return value

    def put(self, key: str, value: str, overwrite: bool = True) -> None:
        try:
            self._client.put_parameter(
                Name=key,
                Value=value,
                Type=self._parameter_type,
                Overwrite=overwrite,
            )
        except (ClientError, BotoCoreError) as e:
            raise _translate(self.store_name, key, e) from e
        logger.debug(f"Stored parameter {key}")


class S3ObjectStore(ObjectStore):
    """
    ObjectStore backed by a single S3 bucket.

    Args:
        client: A boto3 "s3" client.
        bucket: The bucket holding the credentials documents.
    """

    store_name = "s3"

    def __init__(self, client, bucket: str):
        self._client = client
        self.bucket = bucket

    def get(self, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key)
            body = response.get("Body")
            if body is None:
                raise StoreUnavailable(self.store_name, "EmptyBody", "No body in S3 response")
            return body.read()
        except (ClientError, BotoCoreError) as e:
            raise _translate(self.store_name, key, e) from e

    def put(self, key: str, body: bytes, content_type: str = JSON_CONTENT_TYPE) -> None:
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise _translate(self.store_name, key, e) from e
        logger.debug(f"Wrote s3://{self.bucket}/{key}")

    def list_keys(self, prefix: str = "", limit: int = 50) -> list[str]:
        """Object keys in the bucket, optionally filtered by prefix."""
        params = {"Bucket": self.bucket, "MaxKeys": limit}
        if prefix:
            params["Prefix"] = prefix
        try:
            response = self._client.list_objects_v2(**params)
        except (ClientError, BotoCoreError) as e:
            raise _translate(self.store_name, prefix or self.bucket, e) from e
        return [obj["Key"] for obj in response.get("Contents", [])]


class ObjectLambdaResponseWriter(ResponseWriter):
    """ResponseWriter that answers an S3 Object Lambda GetObject request."""

    store_name = "s3-object-lambda"

    def __init__(self, client):
        self._client = client

    def deliver(self, route: str, token: str, body: bytes, content_type: str = JSON_CONTENT_TYPE) -> None:
        try:
            self._client.write_get_object_response(
                RequestRoute=route,
                RequestToken=token,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise _translate(self.store_name, route, e) from e
