"""
Credential Redactor - MCP Server for operators

A local MCP (Model Context Protocol) server that lets an AI agent or an
operator inspect the credentials bucket without ever seeing a secret.

Tools:
    - list_credentials_documents: List credentials documents in the bucket
    - check_credentials_document: Report the masking state of one document

Safety Constraints:
    - Read-only: neither the bucket nor Parameter Store is modified
    - API keys are only ever returned in masked form
    - Listings limited to 50 keys
"""

import os
from functools import lru_cache
from typing import Any

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from credentials import CredentialError, Settings, load_settings
from credentials.aws import get_s3_client, get_ssm_client
from credentials.errors import NotFoundError
from credentials.models import parse_credentials_file
from credentials.stores import ParameterStoreSecretStore, S3ObjectStore, secret_key_for
from redaction import is_masked, mask

# Load environment variables from .env file
load_dotenv()

mcp = FastMCP(
    "credential-redactor",
    instructions="Read-only inspection of masked credentials documents and their SSM records"
)

MAX_RESULTS = 50


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Parse configuration once per server process."""
    return load_settings(os.environ)


@mcp.tool()
def list_credentials_documents(prefix: str = "") -> dict[str, Any]:
    """
    List credentials documents in the configured bucket.

    Args:
        prefix: Optional key prefix, e.g. "credentials/prod/".

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - bucket: The bucket that was listed
        - documents: Object keys (max 50)
        - count: Number of keys returned
    """
    try:
        settings = get_settings()
        store = S3ObjectStore(get_s3_client(settings), settings.bucket_name)
        keys = store.list_keys(prefix, limit=MAX_RESULTS)

        return {
            "status": "success",
            "bucket": settings.bucket_name,
            "documents": keys,
            "count": len(keys),
            "prefix_filter": prefix if prefix else "(none)"
        }

    except CredentialError as e:
        return {
            "status": "error",
            "message": str(e)
        }


@mcp.tool()
def check_credentials_document(object_key: str) -> dict[str, Any]:
    """
    Report whether a credentials document is fully masked at rest.

    For every entry, shows the masked API key, whether the stored document
    still holds it in plaintext, and whether Parameter Store has a canonical
    record for the client. Plaintext keys are masked before being returned.

    Args:
        object_key: Key of the document in the bucket, e.g. "credentials/prod.json".

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - object_key: The document inspected
        - last_updated: The document's lastUpdated field
        - fully_masked: True if no entry holds a plaintext key
        - credentials: One entry per credential, in document order:
            - client_id
            - api_key: masked form of the stored value
            - masked_at_rest: False if the document holds the plaintext key
            - has_secret_record: True if /pii/{client_id}/credentials exists
    """
    try:
        settings = get_settings()
        object_store = S3ObjectStore(get_s3_client(settings), settings.bucket_name)
        secret_store = ParameterStoreSecretStore(get_ssm_client(settings), settings.parameter_type)

        document = parse_credentials_file(object_store.get(object_key)).unwrap(
            f"credentials document {object_key}"
        )

        entries = []
        for credential in document.credentials:
            masked_at_rest = is_masked(credential.api_key)
            try:
                secret_store.get(secret_key_for(credential.client_id))
                has_secret_record = True
            except NotFoundError:
                has_secret_record = False

            entries.append({
                "client_id": credential.client_id,
                "api_key": credential.api_key if masked_at_rest else mask(credential.api_key),
                "masked_at_rest": masked_at_rest,
                "has_secret_record": has_secret_record
            })

        return {
            "status": "success",
            "object_key": object_key,
            "last_updated": document.last_updated,
            "fully_masked": all(entry["masked_at_rest"] for entry in entries),
            "credentials": entries
        }

    except CredentialError as e:
        return {
            "status": "error",
            "object_key": object_key,
            "message": str(e)
        }


if __name__ == "__main__":
    from credentials.log import configure_logging

    configure_logging(get_settings().log_level)
    # Run the MCP server using stdio transport
    mcp.run()
