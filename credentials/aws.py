"""boto3 client construction and wiring of the orchestrator's collaborators."""

from typing import Optional

import boto3

from .config import Settings
from .orchestrator import TransformOrchestrator
from .reconciler import CredentialReconciler
from .rewriter import ObjectRewriter
from .stores import ObjectLambdaResponseWriter, ParameterStoreSecretStore, S3ObjectStore


def get_ssm_client(settings: Settings):
    """Create an SSM client; credentials come from the default boto3 chain."""
    return boto3.client("ssm", region_name=settings.region)


def get_s3_client(settings: Settings):
    """Create an S3 client; credentials come from the default boto3 chain."""
    return boto3.client("s3", region_name=settings.region)


def build_orchestrator(settings: Settings, ssm_client=None, s3_client=None) -> TransformOrchestrator:
    """
    Wire the production adapters into a TransformOrchestrator.

    Clients may be passed in (tests, shared sessions); otherwise they are
    created from settings.
    """
    ssm_client = ssm_client or get_ssm_client(settings)
    s3_client = s3_client or get_s3_client(settings)

    object_store = S3ObjectStore(s3_client, settings.bucket_name)
    secret_store = ParameterStoreSecretStore(ssm_client, settings.parameter_type)

    return TransformOrchestrator(
        object_store=object_store,
        reconciler=CredentialReconciler(secret_store, max_workers=settings.max_workers),
        rewriter=ObjectRewriter(object_store),
        response_writer=ObjectLambdaResponseWriter(s3_client),
    )
