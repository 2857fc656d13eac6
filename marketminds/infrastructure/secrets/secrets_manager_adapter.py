"""
Infrastructure adapter: AWS Secrets Manager → ISecretStore.

load_into_env() is called once at startup (before the Langfuse handler is
built) so LANGFUSE_* keys stored as a JSON secret are available process-wide.
"""

import json
import logging
import os

import boto3

from marketminds.domain.ports.secret_store_port import ISecretStore

logger = logging.getLogger(__name__)


class SecretsManagerAdapter(ISecretStore):
    """Fetches and deserializes secrets from AWS Secrets Manager."""

    def __init__(self, region: str | None = None, client=None) -> None:
        self._client = client or boto3.client(
            "secretsmanager",
            region_name=region or os.environ.get("AWS_DEFAULT_REGION", "us-east-1"),
        )

    def get_secret(self, secret_id: str) -> dict:
        """Fetch and deserialize a JSON secret by ARN or name."""
        response = self._client.get_secret_value(SecretId=secret_id)
        return json.loads(response["SecretString"])

    def load_into_env(self, secret_id: str, override: bool = False) -> list[str]:
        """Inject the secret's key-value pairs into os.environ.

        Variables already set are kept unless *override* is true. Only key
        names are logged, never values.
        """
        loaded = []
        for key, value in self.get_secret(secret_id).items():
            if override or key not in os.environ:
                os.environ[key] = str(value)
                loaded.append(key)
        logger.info("Loaded %d secret keys into environment: %s", len(loaded), ", ".join(loaded))
        return loaded
