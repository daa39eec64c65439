"""Request signing with botocore's SigV4 signer.

The service accepts S3-compatible Signature Version 4 requests, so signing is
delegated to botocore. Credentials come from a boto3 session, which resolves
them from the environment, shared credentials files or instance metadata.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import boto3
from botocore.auth import S3SigV4Auth
from botocore.awsrequest import AWSRequest

from oss_buckets.config.base import ConfigurationError


logger = logging.getLogger(__name__)


class SigningError(ConfigurationError):
    """Raised when no credentials are available to sign requests."""

    pass


class SigV4Signer:
    """Signs outgoing requests for a given signing region."""

    def __init__(self, credentials: Any = None, profile_name: Optional[str] = None):
        """Initialize the signer.

        Args:
            credentials: botocore credentials; resolved through boto3 when omitted
            profile_name: Credentials profile used when resolving through boto3

        Raises:
            SigningError: When no credentials can be resolved
        """
        if credentials is None:
            try:
                session = boto3.Session(profile_name=profile_name)
                credentials = session.get_credentials()
            except Exception as e:
                raise SigningError(f"Failed to resolve signing credentials: {e}") from e
        if credentials is None:
            raise SigningError(
                "No credentials found to sign requests. Set AWS_ACCESS_KEY_ID and "
                "AWS_SECRET_ACCESS_KEY, configure a profile, or disable signing (OSS_SIGN_REQUESTS=0)"
            )
        self._credentials = credentials

    def sign(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        region: str,
    ) -> Dict[str, str]:
        """Return ``headers`` extended with the SigV4 authorization headers.

        Args:
            method: HTTP method
            url: Full request URL including the query string
            headers: Request headers to sign
            body: Request body
            region: Signing region

        Returns:
            New header dictionary including Authorization and X-Amz-* headers
        """
        request = AWSRequest(method=method, url=url, data=body or b"", headers=dict(headers))
        S3SigV4Auth(self._credentials, "s3", region).add_auth(request)
        logger.debug(f"Signed {method} {url} for region {region}")
        return dict(request.headers.items())
