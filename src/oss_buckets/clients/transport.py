"""HTTP transport for bucket requests.

The bucket manager talks to the service only through the ``Transport``
protocol: one request in, one ``Raw_Response`` out, or a
``TransportFailureError`` when no response was obtained. ``RequestsTransport``
is the production implementation on top of ``requests``; tests substitute
an in-memory implementation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol

import requests

from oss_buckets.config.client import ClientConfig
from oss_buckets.ops.exceptions import TransportFailureError

from .signing import SigV4Signer


logger = logging.getLogger(__name__)


USER_AGENT = "oss-buckets-python"


@dataclass(frozen=True)
class Raw_Response:
    """Unparsed service response.

    Attributes:
        status: HTTP status code
        headers: Response headers with lower-cased names
        body: Raw response body
    """

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class Transport(Protocol):
    """Executes a single bucket-level request against a region."""

    def execute(
        self,
        method: str,
        region: str,
        bucket: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> Raw_Response: ...


class RequestsTransport:
    """Transport backed by a ``requests.Session``.

    The session is shared by every call and is not modified; the user agent
    is sent per request. No other state is kept between requests, and no
    request is retried.
    """

    def __init__(
        self,
        config: ClientConfig,
        session: Optional[requests.Session] = None,
        signer: Optional[SigV4Signer] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._signer = signer

    @classmethod
    def from_config(cls, config: ClientConfig, session: Optional[requests.Session] = None) -> RequestsTransport:
        """Build a transport, resolving a signer when the config asks for one."""
        signer = SigV4Signer(profile_name=config.profile_name) if config.sign_requests else None
        return cls(config, session=session, signer=signer)

    def execute(
        self,
        method: str,
        region: str,
        bucket: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
    ) -> Raw_Response:
        endpoint, path = self._config.bucket_address(bucket, region)
        request_headers = {"User-Agent": USER_AGENT, **dict(headers or {})}
        prepared = self._session.prepare_request(
            requests.Request(method, f"{endpoint}{path}", params=dict(params or {}), headers=request_headers, data=body)
        )
        if self._signer is not None:
            signed = self._signer.sign(
                prepared.method,
                prepared.url,
                prepared.headers,
                prepared.body,
                self._config.signing_region(region),
            )
            prepared.headers.update(signed)

        logger.debug(f"{prepared.method} {prepared.url}")
        try:
            response = self._session.send(prepared, timeout=self._config.timeout)
        except requests.RequestException as e:
            raise TransportFailureError(
                f"{method} {prepared.url} failed: {e}",
                context={"method": method, "url": prepared.url, "region": region, "bucket": bucket},
            ) from e

        logger.debug(f"{prepared.method} {prepared.url} -> {response.status_code}")
        return Raw_Response(
            status=response.status_code,
            headers={key.lower(): value for key, value in response.headers.items()},
            body=response.content,
        )
