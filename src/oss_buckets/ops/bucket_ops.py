"""Bucket manager: bucket lifecycle and sub-resource operations.

``BucketOps`` is the entry point of the package. It keeps no state between
calls beyond its configuration and transport: every result is fetched fresh
from the service, which is the only source of truth. Each operation is one
request (puts that may create the bucket are two) and every failure is
raised immediately as a typed error, with no retries.

Example:
    >>> ops = BucketOps(config=ClientConfig(default_region="oss-cn-hangzhou"))
    >>> ops.put_bucket("my-bucket", "oss-cn-hangzhou").status
    200
    >>> ops.put_bucket_acl("my-bucket", "oss-cn-hangzhou", "public-read").status
    200
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Tuple, Union

from oss_buckets.config.client import ClientConfig
from oss_buckets.domain.bucket_info import Bucket_Listing, Bucket_Result
from oss_buckets.domain.response_meta import Response_Meta
from oss_buckets.models.inputs import BucketAclParams, ListBucketsParams, parse_params, validate_bucket_name

from . import documents
from .exceptions import BucketAlreadyExistsError, MalformedRequestError, UnrecognizedServiceError
from .response_interpreter import SUCCESS_STATUSES, interpret, response_meta
from .subresources import (
    Bucket_Acl_Ops,
    Bucket_Lifecycle_Ops,
    Bucket_Logging_Ops,
    Bucket_Referer_Ops,
    Bucket_Website_Ops,
)

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET

    from oss_buckets.clients.transport import Transport

logger = logging.getLogger(__name__)


OWNED_BY_YOU_CODE = "BucketAlreadyOwnedByYou"


class BucketOps(
    Bucket_Acl_Ops,
    Bucket_Logging_Ops,
    Bucket_Website_Ops,
    Bucket_Lifecycle_Ops,
    Bucket_Referer_Ops,
):
    """Region-aware bucket management against the object-storage service."""

    def __init__(self, transport: Optional["Transport"] = None, config: Optional[ClientConfig] = None) -> None:
        """Initialize the bucket manager.

        Args:
            transport: Transport used for every request; a requests-backed
                transport built from ``config`` when omitted
            config: Client configuration; read from the environment when omitted

        Raises:
            ValidationError: If the configuration is invalid
        """
        self.config = config or ClientConfig.with_defaults()
        self.config.validate_or_raise()
        if transport is None:
            from oss_buckets.clients.transport import RequestsTransport

            transport = RequestsTransport.from_config(self.config)
        self._transport = transport

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------

    def _region(self, region: Optional[str], required: bool = False) -> str:
        if not region:
            if required:
                raise MalformedRequestError("A region is required for this operation", context={"field": "region"})
            region = self.config.default_region
        if not self.config.is_known_region(region):
            raise MalformedRequestError(
                f"Unrecognized region {region!r}",
                context={"field": "region", "value": region, "known": sorted(self.config.regions)},
            )
        return region

    def _target(self, bucket: str, region: Optional[str], required: bool = False) -> Tuple[str, str]:
        return validate_bucket_name(bucket), self._region(region, required=required)

    def _request(
        self,
        method: str,
        region: str,
        bucket: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        expected: Iterable[int] = SUCCESS_STATUSES,
    ) -> Tuple[Optional["ET.Element"], Response_Meta]:
        request_headers = dict(headers or {})
        if body is not None:
            request_headers.setdefault("Content-Type", "application/xml")
        logger.debug(f"{method} bucket={bucket} region={region} params={dict(params or {})}")
        response = self._transport.execute(method, region, bucket, params=params, headers=request_headers, body=body)
        root = interpret(response, expected, bucket=bucket)
        return root, response_meta(response)

    # ------------------------------------------------------------------
    # Bucket lifecycle
    # ------------------------------------------------------------------

    def ensure_bucket(self, name: str, region: str, acl: Optional[str] = None) -> Bucket_Result:
        """Locate or create a bucket in ``region``.

        This is the single path through which any operation may create a
        bucket. A bucket that already exists in ``region`` is left unchanged
        and reported with status 200; one that exists anywhere else fails.

        Args:
            name: Bucket name
            region: Region the bucket must live in
            acl: Canned ACL applied if the bucket is created

        Returns:
            Bucket_Result for the located or created bucket

        Raises:
            MalformedRequestError: Invalid name, region or ACL
            BucketAlreadyExistsError: The name exists in another region
        """
        name, region = self._target(name, region, required=True)
        headers = {}
        if acl is not None:
            headers["x-oss-acl"] = parse_params(BucketAclParams, {"acl": acl}, "acl").acl

        try:
            _, meta = self._request(
                "PUT",
                region,
                name,
                headers=headers,
                body=documents.create_bucket_document(region),
                expected=(200,),
            )
        except UnrecognizedServiceError as e:
            if e.code != OWNED_BY_YOU_CODE:
                raise
            location = self.get_bucket_location(name, region)
            if location != region:
                raise BucketAlreadyExistsError(
                    status=409,
                    request_id=e.request_id,
                    context={"bucket": name, "region": region, "location": location},
                ) from e
            logger.debug(f"Bucket {name} already exists in {region}")
            meta = Response_Meta(status=200, headers={}, request_id=e.request_id)

        logger.info(f"Bucket {name} is present in {region}")
        return Bucket_Result(bucket=name, response=meta)

    def put_bucket(self, name: str, region: str, acl: Optional[str] = None) -> Bucket_Result:
        """Create a bucket, succeeding again if it already exists in ``region``.

        Raises:
            BucketAlreadyExistsError: The name exists in a different region
                (status 409, region can't be modified)
        """
        return self.ensure_bucket(name, region, acl=acl)

    def delete_bucket(self, name: str, region: Optional[str] = None) -> Bucket_Result:
        """Delete an empty bucket.

        Deletion never cascades. Both 200 and 204 replies are success.

        Raises:
            NoSuchBucketError: The bucket does not exist
            BucketNotEmptyError: The bucket still contains objects
        """
        name, region = self._target(name, region)
        _, meta = self._request("DELETE", region, name)
        logger.info(f"Deleted bucket {name} in {region}")
        return Bucket_Result(bucket=name, response=meta)

    def get_bucket_location(self, name: str, region: Optional[str] = None) -> Optional[str]:
        """Return the region a bucket lives in."""
        name, region = self._target(name, region)
        root, _ = self._request("GET", region, name, params={"location": ""}, expected=(200,))
        return documents.parse_location(root)

    def list_buckets(
        self,
        options: Union[Mapping[str, Any], ListBucketsParams, None] = None,
        region: Optional[str] = None,
    ) -> Bucket_Listing:
        """List one page of the account's buckets.

        Args:
            options: ``max_keys`` (also ``max-keys``/``maxKeys``), ``marker``
                and ``prefix``
            region: Region endpoint to ask; defaults to the configured region

        Returns:
            Bucket_Listing whose ``next_marker`` is set only when truncated.
            Following it is up to the caller.
        """
        params = parse_params(ListBucketsParams, options, "options")
        region = self._region(region)
        root, meta = self._request("GET", region, None, params=params.to_query(), expected=(200,))
        buckets, owner, is_truncated, next_marker, prefix, marker, max_keys = documents.parse_bucket_listing(root)
        return Bucket_Listing(
            buckets=tuple(buckets),
            owner=owner,
            is_truncated=is_truncated,
            next_marker=next_marker,
            response=meta,
            prefix=prefix,
            marker=marker,
            max_keys=max_keys,
        )
